import os
import unittest

from pydantic import ValidationError

from nightsky.config import Settings


class _EnvVar:
    """Set an environment variable for the duration of a with-block."""

    def __init__(self, name, value):
        self.name = name
        self.value = value
        self.previous = None

    def __enter__(self):
        self.previous = os.environ.get(self.name)
        os.environ[self.name] = self.value

    def __exit__(self, *exc):
        if self.previous is None:
            os.environ.pop(self.name, None)
        else:
            os.environ[self.name] = self.previous


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        previous = os.environ.pop("NIGHTSKY_FORECAST_SOURCE", None)
        try:
            s = Settings()
            self.assertEqual(s.forecast_source, "open_meteo")
            self.assertEqual(s.forecast_days, 7)
            self.assertEqual(s.good_cloud_cover_threshold, 30)
            self.assertEqual(s.min_consecutive_good_hours, 2)
            self.assertEqual(s.timezone, "auto")
        finally:
            if previous is not None:
                os.environ["NIGHTSKY_FORECAST_SOURCE"] = previous

    def test_forecast_days_override(self):
        with _EnvVar("NIGHTSKY_FORECAST_DAYS", "3"):
            self.assertEqual(Settings().forecast_days, 3)

    def test_source_name_is_normalized(self):
        with _EnvVar("NIGHTSKY_FORECAST_SOURCE", "  File "):
            self.assertEqual(Settings().forecast_source, "file")

    def test_log_level_is_upper_cased(self):
        with _EnvVar("NIGHTSKY_LOG_LEVEL", "debug"):
            self.assertEqual(Settings().log_level, "DEBUG")

    def test_window_length_must_be_positive(self):
        with _EnvVar("NIGHTSKY_MIN_CONSECUTIVE_GOOD_HOURS", "0"):
            with self.assertRaises(ValidationError):
                Settings()


if __name__ == "__main__":
    unittest.main()
