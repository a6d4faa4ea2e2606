"""Command line for tonight's observing forecast."""

from __future__ import annotations

import datetime as dt
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nightsky.config import settings
from nightsky.data_sources import build_data_source, search_places
from nightsky.domain import ForecastHour, NightReport, Place
from nightsky.ephemeris import compute_astro_info
from nightsky.favorites_store import FavoritesStore, JsonFavoritesStore
from nightsky.forecast_service import get_night_report, upcoming_hours
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="cli")

app = typer.Typer(help="Astronomical observing forecast for tonight", no_args_is_help=True)
favorites_app = typer.Typer(help="Manage favorite places", no_args_is_help=True)
app.add_typer(favorites_app, name="favorites")

console = Console()


def _favorites_store() -> FavoritesStore:
    return JsonFavoritesStore(settings.favorites_path)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(code=1)


def _open_favorites() -> FavoritesStore:
    """Open the favorites store, failing the command on an unreadable file."""
    try:
        return _favorites_store()
    except (OSError, ValueError) as exc:
        logger.error("Could not open favorites: %s", exc)
        _fail(f"Could not read favorites: {exc}")


def _fmt_time(value: dt.datetime | None) -> str:
    return value.strftime("%H:%M") if value else "--:--"


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level (DEBUG, INFO, ...)"),
) -> None:
    """Configure logging before any command runs."""
    setup_logging(level=log_level.upper(), job_name="nightsky", override_existing=True)


def _resolve_place(
    latitude: Optional[float],
    longitude: Optional[float],
    place: Optional[str],
    favorite: Optional[str],
) -> Place:
    """Pick the location from coordinates, a favorite, or the first search hit."""
    if latitude is not None and longitude is not None:
        return Place(name=f"{latitude:.4f}, {longitude:.4f}", latitude=latitude, longitude=longitude)
    if favorite:
        found = _open_favorites().get(favorite)
        if found is None:
            _fail(f"No favorite named '{favorite}'")
        return found
    if place:
        try:
            results = search_places(place)
        except Exception as exc:
            logger.error("Place search failed: %s", exc)
            _fail(f"Search failed: {exc}")
        if not results:
            _fail(f"No place found for '{place}'")
        return results[0]
    _fail("Give --lat and --lon, --place, or --favorite")


def _seeing_style(score: int) -> str:
    if score >= 4:
        return "green"
    if score >= 3:
        return "yellow"
    return "red"


def _render_astro(report: NightReport) -> None:
    sun = report.astro.sun
    moon = report.astro.moon
    console.print(
        f"☀️  Sunset {_fmt_time(sun.sunset)} | Astro dusk {_fmt_time(sun.dusk)} | "
        f"Astro dawn {_fmt_time(sun.dawn)} | Sunrise {_fmt_time(sun.sunrise)}"
    )
    console.print(
        f"{moon.phase_emoji}  Moonrise {_fmt_time(moon.moonrise)} | Moonset {_fmt_time(moon.moonset)} | "
        f"Illumination {moon.illumination:.0f}% ({moon.phase_name})\n"
    )


def _render_night(report: NightReport) -> None:
    night = report.night
    console.print("[bold]🔭 Observing conditions tonight[/bold]")
    window = night.best_window
    if window.found:
        console.print(
            f"  Best window: {window.time_range.start}h to {window.time_range.end}h "
            f"(cloud cover {window.lowest_cloud_cover}%)"
        )
    else:
        console.print(f"  [red]Unfavourable conditions[/red] (cloud cover {night.display_cloud_cover}%)")

    direction = night.wind_direction_label or "N/A"
    console.print(
        f"  Temp {night.nightly_temperature}°C | Humidity {night.nightly_humidity}% | "
        f"Wind {night.nightly_wind_speed} km/h {direction} | Dew point {night.nightly_dew_point}°C"
    )
    console.print(
        f"  Precipitation risk {night.max_precipitation_probability}% | "
        f"Seeing [{_seeing_style(night.seeing_index)}]{night.seeing_index}/5[/]\n"
    )


def _render_hours(hours: list[ForecastHour]) -> None:
    if not hours:
        console.print("[dim]No upcoming hours in the forecast.[/dim]")
        return
    table = Table(title="Next hours")
    for column in ("Hour", "Clouds", "Low/Mid/High", "Rain", "Wind", "Humidity", "Temp", "Dew", "Seeing"):
        table.add_column(column, justify="right")
    for h in hours:
        table.add_row(
            h.time.strftime("%Hh"),
            f"{h.cloud_cover}%",
            f"{h.cloud_cover_low}/{h.cloud_cover_mid}/{h.cloud_cover_high}",
            f"{h.precipitation_probability}%",
            f"{h.wind_speed:.1f} km/h",
            f"{h.humidity}%",
            f"{h.temperature:.1f}°C",
            f"{h.dew_point:.1f}°C",
            f"[{_seeing_style(h.seeing)}]{h.seeing}[/]",
        )
    console.print(table)


@app.command("tonight")
def tonight(
    latitude: Optional[float] = typer.Option(None, "--lat", help="Latitude in decimal degrees"),
    longitude: Optional[float] = typer.Option(None, "--lon", help="Longitude in decimal degrees"),
    place: Optional[str] = typer.Option(None, "--place", "-p", help="Search a place by name"),
    favorite: Optional[str] = typer.Option(None, "--favorite", "-f", help="Use a saved favorite"),
    date: Optional[str] = typer.Option(None, "--date", help="Night starting on YYYY-MM-DD (default: today)"),
    hours: int = typer.Option(settings.table_hours, "--hours", min=0, help="Rows in the hourly table"),
    as_json: bool = typer.Option(False, "--json", help="Print the full report as JSON"),
) -> None:
    """Show the best observing window and night summary."""
    location = _resolve_place(latitude, longitude, place, favorite)

    day = None
    if date:
        try:
            day = dt.date.fromisoformat(date)
        except ValueError:
            _fail(f"Invalid date '{date}', expected YYYY-MM-DD")

    try:
        report = get_night_report(
            location.latitude,
            location.longitude,
            day=day,
            data_source=build_data_source(settings),
            astronomy=compute_astro_info,
            settings=settings,
            place_name=location.name,
        )
    except Exception as exc:
        logger.error("Failed to build night report: %s", exc)
        _fail(f"Could not get the forecast: {exc}")

    if as_json:
        console.print_json(report.model_dump_json())
        return

    star = "⭐" if _open_favorites().is_favorite(location) else ""
    console.print(f"\n[bold cyan]Night of {report.day.isoformat()} at {location.name}[/bold cyan] {star}")
    if location.address:
        console.print(f"[dim]{location.address}[/dim]")
    _render_astro(report)
    _render_night(report)
    _render_hours(upcoming_hours(report.hours, report.generated_at, count=hours))


@app.command("search")
def search(query: str = typer.Argument(..., help="Place name to look up")) -> None:
    """Search places by name."""
    try:
        results = search_places(query)
    except Exception as exc:
        logger.error("Place search failed: %s", exc)
        _fail(f"Search failed: {exc}")

    if not results:
        console.print(f"No place found for '{query}'")
        return
    table = Table(title=f"Places matching '{query}'")
    table.add_column("Name")
    table.add_column("Address")
    table.add_column("Lat", justify="right")
    table.add_column("Lon", justify="right")
    for p in results:
        table.add_row(p.name, p.address, f"{p.latitude:.4f}", f"{p.longitude:.4f}")
    console.print(table)


@favorites_app.command("list")
def favorites_list() -> None:
    """List saved places."""
    places = _open_favorites().list()
    if not places:
        console.print("No favorites yet.")
        return
    for p in places:
        console.print(f"⭐ {p.name} ({p.latitude:.4f}, {p.longitude:.4f}) {p.address}")


@favorites_app.command("add")
def favorites_add(
    name: str = typer.Argument(..., help="Display name for the place"),
    latitude: float = typer.Option(..., "--lat", help="Latitude in decimal degrees"),
    longitude: float = typer.Option(..., "--lon", help="Longitude in decimal degrees"),
    address: str = typer.Option("", "--address", help="Optional address text"),
) -> None:
    """Save a place as a favorite."""
    store = _open_favorites()
    try:
        place = Place(name=name, address=address, latitude=latitude, longitude=longitude)
        added = store.add(place)
    except (OSError, ValueError) as exc:
        logger.error("Could not add favorite %s: %s", name, exc)
        _fail(f"Could not add {name}: {exc}")
    if added:
        console.print(f"[green]✓[/green] Added {name}")
    else:
        console.print(f"{name} is already a favorite")


@favorites_app.command("remove")
def favorites_remove(name: str = typer.Argument(..., help="Name of the favorite to remove")) -> None:
    """Remove a favorite by name."""
    store = _open_favorites()
    place = store.get(name)
    if place is None:
        _fail(f"No favorite named '{name}'")
    try:
        store.remove(place)
    except OSError as exc:
        logger.error("Could not save favorites: %s", exc)
        _fail(f"Could not remove {place.name}: {exc}")
    console.print(f"[green]✓[/green] Removed {place.name}")


if __name__ == "__main__":
    app()
