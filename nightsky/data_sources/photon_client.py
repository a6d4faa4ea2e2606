"""Place search through the Photon geocoder (komoot)."""
from __future__ import annotations

from typing import Any, Dict, List

import requests

from nightsky import config
from nightsky.data_sources.http import shared_session
from nightsky.domain import Place
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="photon_client")

PHOTON_URL = "https://photon.komoot.io/api"

session: requests.Session | None = None


def _get_session() -> requests.Session:
    global session
    if session is None:
        session = shared_session()
    return session


def _feature_to_place(feature: Dict[str, Any]) -> Place | None:
    """Convert one GeoJSON feature; None when it has no usable name or point."""
    props = feature.get("properties") or {}
    coords = (feature.get("geometry") or {}).get("coordinates") or []
    if len(coords) < 2:
        return None

    name = props.get("name") or props.get("street") or props.get("city")
    if not name:
        return None

    address_parts = [
        props.get(key)
        for key in ("street", "city", "state", "country")
        if props.get(key) and props.get(key) != name
    ]
    # GeoJSON order is [lon, lat]
    return Place(name=name, address=", ".join(address_parts), latitude=coords[1], longitude=coords[0])


def search_places(query: str, *, lang: str | None = None, limit: int | None = None) -> List[Place]:
    """Return the places Photon matches for a free-text query."""
    query = query.strip()
    if not query:
        return []

    params = {
        "q": query,
        "lang": lang or config.settings.geocoder_lang,
        "limit": limit or config.settings.geocoder_limit,
    }
    logger.info("Searching places for '%s'", query)
    resp = _get_session().get(PHOTON_URL, params=params, timeout=config.settings.http_timeout_seconds)
    resp.raise_for_status()

    places: List[Place] = []
    for feature in resp.json().get("features", []):
        place = _feature_to_place(feature)
        if place is None:
            logger.debug("Skipping unnamed Photon feature")
            continue
        places.append(place)
    return places
