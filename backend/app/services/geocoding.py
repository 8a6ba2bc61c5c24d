"""
geocoding.py — Reverse Geocoding Proxy Client (Nominatim)

Responsibilities:
- Validate the lat/lon query pair.
- Forward to Nominatim with the User-Agent its usage policy requires.
- Hand upstream errors back unchanged (status + body) so the client sees
  what Nominatim said.
- No caching, no retries.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import requests

from app.core.config import settings
from app.core.errors import ValidationFailed
from app.core.logging import get_logger


logger = get_logger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch address from Nominatim"


class GeocodingError(RuntimeError):
    """Upstream failure carrying the status and body to return to the caller."""

    def __init__(self, status_code: int, payload: Any):
        super().__init__(f"Nominatim error {status_code}")
        self.status_code = status_code
        self.payload = payload


@dataclass(frozen=True)
class GeocodingSettings:
    reverse_url: str
    user_agent: str
    timeout_seconds: float

    @classmethod
    def from_app_settings(cls) -> "GeocodingSettings":
        return cls(
            reverse_url=settings.NOMINATIM_REVERSE_URL,
            user_agent=settings.NOMINATIM_USER_AGENT,
            timeout_seconds=settings.NOMINATIM_TIMEOUT_SECONDS,
        )


def parse_coordinates(lat: Optional[str], lon: Optional[str]) -> Tuple[float, float]:
    """Validate raw query values; raises ValidationFailed."""
    if not lat or not lon:
        raise ValidationFailed("Latitude and longitude are required")

    values = {}
    problems = {}
    for name, raw, limit in (("lat", lat, 90.0), ("lon", lon, 180.0)):
        try:
            value = float(raw)
        except ValueError:
            problems[name] = "Must be a number."
            continue
        if not math.isfinite(value) or abs(value) > limit:
            problems[name] = f"Must be between -{limit:g} and {limit:g}."
            continue
        values[name] = value

    if problems:
        raise ValidationFailed("Invalid latitude or longitude", fields=problems)
    return values["lat"], values["lon"]


class NominatimClient:
    """
    Thin wrapper over `requests.Session` with the Nominatim defaults.
    """

    def __init__(self, session: Optional[requests.Session] = None, config: Optional[GeocodingSettings] = None):
        self._session = session or requests.Session()
        self._config = config or GeocodingSettings.from_app_settings()
        self._session.headers.update({"User-Agent": self._config.user_agent, "Accept": "application/json"})

    def reverse(self, lat: float, lon: float) -> Dict[str, Any]:
        try:
            response = self._session.get(
                self._config.reverse_url,
                params={"format": "json", "lat": lat, "lon": lon},
                timeout=self._config.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error("Error fetching from Nominatim (lat=%s, lon=%s): %s", lat, lon, e)
            raise GeocodingError(500, {"error": FETCH_FAILED_MESSAGE}) from e

        if not response.ok:
            logger.warning("Nominatim returned %s for lat=%s, lon=%s", response.status_code, lat, lon)
            raise GeocodingError(response.status_code, _body_of(response))

        try:
            return response.json()
        except ValueError as e:
            logger.error("Nominatim returned a non-JSON body for lat=%s, lon=%s", lat, lon)
            raise GeocodingError(500, {"error": FETCH_FAILED_MESSAGE}) from e


def _body_of(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"error": response.text or FETCH_FAILED_MESSAGE}


def get_geocoding_client() -> NominatimClient:
    return NominatimClient()
