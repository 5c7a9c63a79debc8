"""Free-text destination lookup against a Nominatim-style search endpoint."""
from __future__ import annotations

import itertools
import threading
from typing import Optional, Protocol

import requests

from pollen_router.core.config import GeocoderConfig
from pollen_router.core.geodesy import Coordinate


class GeocodingError(RuntimeError):
    """The geocoding service could not be reached or returned garbage."""


class DestinationResolver(Protocol):
    def resolve(self, query: str) -> Optional[Coordinate]:
        ...


class NominatimResolver:
    """Resolve an address or place name to its best-matching coordinate.

    Returns ``None`` when the service has no match. One request per call,
    no retries.
    """

    def __init__(self, config: Optional[GeocoderConfig] = None, session: Optional[requests.Session] = None) -> None:
        self.config = config or GeocoderConfig()
        self.session = session

    def _get(self, params: dict) -> requests.Response:
        getter = self.session.get if self.session is not None else requests.get
        return getter(
            self.config.base_url,
            params=params,
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.timeout_s,
        )

    def resolve(self, query: str) -> Optional[Coordinate]:
        if not query or not query.strip():
            raise ValueError("Destination query must not be empty")
        params = {"format": "json", "q": query.strip(), "limit": 1}
        print(f"[GEOCODE] Looking up '{query.strip()}'")
        try:
            response = self._get(params)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as exc:
            raise GeocodingError(f"Geocoding request failed: {exc}") from exc
        except ValueError as exc:
            raise GeocodingError("Geocoding response was not valid JSON") from exc

        if not data:
            print(f"[GEOCODE] No match for '{query.strip()}'")
            return None
        try:
            best = data[0]
            return Coordinate(float(best["lat"]), float(best["lon"]))
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise GeocodingError(f"Unexpected geocoding payload: {exc}") from exc


class LookupSequencer:
    """Hands out generation tokens so only the newest lookup is applied."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._current = 0
        self._lock = threading.Lock()

    def begin(self) -> int:
        with self._lock:
            self._current = next(self._counter)
            return self._current

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._current
