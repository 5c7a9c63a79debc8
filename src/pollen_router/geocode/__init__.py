"""Destination lookup helpers."""

from pollen_router.geocode.resolver import (
    DestinationResolver,
    GeocodingError,
    LookupSequencer,
    NominatimResolver,
)

__all__ = [
    "DestinationResolver",
    "GeocodingError",
    "LookupSequencer",
    "NominatimResolver",
]
