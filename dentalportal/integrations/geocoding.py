"""Address → coordinates lookup against a Nominatim-compatible endpoint.

Failures of any kind (HTTP errors, timeouts, empty results, malformed JSON)
are logged and reported as ``None``; callers decide whether that is fatal.
"""
from __future__ import annotations

import logging
from typing import Protocol

import httpx
from pydantic import BaseModel

from dentalportal.config import Settings

logger = logging.getLogger(__name__)


class Coordinates(BaseModel):
    latitude: float
    longitude: float
    display_name: str | None = None


class Geocoder(Protocol):
    async def geocode(self, address: str) -> Coordinates | None: ...


class NominatimGeocoder:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._url = settings.geocoder_url
        self._timeout = settings.geocoder_timeout_seconds
        self._headers = {
            "User-Agent": settings.geocoder_user_agent,  # required by Nominatim's usage policy
            "Accept": "application/json",
        }
        self._transport = transport

    async def geocode(self, address: str) -> Coordinates | None:
        params = {"q": address, "format": "json", "limit": "1", "addressdetails": "1"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._url, params=params, headers=self._headers)
            if response.status_code >= 400:
                logger.error("Geocoding API error %s for %r", response.status_code, address)
                return None
            results = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Geocoding request failed for %r: %s", address, exc)
            return None

        if not results:
            logger.warning("No coordinates found for location: %s", address)
            return None
        first = results[0]
        try:
            return Coordinates(
                latitude=float(first["lat"]),
                longitude=float(first["lon"]),
                display_name=first.get("display_name"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Unexpected geocoding payload for %r: %s", address, exc)
            return None
