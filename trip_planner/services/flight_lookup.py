"""
Flight Lookup Service - resolves a flight number through an aviationstack-style
flight data API and maps the answer onto the local flight fields.
"""

import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from trip_planner.config.settings import FlightLookupSettings
from trip_planner.core.exceptions import (
    FieldValidationError,
    NotFoundError,
    ProviderNotConfiguredError,
    UpstreamProviderError,
)
from trip_planner.core.validation import as_date_only, as_optional_string, as_required_string, format_instant
from trip_planner.schemas.resources import FlightLookupResult

logger = logging.getLogger(__name__)

_FLIGHT_IATA_PATTERN = re.compile(r"^[A-Z0-9]{3,8}$")


def normalize_flight_iata(value: Any) -> str:
    """Trim and uppercase a flight number such as ``ke123``."""
    flight_iata = as_required_string(value, "flightIata").upper()
    if not _FLIGHT_IATA_PATTERN.match(flight_iata):
        raise FieldValidationError("flightIata is invalid", field="flightIata")
    return flight_iata


def _canonical_instant(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return format_instant(datetime.fromisoformat(value))
    except ValueError:
        return value


def _section(entry: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = entry.get(key)
    return value if isinstance(value, dict) else {}


def _entry_flight_iata(entry: Dict[str, Any]) -> str:
    flight = _section(entry, "flight")
    return str(flight.get("iata") or "").upper()


def select_entry(entries: List[Dict[str, Any]], flight_iata: str) -> Dict[str, Any]:
    """Exact flight number match, otherwise the first entry."""
    for entry in entries:
        if _entry_flight_iata(entry) == flight_iata:
            return entry
    return entries[0]


def map_entry(entry: Dict[str, Any], flight_iata: str) -> FlightLookupResult:
    departure = _section(entry, "departure")
    arrival = _section(entry, "arrival")
    airline = _section(entry, "airline")
    return FlightLookupResult(
        flight_no=_entry_flight_iata(entry) or flight_iata,
        airline=airline.get("name"),
        from_code=departure.get("iata"),
        from_airport=departure.get("airport"),
        to_code=arrival.get("iata"),
        to_airport=arrival.get("airport"),
        depart_at=_canonical_instant(departure.get("scheduled")),
        arrive_at=_canonical_instant(arrival.get("scheduled")),
        flight_date=entry.get("flight_date"),
        flight_status=entry.get("flight_status"),
    )


class FlightLookupService:
    """Client for the flight data provider."""

    def __init__(
        self,
        settings: FlightLookupSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = settings.api_url.rstrip("/")
        self.access_key = settings.access_key
        self.timeout = settings.timeout_seconds
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.access_key)

    async def lookup(self, flight_iata: Any, flight_date: Any = None) -> FlightLookupResult:
        """
        Look up one flight.

        Args:
            flight_iata: Flight number, e.g. ``KE123``
            flight_date: Optional ``YYYY-MM-DD`` date

        Returns:
            The matching flight mapped to local field names

        Raises:
            ProviderNotConfiguredError: If no access key is configured
            FieldValidationError: If the flight number or date is malformed
            NotFoundError: If the provider has no matching flight
            UpstreamProviderError: If the provider call fails
        """
        if not self.configured:
            raise ProviderNotConfiguredError()

        normalized = normalize_flight_iata(flight_iata)
        date_text = as_optional_string(flight_date, "date")
        params = {"access_key": self.access_key, "flight_iata": normalized}
        if date_text:
            params["flight_date"] = as_date_only(date_text, "date")

        payload = await self._fetch(params)

        if payload.get("error"):
            logger.warning(
                f"Flight provider returned an error for {normalized}",
                extra={"provider_error": payload["error"]},
            )
            raise UpstreamProviderError()

        entries = payload.get("data")
        if not isinstance(entries, list):
            entries = []
        # Non-object entries carry no flight data
        entries = [entry for entry in entries if isinstance(entry, dict)]
        if not entries:
            raise NotFoundError("Flight not found")

        return map_entry(select_entry(entries, normalized), normalized)

    async def _fetch(self, params: Dict[str, str]) -> Dict[str, Any]:
        url = f"{self.api_url}/flights"
        logger.info(f"Looking up flight {params['flight_iata']}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Flight provider request failed: {e}")
            raise UpstreamProviderError()

        if not response.is_success:
            logger.warning(f"Flight provider returned {response.status_code}")
            raise UpstreamProviderError(details={"status": response.status_code})

        try:
            payload = response.json()
        except ValueError:
            logger.warning("Flight provider returned a non-JSON body")
            raise UpstreamProviderError()

        if not isinstance(payload, dict):
            raise UpstreamProviderError()
        return payload
