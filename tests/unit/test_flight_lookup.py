"""
Unit tests for the flight lookup provider client
"""
import httpx
import pytest

from trip_planner.config.settings import FlightLookupSettings
from trip_planner.core.exceptions import (
    FieldValidationError,
    NotFoundError,
    ProviderNotConfiguredError,
    UpstreamProviderError,
)
from trip_planner.services.flight_lookup import FlightLookupService, normalize_flight_iata

API_URL = "http://flights.test/v1"


def provider_entry(flight_iata, airline="Korean Air"):
    return {
        "flight_date": "2026-04-13",
        "flight_status": "scheduled",
        "departure": {"airport": "Incheon International", "iata": "ICN", "scheduled": "2026-04-13T09:00:00+09:00"},
        "arrival": {"airport": "Kansai International", "iata": "KIX", "scheduled": "2026-04-13T10:50:00+09:00"},
        "airline": {"name": airline},
        "flight": {"iata": flight_iata, "number": flight_iata[2:]},
    }


def make_service(handler, access_key="test-key"):
    settings = FlightLookupSettings(access_key=access_key, api_url=API_URL)
    return FlightLookupService(settings, transport=httpx.MockTransport(handler))


async def test_unconfigured_provider_is_reported_before_input_checks():
    service = make_service(lambda request: httpx.Response(200, json={"data": []}), access_key=None)
    with pytest.raises(ProviderNotConfiguredError) as exc:
        await service.lookup("not a flight!")
    assert exc.value.status_code == 501


def test_normalize_flight_iata():
    assert normalize_flight_iata("  ke123 ") == "KE123"
    with pytest.raises(FieldValidationError) as exc:
        normalize_flight_iata("KE-123")
    assert exc.value.message == "flightIata is invalid"
    with pytest.raises(FieldValidationError):
        normalize_flight_iata("K1")
    with pytest.raises(FieldValidationError) as exc:
        normalize_flight_iata(None)
    assert exc.value.message == "flightIata is required"


async def test_lookup_sends_query_and_maps_exact_match():
    seen = {}

    def handler(request):
        seen["url"] = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"data": [provider_entry("KE1234"), provider_entry("KE123", "Korean Air Lines")]})

    item = await make_service(handler).lookup("ke123", "2026-04-13")

    assert seen["url"] == f"{API_URL}/flights"
    assert seen["params"] == {"access_key": "test-key", "flight_iata": "KE123", "flight_date": "2026-04-13"}
    assert item.flight_no == "KE123"
    assert item.airline == "Korean Air Lines"
    assert item.from_code == "ICN"
    assert item.to_airport == "Kansai International"
    assert item.depart_at == "2026-04-13T00:00:00.000Z"
    assert item.arrive_at == "2026-04-13T01:50:00.000Z"
    assert item.flight_status == "scheduled"


async def test_lookup_falls_back_to_first_entry():
    def handler(request):
        return httpx.Response(200, json={"data": [provider_entry("KE0123"), provider_entry("KE9999")]})

    item = await make_service(handler).lookup("KE123")
    assert item.flight_no == "KE0123"


async def test_lookup_rejects_bad_date_without_calling_provider():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"data": []})

    with pytest.raises(FieldValidationError) as exc:
        await make_service(handler).lookup("KE123", "2026-13-01")
    assert exc.value.message == "date is invalid"
    assert calls == []


async def test_lookup_with_no_rows_is_not_found():
    service = make_service(lambda request: httpx.Response(200, json={"data": []}))
    with pytest.raises(NotFoundError):
        await service.lookup("KE123")


@pytest.mark.parametrize("response", [
    httpx.Response(500, text="upstream down"),
    httpx.Response(200, json={"error": {"code": "invalid_access_key"}}),
    httpx.Response(200, text="<html>maintenance</html>"),
    httpx.Response(200, json=["not", "an", "object"]),
])
async def test_provider_failures_are_upstream_errors(response):
    service = make_service(lambda request: response)
    with pytest.raises(UpstreamProviderError) as exc:
        await service.lookup("KE123")
    assert exc.value.status_code == 502


async def test_transport_error_is_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamProviderError):
        await make_service(handler).lookup("KE123")


async def test_lookup_skips_entries_that_are_not_objects():
    def handler(request):
        return httpx.Response(200, json={"data": [None, "KE123", provider_entry("KE123")]})

    item = await make_service(handler).lookup("KE123")
    assert item.flight_no == "KE123"
    assert item.from_code == "ICN"


async def test_lookup_with_only_malformed_entries_is_not_found():
    service = make_service(lambda request: httpx.Response(200, json={"data": [None, 42]}))
    with pytest.raises(NotFoundError):
        await service.lookup("KE123")
