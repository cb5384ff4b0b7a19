"""
Tests for the VATSIM ATC-sessions activity feed.
"""

import httpx
import pytest

from artcc.core.exceptions import ExternalDataError
from artcc.infrastructure.vatsim_client import VatsimActivityFeed, callsign_in_facility

SESSIONS = {
    1001: [
        {"callsign": "DEN_APP", "start": "2026-01-04T18:00:00", "minutes_on_callsign": "95.5"},
        {"callsign": "DEN_1_CTR", "start": "2026-02-10T01:00:00", "minutes_on_callsign": "60"},
        {"callsign": "LAX_TWR", "start": "2026-01-05T18:00:00", "minutes_on_callsign": "300"},
        {"callsign": "DEN_OBS", "start": "2026-01-06T18:00:00", "minutes_on_callsign": "300"},
        {"callsign": "DEN_GND", "start": "2026-03-01T00:10:00", "minutes_on_callsign": "45"},
    ],
    1002: [],
    1003: [
        {"callsign": "DEN_TWR", "start": "2026-01-02T18:00:00", "minutes_on_callsign": "10.4"},
        {"callsign": "DEN_TWR", "start": "2026-02-02T18:00:00", "minutes_on_callsign": "10.4"},
    ],
    1004: [
        {"callsign": "DEN_GND", "start": "2026-01-02T18:00:00", "minutes_on_callsign": "30.5"},
    ],
}


def _transport(requests: list):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        cid = int(request.url.path.split("/")[3])
        if cid not in SESSIONS:
            return httpx.Response(404, json={"detail": "Not found."})
        return httpx.Response(200, json={"count": len(SESSIONS[cid]), "results": SESSIONS[cid]})

    return httpx.MockTransport(handler)


@pytest.mark.parametrize(
    "callsign,expected",
    [
        ("DEN_APP", True),
        ("den_twr", True),
        ("DEN_1_CTR", True),
        ("DEN_OBS", False),
        ("LAX_APP", False),
        ("DEN", False),
    ],
)
def test_callsign_in_facility(callsign, expected):
    assert callsign_in_facility(callsign, ["DEN", "APA"]) is expected


def test_callsign_without_prefixes_matches_everything():
    assert callsign_in_facility("ANY_CTR", []) is True


@pytest.mark.asyncio
async def test_minutes_summed_for_selected_months():
    requests = []
    async with httpx.AsyncClient(transport=_transport(requests)) as client:
        feed = VatsimActivityFeed(client=client, base_url="https://api.test", prefixes=["DEN"])
        minutes = await feed.minutes_online([1001, 1002], ["2026-02", "2026-01"])

    assert minutes == {1001: 156, 1002: 0}
    assert [r.url.path for r in requests] == [
        "/api/ratings/1001/atcsessions/",
        "/api/ratings/1002/atcsessions/",
    ]
    assert requests[0].url.params["start"] == "2026-01-01"


@pytest.mark.asyncio
async def test_minutes_rounded_per_month_before_summing():
    async with httpx.AsyncClient(transport=_transport([])) as client:
        feed = VatsimActivityFeed(client=client, base_url="https://api.test", prefixes=["DEN"])
        minutes = await feed.minutes_online([1003, 1004], ["2026-01", "2026-02"])

    # 10.4 + 10.4 would round to 21 as one total
    assert minutes == {1003: 20, 1004: 31}


@pytest.mark.asyncio
async def test_no_controllers_makes_no_requests():
    requests = []
    async with httpx.AsyncClient(transport=_transport(requests)) as client:
        feed = VatsimActivityFeed(client=client, base_url="https://api.test", prefixes=["DEN"])
        assert await feed.minutes_online([], ["2026-01"]) == {}
    assert requests == []


@pytest.mark.asyncio
async def test_http_error_raises_external_data_error():
    async with httpx.AsyncClient(transport=_transport([])) as client:
        feed = VatsimActivityFeed(client=client, base_url="https://api.test", prefixes=["DEN"])
        with pytest.raises(ExternalDataError) as exc_info:
            await feed.minutes_online([1001, 9999], ["2026-01"])
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_malformed_payload_raises_external_data_error():
    def handler(request):
        return httpx.Response(200, json={"unexpected": []})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        feed = VatsimActivityFeed(client=client, base_url="https://api.test", prefixes=["DEN"])
        with pytest.raises(ExternalDataError):
            await feed.minutes_online([1001], ["2026-01"])


@pytest.mark.asyncio
async def test_transport_error_raises_external_data_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        feed = VatsimActivityFeed(client=client, base_url="https://api.test", prefixes=["DEN"])
        with pytest.raises(ExternalDataError):
            await feed.minutes_online([1001], ["2026-01"])
