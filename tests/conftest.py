"""
Shared fixtures: station time zone, frozen instants, canned provider payloads
and in-memory stand-ins for the NOAA and USGS clients.
"""
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from features.common.exceptions.provider_exceptions import ProviderUnavailableError

STATION_TZ = ZoneInfo("America/New_York")


def local(hour: int, minute: int = 0, day: int = 1) -> datetime:
    """Station-local instant on 2024-05-01 (EDT, UTC-4)."""
    return datetime(2024, 5, day, hour, minute, tzinfo=STATION_TZ)


TIDE_RECORDS = [
    {"t": "2024-05-01 02:12", "v": "4.512", "type": "H"},
    {"t": "2024-05-01 08:00", "v": "0.231", "type": "L"},
    {"t": "2024-05-01 14:00", "v": "4.870", "type": "H"},
    {"t": "2024-05-01 20:30", "v": "0.402", "type": "L"},
    {"t": "2024-05-02 02:50", "v": "4.610", "type": "H"},
]

CURRENT_RECORDS = [
    {"Time": "2024-05-01 10:00", "Velocity_Major": "-1.0", "Type": "ebb",
     "meanFloodDir": "11", "meanEbbDir": "183", "Bin": "13"},
    {"Time": "2024-05-01 12:00", "Velocity_Major": "1.0", "Type": "flood",
     "meanFloodDir": "11", "meanEbbDir": "183", "Bin": "13"},
    {"Time": "2024-05-01 15:00", "Velocity_Major": "0.0", "Type": "slack",
     "meanFloodDir": "11", "meanEbbDir": "183", "Bin": "13"},
]


def usgs_payload(discharge_values=("15200", "15400"), gage_values=("3.12", "3.15"), site_name="HUDSON RIVER ABOVE LOCK 1 NEAR WATERFORD NY"):
    def series(code, values):
        return {
            "sourceInfo": {
                "siteName": site_name,
                "geoLocation": {"geogLocation": {"srs": "EPSG:4326", "latitude": 42.8, "longitude": -73.67}},
            },
            "variable": {"variableCode": [{"value": code}], "noDataValue": -999999.0},
            "values": [{
                "value": [
                    {"value": value, "qualifiers": ["P"], "dateTime": f"2024-05-01T10:{15 * i:02d}:00.000-04:00"}
                    for i, value in enumerate(values)
                ]
            }],
        }

    return {"value": {"timeSeries": [series("00060", discharge_values), series("00065", gage_values)]}}


class FakeNOAAClient:
    """Returns canned CO-OPS records, or raises when given an exception."""

    def __init__(self, tides=None, currents=None):
        self.tides = TIDE_RECORDS if tides is None else tides
        self.currents = CURRENT_RECORDS if currents is None else currents
        self.closed = False
        self.requests = []

    async def get_tide_predictions(self, station_id, begin_date):
        self.requests.append(("tides", station_id, begin_date))
        if isinstance(self.tides, Exception):
            raise self.tides
        return self.tides

    async def get_current_predictions(self, station_id, bin_number, begin_date):
        self.requests.append(("currents", station_id, begin_date))
        if isinstance(self.currents, Exception):
            raise self.currents
        return self.currents

    async def close(self):
        self.closed = True


class FakeUSGSClient:
    """Maps station ids to canned payloads or exceptions."""

    def __init__(self, responses):
        self.responses = responses
        self.requested = []

    async def get_instantaneous_values(self, station_id, parameter_codes=None, period=None):
        self.requested.append(station_id)
        response = self.responses.get(station_id, ProviderUnavailableError(f"HTTP 404 for {station_id}"))
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self):
        pass


@pytest.fixture
def tz():
    return STATION_TZ


@pytest.fixture
def noaa_client():
    return FakeNOAAClient()


@pytest.fixture
def usgs_client():
    return FakeUSGSClient({"01335754": usgs_payload()})
