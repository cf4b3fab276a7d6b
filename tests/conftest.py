# tests/conftest.py
from typing import Dict, List, Optional

import pytest
from prometheus_client import CollectorRegistry

from geoenrich.config import GeoIpResolverConfig
from geoenrich.enrich.base import GeoAsnInformation, GeoLocationInformation

LONDON = GeoLocationInformation(
    latitude=51.5142,
    longitude=-0.0931,
    country_iso_code="GB",
    country_name="United Kingdom",
    city_name="London",
    region="England",
    time_zone="Europe/London"
)

EXAMPLE_ISP = GeoAsnInformation(organization="Example ISP", asn=64500)


class StubResolver:
    """In-memory resolver keyed by address string"""

    def __init__(self, enabled: bool = True, data: Optional[Dict[str, object]] = None):
        self._enabled = enabled
        self.data = data or {}
        self.lookups: List[object] = []
        self.closed = False

    def is_enabled(self) -> bool:
        return self._enabled

    def get_geo_ip_data(self, address):
        self.lookups.append(address)
        if not self._enabled or address is None:
            return None
        return self.data.get(str(address))

    def close(self):
        self.closed = True


class StubResolverService:
    """Hands out prebuilt resolvers and remembers what it was asked for"""

    def __init__(self, location: StubResolver, asn: StubResolver):
        self.location = location
        self.asn = asn
        self.calls = []

    def create_location_resolver(self, config, timer):
        self.calls.append(("location", config, timer))
        return self.location

    def create_asn_resolver(self, config, timer):
        self.calls.append(("asn", config, timer))
        return self.asn


class RecordingMessage:
    """Record that logs every add_field call, including None values"""

    def __init__(self, fields: Optional[Dict[str, object]] = None):
        self._fields = dict(fields or {})
        self.added: List[tuple] = []

    def get_field(self, key):
        return self._fields.get(key)

    def add_field(self, key, value):
        self.added.append((key, value))
        self._fields[key] = value

    def get_field_names(self):
        return set(self._fields)


@pytest.fixture
def registry():
    return CollectorRegistry()


@pytest.fixture
def config():
    return GeoIpResolverConfig(enabled=True, city_db_path="/tmp/city.mmdb", asn_db_path="/tmp/asn.mmdb")


@pytest.fixture
def stub_service():
    location = StubResolver(data={"81.2.69.142": LONDON})
    asn = StubResolver(data={"81.2.69.142": EXAMPLE_ISP})
    return StubResolverService(location, asn)
