"""
GeoIP resolver engine

Looks at the well-known IP address fields of a message and adds location
and ASN fields for every address found in the configured databases.
"""

import ipaddress
import logging
from types import MappingProxyType
from typing import Any, List, Optional

from prometheus_client import CollectorRegistry

from ..config import GeoIpResolverConfig
from ..logging_config import TRACE
from ..message import INTERNAL_FIELD_PREFIX
from ..metrics import EnrichmentMetrics
from .base import GeoAsnInformation, GeoIpResolver, GeoLocationInformation, IPAddress
from .vendor import GeoIpVendorResolverService

logger = logging.getLogger("geoenrich.enrich.engine")

# ONLY these fields are checked for addresses; the value is the prefix of
# the fields written back
IP_ADDRESS_FIELDS = MappingProxyType({
    "source_ip": "source",
    "host_ip": "host",
    "destination_ip": "destination",
})


def get_ip_from_field_value(field_value: str) -> Optional[IPAddress]:
    """Parse a field value into an address, or None if it is not one"""
    try:
        return ipaddress.ip_address(field_value.strip())
    except ValueError:
        logger.log(TRACE, "Field value %r is not an IP address", field_value)
        return None


def _get_valid_routable_address(field_value: Any) -> Optional[IPAddress]:
    if isinstance(field_value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return field_value
    if isinstance(field_value, str):
        return get_ip_from_field_value(field_value)
    return None


class GeoIpResolverEngine:
    """
    Enriches messages with GeoIP and ASN data.

    The enabled state is decided once, from the resolvers' state at
    construction. With both resolvers disabled every message passes
    through untouched.

    Records only need get_field(), add_field() and get_field_names().
    The engine keeps no per-call state, so one instance may serve many
    threads as long as the resolvers allow concurrent lookups.
    """

    def __init__(self, resolver_service: GeoIpVendorResolverService, config: GeoIpResolverConfig,
                 registry: Optional[CollectorRegistry] = None):
        metrics = EnrichmentMetrics.for_registry(registry)
        resolve_time = metrics.resolve_time

        self._location_resolver: GeoIpResolver[GeoLocationInformation] = \
            resolver_service.create_location_resolver(config, resolve_time)
        self._asn_resolver: GeoIpResolver[GeoAsnInformation] = \
            resolver_service.create_asn_resolver(config, resolve_time)

        location_enabled = self._location_resolver.is_enabled()
        asn_enabled = self._asn_resolver.is_enabled()
        metrics.set_resolver_enabled("location", location_enabled)
        metrics.set_resolver_enabled("asn", asn_enabled)

        logger.info(f"Created Geo IP Resolvers for '{config.database_vendor_type.value}'")
        logger.info(f"'{type(self._location_resolver).__name__}' Status Enabled: {location_enabled}")
        logger.info(f"'{type(self._asn_resolver).__name__}' Status Enabled: {asn_enabled}")

        self._enabled = location_enabled or asn_enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enrich(self, message) -> bool:
        """
        Add geo and ASN fields for every IP address field of the message.

        Returns False without touching the message when the engine is
        disabled, True otherwise (whether or not anything was added).
        """
        if not self._enabled:
            return False

        for key in self._get_ip_address_fields(message):
            address = _get_valid_routable_address(message.get_field(key))
            if address is None:
                continue

            prefix = IP_ADDRESS_FIELDS[key]

            location = self._location_resolver.get_geo_ip_data(address)
            if location is not None:
                self._add_location_fields(message, prefix, location)

            asn = self._asn_resolver.get_geo_ip_data(address)
            if asn is not None:
                message.add_field(f"{prefix}_as_organization", asn.organization)
                message.add_field(f"{prefix}_as_number", asn.asn)

        return True

    def close(self):
        self._location_resolver.close()
        self._asn_resolver.close()

    @staticmethod
    def _add_location_fields(message, prefix: str, location: GeoLocationInformation):
        # These five are written even when a value is None
        message.add_field(f"{prefix}_geo_coordinates", f"{location.latitude},{location.longitude}")
        message.add_field(f"{prefix}_geo_country", location.country_iso_code)
        message.add_field(f"{prefix}_geo_city", location.city_name)
        message.add_field(f"{prefix}_geo_region", location.region)
        message.add_field(f"{prefix}_geo_timeZone", location.time_zone)

        if location.city_name is not None and location.country_iso_code is not None:
            message.add_field(f"{prefix}_geo_name", f"{location.city_name}, {location.country_iso_code}")

    @staticmethod
    def _get_ip_address_fields(message) -> List[str]:
        return sorted(
            name for name in message.get_field_names()
            if name in IP_ADDRESS_FIELDS and not name.startswith(INTERNAL_FIELD_PREFIX)
        )
