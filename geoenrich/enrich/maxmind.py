"""
MaxMind GeoIP2 / GeoLite2 resolvers
"""

import logging
from typing import Optional

import geoip2.database
import geoip2.errors

from .base import GeoAsnInformation, GeoIpResolver, GeoLocationInformation, IPAddress

logger = logging.getLogger("geoenrich.enrich.maxmind")


class MaxMindResolver(GeoIpResolver):
    """Shared reader handling for the MaxMind databases"""

    _reader: Optional[geoip2.database.Reader] = None

    def _create_data_provider(self, config_path: str):
        self._reader = geoip2.database.Reader(config_path)
        logger.info("MaxMind database loaded", extra={
            "component": "enrich.maxmind",
            "event": "loaded",
            "db_path": config_path,
            "db_type": self._reader.metadata().database_type
        })

    def close(self):
        if self._reader is not None:
            self._reader.close()
            self._reader = None


class MaxMindIpLocationResolver(MaxMindResolver):
    """City lookups against a GeoIP2/GeoLite2 City database"""

    def _do_get_geo_ip_data(self, address: IPAddress) -> Optional[GeoLocationInformation]:
        try:
            response = self._reader.city(address)
        except geoip2.errors.AddressNotFoundError:
            return None

        location = response.location
        if location.latitude is None or location.longitude is None:
            return None

        return GeoLocationInformation(
            latitude=location.latitude,
            longitude=location.longitude,
            country_iso_code=response.country.iso_code,
            country_name=response.country.name,
            city_name=response.city.name,
            region=response.subdivisions.most_specific.name,
            time_zone=location.time_zone
        )


class MaxMindIpAsnResolver(MaxMindResolver):
    """ASN lookups against a GeoLite2 ASN database"""

    def _do_get_geo_ip_data(self, address: IPAddress) -> Optional[GeoAsnInformation]:
        try:
            response = self._reader.asn(address)
        except geoip2.errors.AddressNotFoundError:
            return None

        return GeoAsnInformation(
            organization=response.autonomous_system_organization,
            asn=response.autonomous_system_number
        )
