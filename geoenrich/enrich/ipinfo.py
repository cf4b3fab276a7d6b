"""
IPinfo MMDB resolvers

IPinfo ships its location and ASN data as flat MMDB records, so these
read the raw maxminddb records instead of going through geoip2 models.
"""

import logging
from typing import Any, Dict, Optional

import maxminddb

from .base import GeoAsnInformation, GeoIpResolver, GeoLocationInformation, IPAddress

logger = logging.getLogger("geoenrich.enrich.ipinfo")


def parse_asn(value: Any) -> Optional[int]:
    """Turn 'AS15169' (or 15169) into 15169"""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text[:2].upper() == "AS":
        text = text[2:]
    try:
        return int(text)
    except ValueError:
        return None


def _coordinate(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class IpInfoResolver(GeoIpResolver):
    """Shared reader handling for the IPinfo databases"""

    _reader: "Optional[maxminddb.Reader]" = None

    def _create_data_provider(self, config_path: str):
        self._reader = maxminddb.open_database(config_path)
        logger.info("IPinfo database loaded", extra={
            "component": "enrich.ipinfo",
            "event": "loaded",
            "db_path": config_path,
            "db_type": self._reader.metadata().database_type
        })

    def _record(self, address: IPAddress) -> Optional[Dict[str, Any]]:
        record = self._reader.get(address)
        return record if isinstance(record, dict) else None

    def close(self):
        if self._reader is not None:
            self._reader.close()
            self._reader = None


class IpInfoLocationResolver(IpInfoResolver):
    """Lookups against an IPinfo location database"""

    def _do_get_geo_ip_data(self, address: IPAddress) -> Optional[GeoLocationInformation]:
        record = self._record(address)
        if not record:
            return None

        latitude = _coordinate(record.get("lat"))
        longitude = _coordinate(record.get("lng"))
        if latitude is None or longitude is None:
            return None

        return GeoLocationInformation(
            latitude=latitude,
            longitude=longitude,
            country_iso_code=record.get("country"),
            city_name=record.get("city"),
            region=record.get("region"),
            time_zone=record.get("timezone")
        )


class IpInfoAsnResolver(IpInfoResolver):
    """Lookups against an IPinfo ASN database"""

    def _do_get_geo_ip_data(self, address: IPAddress) -> Optional[GeoAsnInformation]:
        record = self._record(address)
        if not record:
            return None

        return GeoAsnInformation(
            organization=record.get("name"),
            asn_type=record.get("type"),
            asn=parse_asn(record.get("asn"))
        )
