"""
Configuration for the GeoIP resolvers
"""

import os
from enum import Enum

from pydantic import BaseModel, field_validator


def env_bool(key: str, default: bool = False) -> bool:
    """Get boolean value from environment variable"""
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


class DatabaseVendorType(str, Enum):
    """Supported GeoIP database vendors"""
    MAXMIND = "MAXMIND"
    IPINFO = "IPINFO"


DEFAULT_CITY_DB_PATH = "/etc/geoenrich/GeoLite2-City.mmdb"


class GeoIpResolverConfig(BaseModel):
    enabled: bool = False
    database_vendor_type: DatabaseVendorType = DatabaseVendorType.MAXMIND
    city_db_path: str = DEFAULT_CITY_DB_PATH
    asn_db_path: str = ""

    @field_validator("database_vendor_type", mode="before")
    @classmethod
    def _normalize_vendor(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("city_db_path", "asn_db_path", mode="before")
    @classmethod
    def _strip_path(cls, value):
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def from_env(cls) -> "GeoIpResolverConfig":
        """Build the resolver configuration from environment variables"""
        return cls(
            enabled=env_bool("GEOIP_ENABLED", False),
            database_vendor_type=os.getenv("GEOIP_DB_VENDOR", DatabaseVendorType.MAXMIND.value),
            city_db_path=os.getenv("GEOIP_DB_CITY", DEFAULT_CITY_DB_PATH),
            asn_db_path=os.getenv("GEOIP_DB_ASN", ""),
        )
