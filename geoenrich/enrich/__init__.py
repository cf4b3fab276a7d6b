"""
GeoIP and ASN enrichment
"""

from .base import GeoAsnInformation, GeoIpResolver, GeoLocationInformation
from .engine import IP_ADDRESS_FIELDS, GeoIpResolverEngine, get_ip_from_field_value
from .vendor import GeoIpVendorResolverService

__all__ = [
    "GeoAsnInformation",
    "GeoIpResolver",
    "GeoIpResolverEngine",
    "GeoIpVendorResolverService",
    "GeoLocationInformation",
    "IP_ADDRESS_FIELDS",
    "get_ip_from_field_value",
]
