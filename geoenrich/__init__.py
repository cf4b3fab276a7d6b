"""
geoenrich - GeoIP and ASN enrichment for log messages

Resolves the well-known IP address fields of a message (source, host,
destination) against MaxMind or IPinfo databases and writes the
geolocation and autonomous system details back onto the message.
"""

from .config import DatabaseVendorType, GeoIpResolverConfig
from .enrich.engine import GeoIpResolverEngine
from .enrich.vendor import GeoIpVendorResolverService
from .message import Message

__version__ = "1.0.0"
__all__ = [
    "DatabaseVendorType",
    "GeoIpResolverConfig",
    "GeoIpResolverEngine",
    "GeoIpVendorResolverService",
    "Message",
]
