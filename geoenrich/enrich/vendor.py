"""
Creates the location and ASN resolvers for the configured database vendor
"""

from prometheus_client import Histogram

from ..config import DatabaseVendorType, GeoIpResolverConfig
from .base import GeoIpResolver
from .ipinfo import IpInfoAsnResolver, IpInfoLocationResolver
from .maxmind import MaxMindIpAsnResolver, MaxMindIpLocationResolver

_LOCATION_RESOLVERS = {
    DatabaseVendorType.MAXMIND: MaxMindIpLocationResolver,
    DatabaseVendorType.IPINFO: IpInfoLocationResolver,
}

_ASN_RESOLVERS = {
    DatabaseVendorType.MAXMIND: MaxMindIpAsnResolver,
    DatabaseVendorType.IPINFO: IpInfoAsnResolver,
}


class GeoIpVendorResolverService:
    """Builds resolvers for the database vendor named in the configuration"""

    def create_location_resolver(self, config: GeoIpResolverConfig, timer: Histogram) -> GeoIpResolver:
        """Location resolver, enabled when GeoIP is enabled"""
        resolver_class = _LOCATION_RESOLVERS[config.database_vendor_type]
        return resolver_class(timer, config.city_db_path, config.enabled)

    def create_asn_resolver(self, config: GeoIpResolverConfig, timer: Histogram) -> GeoIpResolver:
        """ASN resolver, enabled when GeoIP is enabled and an ASN database is set"""
        resolver_class = _ASN_RESOLVERS[config.database_vendor_type]
        # The ASN database is optional even when GeoIP is enabled
        enabled = config.enabled and bool(config.asn_db_path)
        return resolver_class(timer, config.asn_db_path, enabled)
