"""
Base GeoIP resolver and lookup result types
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address
from typing import Any, Dict, Generic, Optional, TypeVar, Union

from prometheus_client import Histogram

logger = logging.getLogger("geoenrich.enrich.base")

IPAddress = Union[IPv4Address, IPv6Address]

T = TypeVar("T")


@dataclass(frozen=True)
class GeoLocationInformation:
    """Geographic information for an address"""
    latitude: float
    longitude: float
    country_iso_code: Optional[str] = None
    country_name: Optional[str] = None
    city_name: Optional[str] = None
    region: Optional[str] = None
    time_zone: Optional[str] = None


@dataclass(frozen=True)
class GeoAsnInformation:
    """Autonomous system information for an address"""
    organization: Optional[str] = None
    asn_type: Optional[str] = None
    asn: Optional[int] = None


class GeoIpResolver(ABC, Generic[T]):
    """
    Resolves addresses against a single GeoIP database.

    A resolver that was asked to be enabled but cannot open its database
    reports itself as disabled instead of failing. Lookups never raise:
    a miss, a disabled resolver and a broken lookup all return None.
    """

    def __init__(self, timer: Histogram, config_path: str, enabled: bool):
        self._timer = timer
        self.config_path = config_path
        self.last_error: Optional[str] = None
        self.error_count = 0
        self._error_lock = threading.Lock()
        self._enabled = False

        if enabled and config_path:
            try:
                self._create_data_provider(config_path)
                self._enabled = True
            except Exception as e:
                self.last_error = str(e)
                logger.error(f"Failed to open GeoIP database {config_path} for {type(self).__name__}: {e}")
        elif enabled:
            logger.warning(f"No database path configured for {type(self).__name__}, resolver disabled")

    @abstractmethod
    def _create_data_provider(self, config_path: str):
        """Open the underlying database"""
        pass

    @abstractmethod
    def _do_get_geo_ip_data(self, address: IPAddress) -> Optional[T]:
        """Lookup an address; may raise on database errors"""
        pass

    @abstractmethod
    def close(self):
        pass

    def is_enabled(self) -> bool:
        return self._enabled

    def get_geo_ip_data(self, address: Optional[IPAddress]) -> Optional[T]:
        if not self._enabled or address is None:
            return None

        with self._timer.time():
            try:
                result = self._do_get_geo_ip_data(address)
                if self.last_error is not None:
                    with self._error_lock:
                        self.last_error = None
                return result
            except Exception as e:
                with self._error_lock:
                    self.last_error = str(e)
                    self.error_count += 1
                logger.debug(f"GeoIP lookup failed for {address} in {type(self).__name__}: {e}")
                return None

    def get_status(self) -> Dict[str, Any]:
        """Get resolver status"""
        return {
            "status": "enabled" if self._enabled else "disabled",
            "database": self.config_path,
            "last_error": self.last_error,
            "error_count": self.error_count
        }
