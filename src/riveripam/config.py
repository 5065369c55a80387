"""
IP address manager configuration.

A global Config instance that can be modified at runtime, before the agent
builds its IPAM manager.

Usage:
    from riveripam.config import config

    config.ENABLE_IPV6 = True
    config.IPV6_ALLOCATION_CIDR = "f00d::/96"
"""

from dataclasses import dataclass

from riveripam.models.addressing import AllocationPrefix, parse_allocation_prefix
from riveripam.models.enums import Family, LogLevel


@dataclass
class IPAMConfig:
    """Node IP address management configuration."""

    # Address Families
    ENABLE_IPV4: bool = True
    ENABLE_IPV6: bool = False

    # Allocation Prefixes
    IPV4_ALLOCATION_CIDR: str = "10.0.0.0/24"
    IPV6_ALLOCATION_CIDR: str = ""

    # Host Device (routes through it belong to the agent itself)
    HOST_DEVICE: str = "cilium_host"

    # Logging Configuration
    LOG_LEVEL: LogLevel = LogLevel.INFO
    LOG_FILE: str = ""

    def is_enabled(self, family: Family) -> bool:
        """Check whether ``family`` is enabled."""
        if family is Family.IPV4:
            return self.ENABLE_IPV4
        return self.ENABLE_IPV6

    def get_ipv4_prefix(self) -> AllocationPrefix | None:
        """Get the parsed IPv4 allocation prefix, or None if unset."""
        if not self.IPV4_ALLOCATION_CIDR:
            return None
        return parse_allocation_prefix(self.IPV4_ALLOCATION_CIDR, Family.IPV4)

    def get_ipv6_prefix(self) -> AllocationPrefix | None:
        """Get the parsed IPv6 allocation prefix, or None if unset."""
        if not self.IPV6_ALLOCATION_CIDR:
            return None
        return parse_allocation_prefix(self.IPV6_ALLOCATION_CIDR, Family.IPV6)


# Global config instance
config = IPAMConfig()
