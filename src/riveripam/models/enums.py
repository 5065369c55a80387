"""
Enumeration types for riveripam.

This module defines the enumeration types shared by the configuration,
addressing and allocation layers.
"""

import socket
from enum import Enum


# =============================================================================
# Addressing Enums
# =============================================================================


class Family(str, Enum):
    """
    Address family handled by the IP address manager.

    Each family maps to one allocator and to the kernel address family used
    when querying the route table.
    """

    IPV4 = "ipv4"
    IPV6 = "ipv6"

    @property
    def version(self) -> int:
        """IP version number (4 or 6), as used by ``ipaddress``."""
        return 4 if self is Family.IPV4 else 6

    @property
    def address_family(self) -> int:
        """Kernel address family constant (AF_INET / AF_INET6)."""
        return socket.AF_INET if self is Family.IPV4 else socket.AF_INET6

    @classmethod
    def from_version(cls, version: int) -> "Family":
        """Map an ``ipaddress`` version number to a family."""
        if version == 4:
            return cls.IPV4
        if version == 6:
            return cls.IPV6
        raise ValueError(f"Unknown IP version: {version}")


# =============================================================================
# Configuration Enums
# =============================================================================


class LogLevel(str, Enum):
    """
    Logging verbosity levels for riveripam.

    Levels (from most to least verbose):
        - FULL: Complete trace with detailed stack information
        - DEBUG: Debug messages and above
        - INFO: Informational messages and above
        - WARNING: Only warnings and errors
    """

    FULL = "full"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
