"""
Node IP address management.

Provides:
- Per-family allocators bound to the node's allocation prefix
- Host route retrieval and filtering
- Conflict reservation of addresses already routed by the host

Re-exports the main classes:
    from riveripam.ipam import IPAMManager, CIDRAllocator
"""

from riveripam.ipam.address import bytes_to_ip, ip_to_bytes, next_ip
from riveripam.ipam.allocator import Allocator, CIDRAllocator
from riveripam.ipam.conflicts import reserve_conflicts
from riveripam.ipam.exceptions import (
    AddressAlreadyReservedError,
    AddressOutOfRangeError,
    AllocationError,
    ConfigurationError,
    InterfaceNotFoundError,
    IPAMError,
    RangeFullError,
    ResourceUnavailableError,
    RouteListError,
)
from riveripam.ipam.manager import IPAMManager
from riveripam.ipam.routes import NetlinkRouteSource, RouteSource, filter_routes

__all__ = [
    # Manager
    "IPAMManager",
    # Allocator
    "Allocator",
    "CIDRAllocator",
    # Routes
    "RouteSource",
    "NetlinkRouteSource",
    "filter_routes",
    "reserve_conflicts",
    # Address arithmetic
    "next_ip",
    "ip_to_bytes",
    "bytes_to_ip",
    # Exceptions
    "IPAMError",
    "ConfigurationError",
    "ResourceUnavailableError",
    "InterfaceNotFoundError",
    "RouteListError",
    "AllocationError",
    "AddressAlreadyReservedError",
    "AddressOutOfRangeError",
    "RangeFullError",
]
