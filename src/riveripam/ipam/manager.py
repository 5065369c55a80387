"""
IP Address Manager for a node.

Owns one allocator per enabled address family, each bound to the node's
allocation prefix for that family, and exposes the allocation operations used
by the rest of the agent.

On node startup the agent calls ``reserve_local_routes()`` once, so addresses
the host already routes elsewhere are never handed out.
"""

from __future__ import annotations

from riveripam.config import IPAMConfig
from riveripam.ipam.address import IPAddress
from riveripam.ipam.allocator import CIDRAllocator
from riveripam.ipam.conflicts import reserve_conflicts
from riveripam.ipam.exceptions import (
    ConfigurationError,
    ResourceUnavailableError,
)
from riveripam.ipam.routes import NetlinkRouteSource, RouteSource, filter_routes
from riveripam.models.addressing import NodeAddressing
from riveripam.models.enums import Family
from riveripam.utils.logger import get_logger

logger = get_logger(__name__)


class IPAMManager:
    """
    Per-node IP address manager.

    Allocators of disabled families stay None; operations on them are no-ops,
    and the conflict pass skips them.
    """

    def __init__(
        self,
        node_addressing: NodeAddressing,
        config: IPAMConfig,
        route_source: RouteSource | None = None,
    ):
        self.node_addressing = node_addressing
        self.config = config

        self._owns_route_source = route_source is None
        self.route_source = route_source or NetlinkRouteSource()

        self.ipv4_allocator: CIDRAllocator | None = None
        self.ipv6_allocator: CIDRAllocator | None = None

        if config.is_enabled(Family.IPV6):
            self.ipv6_allocator = self._new_allocator(Family.IPV6)

        if config.is_enabled(Family.IPV4):
            self.ipv4_allocator = self._new_allocator(Family.IPV4)

    @classmethod
    def from_config(
        cls, config: IPAMConfig, route_source: RouteSource | None = None
    ) -> IPAMManager:
        """Build node addressing from ``config`` and create the manager."""
        try:
            ipv4 = config.get_ipv4_prefix() if config.is_enabled(Family.IPV4) else None
            ipv6 = config.get_ipv6_prefix() if config.is_enabled(Family.IPV6) else None
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        node_addressing = NodeAddressing.from_prefixes(ipv4=ipv4, ipv6=ipv6)
        return cls(node_addressing, config, route_source=route_source)

    def _new_allocator(self, family: Family) -> CIDRAllocator:
        addressing = self.node_addressing.get(family)
        if addressing is None:
            raise ConfigurationError(
                f"{family.value} is enabled but no allocation prefix is configured"
            )

        prefix = addressing.allocation_cidr()
        logger.info(f"Created {family.value} allocator for {prefix}")
        return CIDRAllocator(prefix)

    # -------------------------------------------------------------------------
    # Allocator Lookup
    # -------------------------------------------------------------------------

    def get_allocator(self, family: Family) -> CIDRAllocator | None:
        """Return the allocator of ``family``, or None if disabled."""
        if family is Family.IPV4:
            return self.ipv4_allocator
        return self.ipv6_allocator

    # -------------------------------------------------------------------------
    # Allocation Operations
    # -------------------------------------------------------------------------

    def allocate_ip(self, ip: IPAddress) -> None:
        """Reserve a specific address in the allocator of its family."""
        family = Family.from_version(ip.version)
        allocator = self.get_allocator(family)
        if allocator is None:
            logger.debug(f"Not allocating {ip}: {family.value} is disabled")
            return

        allocator.allocate(ip)
        logger.debug(f"Allocated {ip}")

    def allocate_next(self, family: Family) -> IPAddress | None:
        """
        Reserve and return the next free address of ``family``.

        Returns None when the family is disabled.
        """
        allocator = self.get_allocator(family)
        if allocator is None:
            logger.debug(f"Not allocating: {family.value} is disabled")
            return None

        ip = allocator.allocate_next()
        logger.debug(f"Allocated next {family.value} address {ip}")
        return ip

    def release_ip(self, ip: IPAddress) -> None:
        """Release an address back to the allocator of its family."""
        family = Family.from_version(ip.version)
        allocator = self.get_allocator(family)
        if allocator is None:
            logger.debug(f"Not releasing {ip}: {family.value} is disabled")
            return

        allocator.release(ip)
        logger.debug(f"Released {ip}")

    def dump(self) -> dict[str, list[str]]:
        """Reserved addresses per enabled family, in ascending order."""
        result = {}
        for family in Family:
            allocator = self.get_allocator(family)
            if allocator is not None:
                result[family.value] = [str(ip) for ip in allocator.reserved()]
        return result

    # -------------------------------------------------------------------------
    # Conflict Reservation
    # -------------------------------------------------------------------------

    def reserve_local_routes(self) -> int:
        """
        Walk through local routes and reserve overlapping addresses.

        Only IPv4 is checked. Failure to read the host's networking state
        aborts the pass with a warning.

        Returns:
            Number of addresses newly reserved
        """
        if self.ipv4_allocator is None:
            return 0
        return self._reserve_local_routes(Family.IPV4, self.ipv4_allocator)

    def _reserve_local_routes(self, family: Family, allocator: CIDRAllocator) -> int:
        logger.debug("Checking local routes for conflicts...")

        host_device = self.config.HOST_DEVICE
        try:
            host_index = self.route_source.resolve_interface(host_device)
        except ResourceUnavailableError as e:
            logger.warning(f"Unable to find net_device {host_device}: {e}")
            return 0

        try:
            routes = self.route_source.list_routes(family)
        except ResourceUnavailableError as e:
            logger.warning(f"Unable to retrieve local routes: {e}")
            return 0

        prefix = self.node_addressing.get(family).allocation_cidr()
        reserved = reserve_conflicts(
            prefix, allocator, filter_routes(routes, host_index)
        )

        logger.info(
            f"Reserved {reserved} {family.value} addresses conflicting with "
            f"local routes in {prefix}"
        )
        return reserved

    def close(self) -> None:
        """Close the route source if this manager created it."""
        if self._owns_route_source and isinstance(
            self.route_source, NetlinkRouteSource
        ):
            self.route_source.close()
