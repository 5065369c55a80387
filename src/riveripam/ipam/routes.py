"""
Host route retrieval and filtering.

Routes are read from the kernel through pyroute2. Routes that egress through
the agent's own host device are the allocator's own routes and never count as
conflicts, and routes without a destination carry no conflict information.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Protocol

from riveripam.ipam.exceptions import InterfaceNotFoundError, RouteListError
from riveripam.models.enums import Family
from riveripam.models.route import Route
from riveripam.utils.logger import get_logger

logger = get_logger(__name__)

# Kernel routing table id of the main table
MAIN_TABLE = 254


class RouteSource(Protocol):
    """Provider of the host's routes and interface identity."""

    def list_routes(self, family: Family) -> list[Route]: ...

    def resolve_interface(self, name: str) -> int: ...


class NetlinkRouteSource:
    """
    Route source backed by the kernel's netlink interface.

    The IPRoute socket is opened on first use and kept until ``close()``.
    """

    def __init__(self):
        self._ipr = None

    def _get_ipr(self):
        """Get or create IPRoute instance."""
        if self._ipr is None:
            from pyroute2 import IPRoute

            self._ipr = IPRoute()
        return self._ipr

    def resolve_interface(self, name: str) -> int:
        """
        Return the index of the network device called ``name``.

        Raises:
            InterfaceNotFoundError: If no such device exists or netlink fails
        """
        try:
            ipr = self._get_ipr()
            for link in ipr.get_links():
                if link.get_attr("IFLA_IFNAME") == name:
                    return link["index"]
        except Exception as e:
            logger.debug(f"Link lookup for {name} failed: {e}")
            raise InterfaceNotFoundError(name) from e

        raise InterfaceNotFoundError(name)

    def list_routes(self, family: Family) -> list[Route]:
        """
        Return the main-table routes of ``family``.

        Raises:
            RouteListError: If the route dump fails
        """
        try:
            ipr = self._get_ipr()
            messages = list(
                ipr.get_routes(family=family.address_family, table=MAIN_TABLE)
            )
        except Exception as e:
            raise RouteListError(f"Unable to retrieve {family.value} routes: {e}") from e

        return [Route.from_netlink(msg) for msg in messages]

    def close(self) -> None:
        """Close the netlink socket."""
        if self._ipr is not None:
            self._ipr.close()
            self._ipr = None


def filter_routes(routes: Iterable[Route], host_device_index: int) -> Iterator[Route]:
    """
    Yield the routes eligible for conflict checking, in input order.

    Skips routes through the host device and routes without a destination.
    """
    for route in routes:
        if route.interface_index == host_device_index:
            logger.debug(f"Ignoring route {route}: points to host device")
            continue

        if route.destination is None:
            logger.debug(f"Ignoring route {route}: no destination address")
            continue

        logger.debug(f"Considering route {route}")
        yield route
