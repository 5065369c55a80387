"""Host route model consumed by the conflict reservation pass."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

from riveripam.models.enums import Family

RouteDestination = ipaddress.IPv4Interface | ipaddress.IPv6Interface


@dataclass(frozen=True)
class Route:
    """
    A route from the host's routing table.

    The destination keeps the base address exactly as reported by the kernel
    together with its prefix length; ``destination.network`` is the subnet.

    Attributes:
        destination: Base address and prefix length, or None for routes
            without a destination (default routes)
        interface_index: Index of the egress interface
    """

    destination: RouteDestination | None
    interface_index: int | None = None

    @property
    def family(self) -> Family | None:
        """Family of the destination, or None without a destination."""
        if self.destination is None:
            return None
        return Family.from_version(self.destination.version)

    @classmethod
    def parse(cls, destination: str | None, interface_index: int | None = None) -> Route:
        """Build a route from a "BASE/LEN" string (None for no destination)."""
        dst = ipaddress.ip_interface(destination) if destination else None
        return cls(destination=dst, interface_index=interface_index)

    @classmethod
    def from_netlink(cls, msg) -> Route:
        """
        Build a route from a pyroute2 route message.

        Routes without RTA_DST (default routes) get no destination.
        """
        dst = msg.get_attr("RTA_DST")
        oif = msg.get_attr("RTA_OIF")
        if dst is None:
            return cls(destination=None, interface_index=oif)
        return cls(
            destination=ipaddress.ip_interface(f"{dst}/{msg['dst_len']}"),
            interface_index=oif,
        )

    def __str__(self) -> str:
        dst = str(self.destination) if self.destination is not None else "default"
        return f"{dst} dev {self.interface_index}"
