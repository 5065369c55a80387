"""
Node addressing for the IP address manager.

Holds the per-family allocation prefix assigned to this node. The prefix is
the CIDR block from which the node hands out addresses to local workloads.

Format: BASE_IP/PREFIX_LEN, e.g. "10.0.0.0/24" or "f00d::/96".
Host bits in the base address are masked off, so "10.0.0.5/24" yields
10.0.0.0/24.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

from riveripam.models.enums import Family

AllocationPrefix = ipaddress.IPv4Network | ipaddress.IPv6Network


def parse_allocation_prefix(
    cidr: str, family: Family | None = None
) -> AllocationPrefix:
    """
    Parse an allocation prefix string.

    Args:
        cidr: Prefix in CIDR notation.
        family: Expected family; a prefix of the other family is rejected.

    Returns:
        IPv4Network or IPv6Network with host bits cleared.

    Raises:
        ValueError: If the string is not a CIDR or has the wrong family.
    """
    text = cidr.strip()
    if "/" not in text:
        raise ValueError(
            f"Invalid allocation prefix: '{cidr}'. "
            f"Expected format: BASE_IP/PREFIX_LEN (e.g., '10.0.0.0/24')"
        )

    try:
        network = ipaddress.ip_network(text, strict=False)
    except ValueError as e:
        raise ValueError(f"Invalid allocation prefix '{cidr}': {e}")

    if family is not None and network.version != family.version:
        raise ValueError(
            f"Allocation prefix '{cidr}' is IPv{network.version}, "
            f"expected {family.value}"
        )

    return network


@dataclass(frozen=True)
class FamilyAddressing:
    """Addressing of one family on this node."""

    family: Family
    prefix: AllocationPrefix

    def allocation_cidr(self) -> AllocationPrefix:
        """Return the allocation prefix of this family."""
        return self.prefix

    def __str__(self) -> str:
        return f"{self.family.value}:{self.prefix}"


@dataclass(frozen=True)
class NodeAddressing:
    """
    Per-node addressing, one entry per configured family.

    Attributes:
        ipv4: IPv4 addressing, or None when no IPv4 prefix is assigned
        ipv6: IPv6 addressing, or None when no IPv6 prefix is assigned
    """

    ipv4: FamilyAddressing | None = None
    ipv6: FamilyAddressing | None = None

    @classmethod
    def from_prefixes(
        cls,
        ipv4: AllocationPrefix | None = None,
        ipv6: AllocationPrefix | None = None,
    ) -> NodeAddressing:
        """Build node addressing from parsed prefixes (None skips a family)."""
        return cls(
            ipv4=FamilyAddressing(Family.IPV4, ipv4) if ipv4 is not None else None,
            ipv6=FamilyAddressing(Family.IPV6, ipv6) if ipv6 is not None else None,
        )

    def get(self, family: Family) -> FamilyAddressing | None:
        """Look up addressing by family."""
        return self.ipv4 if family is Family.IPV4 else self.ipv6
