"""
Per-family address allocator.

An allocator tracks which addresses of one allocation prefix are reserved.
The network address and the broadcast address of prefixes larger than two
addresses are never handed out and report as out of range.

The state is shared with every request path of the agent, so each allocator
guards it with its own lock.
"""

from __future__ import annotations

import ipaddress
import threading
from typing import Iterator, Protocol

from riveripam.ipam.address import IPAddress
from riveripam.ipam.exceptions import (
    AddressAlreadyReservedError,
    AddressOutOfRangeError,
    RangeFullError,
)
from riveripam.models.addressing import AllocationPrefix


class Allocator(Protocol):
    """What the IPAM manager and the conflict reservation pass need."""

    def allocate(self, ip: IPAddress) -> None: ...

    def allocate_next(self) -> IPAddress: ...

    def release(self, ip: IPAddress) -> None: ...

    def has(self, ip: IPAddress) -> bool: ...


class CIDRAllocator:
    """
    Lock-guarded allocator over one CIDR block.

    Attributes:
        prefix: The allocation prefix this allocator hands out from
    """

    def __init__(self, prefix: AllocationPrefix):
        self.prefix = prefix

        network = int(prefix.network_address)
        size = prefix.num_addresses
        if size > 2:
            # Skip network and broadcast addresses
            self._first = network + 1
            self._last = network + size - 2
        else:
            self._first = network
            self._last = network + size - 1

        self._address_cls = (
            ipaddress.IPv4Address if prefix.version == 4 else ipaddress.IPv6Address
        )
        self._reserved: set[int] = set()
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def size(self) -> int:
        """Number of allocatable addresses."""
        return self._last - self._first + 1

    def free(self) -> int:
        """Number of addresses still available."""
        with self._lock:
            return self.size - len(self._reserved)

    def used(self) -> int:
        """Number of reserved addresses."""
        with self._lock:
            return len(self._reserved)

    def has(self, ip: IPAddress) -> bool:
        """Check whether ``ip`` is reserved."""
        value = self._offset(ip)
        if value is None:
            return False
        with self._lock:
            return value in self._reserved

    def reserved(self) -> Iterator[IPAddress]:
        """Iterate over reserved addresses in ascending order."""
        with self._lock:
            values = sorted(self._reserved)
        for value in values:
            yield self._address_cls(value)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def allocate(self, ip: IPAddress) -> None:
        """
        Reserve a specific address.

        Raises:
            AddressOutOfRangeError: If ``ip`` is not allocatable in this prefix
            AddressAlreadyReservedError: If ``ip`` is already reserved
        """
        value = self._offset(ip)
        if value is None:
            raise AddressOutOfRangeError(str(ip), str(self.prefix))

        with self._lock:
            if value in self._reserved:
                raise AddressAlreadyReservedError(str(ip))
            self._reserved.add(value)

    def allocate_next(self) -> IPAddress:
        """
        Reserve and return the lowest free address.

        Raises:
            RangeFullError: If every address is reserved
        """
        with self._lock:
            if len(self._reserved) >= self.size:
                raise RangeFullError(str(self.prefix))

            value = self._first
            while value in self._reserved:
                value += 1
            self._reserved.add(value)

        return self._address_cls(value)

    def release(self, ip: IPAddress) -> None:
        """Return ``ip`` to the pool. Releasing a free address is a no-op."""
        value = self._offset(ip)
        if value is None:
            return
        with self._lock:
            self._reserved.discard(value)

    def _offset(self, ip: IPAddress) -> int | None:
        """Integer value of ``ip`` if it is allocatable here, else None."""
        if ip.version != self.prefix.version:
            return None
        value = int(ip)
        if value < self._first or value > self._last:
            return None
        return value

    def __repr__(self) -> str:
        return f"CIDRAllocator({self.prefix}, used={self.used()}, size={self.size})"
