"""
Fixed-width address arithmetic.

Addresses are walked as mutable big-endian byte buffers: 4 bytes for IPv4,
16 bytes for IPv6. The same code serves both widths.
"""

from __future__ import annotations

import ipaddress

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def next_ip(addr: bytearray) -> None:
    """
    Advance ``addr`` in place to the numerically next address.

    Carry propagates from the last byte towards the first. Past the most
    significant byte the address wraps to all zeros; callers bound the walk
    with a subnet containment check.
    """
    if not isinstance(addr, bytearray):
        raise TypeError(f"next_ip needs a bytearray, got {type(addr).__name__}")

    for j in range(len(addr) - 1, -1, -1):
        addr[j] = (addr[j] + 1) & 0xFF
        if addr[j] > 0:
            break


def ip_to_bytes(ip: IPAddress) -> bytearray:
    """Return a mutable copy of the packed address."""
    return bytearray(ip.packed)


def bytes_to_ip(buf: bytes | bytearray) -> IPAddress:
    """Convert a 4 or 16 byte buffer back to an address object."""
    if len(buf) == 4:
        return ipaddress.IPv4Address(bytes(buf))
    if len(buf) == 16:
        return ipaddress.IPv6Address(bytes(buf))
    raise ValueError(f"Invalid address width: {len(buf)} bytes")
