"""
Conflict reservation against host routes.

Any address of the allocation prefix that the host already routes elsewhere is
reserved in the allocator, so it is never handed out to a workload.
"""

from __future__ import annotations

from typing import Iterable

from riveripam.ipam.address import bytes_to_ip, ip_to_bytes, next_ip
from riveripam.ipam.allocator import Allocator
from riveripam.ipam.exceptions import AllocationError
from riveripam.models.addressing import AllocationPrefix
from riveripam.models.route import Route
from riveripam.utils.logger import get_logger

logger = get_logger(__name__)


def reserve_conflicts(
    allocation_prefix: AllocationPrefix,
    allocator: Allocator,
    candidate_routes: Iterable[Route],
) -> int:
    """
    Reserve every address of each route whose destination lies in the prefix.

    A route matches when the allocation prefix contains its destination base
    address. Every address where the route's subnet and the prefix overlap is
    then walked, network and broadcast included. Addresses the allocator
    refuses (already reserved, or outside its range) are skipped.

    Args:
        allocation_prefix: The node's allocation prefix for this family
        allocator: Allocator of the same family
        candidate_routes: Routes already passed through ``filter_routes``

    Returns:
        Number of addresses newly reserved by this call
    """
    reserved = 0

    for route in candidate_routes:
        dst = route.destination
        if dst is None or dst.version != allocation_prefix.version:
            continue

        if dst.ip not in allocation_prefix:
            continue

        subnet = dst.network
        logger.info(
            f"Marking local route {subnet} as no-alloc in node allocation "
            f"prefix {allocation_prefix}"
        )

        # Walk only the overlap of the route's subnet and the prefix
        start = max(subnet.network_address, allocation_prefix.network_address)
        ip = ip_to_bytes(start)
        while True:
            addr = bytes_to_ip(ip)
            if addr not in subnet or addr not in allocation_prefix:
                break
            try:
                allocator.allocate(addr)
                reserved += 1
            except AllocationError as e:
                logger.debug(f"Not reserving {addr}: {e}")
            next_ip(ip)

    return reserved
