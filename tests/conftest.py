"""Shared fixtures for riveripam tests."""

import pytest

from riveripam.config import IPAMConfig
from riveripam.ipam.exceptions import InterfaceNotFoundError, RouteListError
from riveripam.models.enums import Family
from riveripam.models.route import Route

HOST_DEVICE_INDEX = 2
EXTERNAL_DEVICE_INDEX = 5


class FakeRouteSource:
    """In-memory route source recording the calls made to it."""

    def __init__(self, routes=None, interfaces=None, fail_routes=False):
        self.routes = routes or {}
        self.interfaces = (
            interfaces
            if interfaces is not None
            else {"cilium_host": HOST_DEVICE_INDEX}
        )
        self.fail_routes = fail_routes
        self.listed_families = []

    def resolve_interface(self, name):
        if name not in self.interfaces:
            raise InterfaceNotFoundError(name)
        return self.interfaces[name]

    def list_routes(self, family):
        self.listed_families.append(family)
        if self.fail_routes:
            raise RouteListError("netlink dump failed")
        return list(self.routes.get(family, []))


class RecordingAllocator:
    """Allocator that accepts everything and records each request."""

    def __init__(self):
        self.calls = []

    def allocate(self, ip):
        self.calls.append(ip)


@pytest.fixture
def ipam_config():
    return IPAMConfig(
        ENABLE_IPV4=True,
        ENABLE_IPV6=False,
        IPV4_ALLOCATION_CIDR="10.0.0.0/24",
        HOST_DEVICE="cilium_host",
    )


@pytest.fixture
def route_source():
    return FakeRouteSource(
        routes={
            Family.IPV4: [
                Route.parse(None, EXTERNAL_DEVICE_INDEX),
                Route.parse("10.0.0.64/28", EXTERNAL_DEVICE_INDEX),
                Route.parse("10.0.0.200/30", HOST_DEVICE_INDEX),
                Route.parse("192.168.1.0/24", EXTERNAL_DEVICE_INDEX),
            ]
        }
    )
