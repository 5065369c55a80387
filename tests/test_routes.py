"""Tests for route models, netlink retrieval and route filtering."""

import ipaddress
import socket

import pytest

from riveripam.ipam.exceptions import InterfaceNotFoundError, RouteListError
from riveripam.ipam.routes import NetlinkRouteSource, filter_routes
from riveripam.models.enums import Family
from riveripam.models.route import Route


class FakeMessage:
    """Minimal stand-in for a pyroute2 netlink message."""

    def __init__(self, attrs, **fields):
        self.attrs = attrs
        self.fields = fields

    def get_attr(self, name):
        return self.attrs.get(name)

    def __getitem__(self, key):
        return self.fields[key]


class FakeIPRoute:
    def __init__(self, links=None, routes=None, fail=False):
        self.links = links or []
        self.routes = routes or []
        self.fail = fail
        self.route_families = []
        self.route_kwargs = []
        self.closed = False

    def get_links(self):
        if self.fail:
            raise OSError("netlink socket error")
        return self.links

    def get_routes(self, family, **kwarg):
        self.route_families.append(family)
        self.route_kwargs.append(kwarg)
        if self.fail:
            raise OSError("netlink socket error")
        return self.routes

    def close(self):
        self.closed = True


def _link(name, index):
    return FakeMessage({"IFLA_IFNAME": name}, index=index)


def _route(dst, dst_len, oif):
    attrs = {"RTA_OIF": oif}
    if dst is not None:
        attrs["RTA_DST"] = dst
    return FakeMessage(attrs, dst_len=dst_len)


# =============================================================================
# Route model
# =============================================================================


def test_route_from_netlink():
    route = Route.from_netlink(_route("10.0.0.64", 28, 5))

    assert route.destination == ipaddress.ip_interface("10.0.0.64/28")
    assert route.interface_index == 5
    assert route.family is Family.IPV4


def test_route_from_netlink_default_route():
    route = Route.from_netlink(_route(None, 0, 3))

    assert route.destination is None
    assert route.family is None
    assert str(route) == "default dev 3"


def test_route_keeps_unmasked_base():
    route = Route.parse("10.0.0.70/28", 5)

    assert str(route.destination.ip) == "10.0.0.70"
    assert str(route.destination.network) == "10.0.0.64/28"


# =============================================================================
# Filtering
# =============================================================================


def test_filter_routes_excludes_host_device_and_default():
    routes = [
        Route.parse("10.0.0.200/30", 2),
        Route.parse(None, 5),
        Route.parse("192.168.0.0/16", 5),
        Route.parse("10.0.0.64/28", 7),
    ]

    result = list(filter_routes(routes, host_device_index=2))

    assert result == [routes[2], routes[3]]


def test_filter_routes_preserves_order():
    routes = [Route.parse(f"10.0.{i}.0/24", 9 - i) for i in range(5)]

    assert list(filter_routes(routes, host_device_index=100)) == routes


def test_filter_routes_empty():
    assert list(filter_routes([], host_device_index=1)) == []


# =============================================================================
# Netlink source
# =============================================================================


class TestNetlinkRouteSource:

    def _source(self, ipr):
        source = NetlinkRouteSource()
        source._ipr = ipr
        return source

    def test_resolve_interface(self):
        source = self._source(
            FakeIPRoute(links=[_link("lo", 1), _link("cilium_host", 4)])
        )

        assert source.resolve_interface("cilium_host") == 4

    def test_resolve_interface_missing(self):
        source = self._source(FakeIPRoute(links=[_link("lo", 1)]))

        with pytest.raises(InterfaceNotFoundError, match="cilium_host"):
            source.resolve_interface("cilium_host")

    def test_resolve_interface_netlink_failure(self):
        source = self._source(FakeIPRoute(fail=True))

        with pytest.raises(InterfaceNotFoundError):
            source.resolve_interface("cilium_host")

    def test_list_routes(self):
        ipr = FakeIPRoute(
            routes=[_route(None, 0, 2), _route("10.0.0.64", 28, 5)]
        )
        source = self._source(ipr)

        routes = source.list_routes(Family.IPV4)

        assert ipr.route_families == [socket.AF_INET]
        assert ipr.route_kwargs == [{"table": 254}]
        assert routes == [Route.parse(None, 2), Route.parse("10.0.0.64/28", 5)]

    def test_list_routes_failure(self):
        source = self._source(FakeIPRoute(fail=True))

        with pytest.raises(RouteListError):
            source.list_routes(Family.IPV6)

    def test_close(self):
        ipr = FakeIPRoute()
        source = self._source(ipr)
        source.close()

        assert ipr.closed
        assert source._ipr is None
