"""IP address management exception classes."""


class IPAMError(Exception):
    """Base exception for IP address management."""

    pass


class ConfigurationError(IPAMError):
    """Family enabled without a usable allocation prefix."""

    pass


class ResourceUnavailableError(IPAMError):
    """Host networking state could not be retrieved."""

    pass


class InterfaceNotFoundError(ResourceUnavailableError):
    """Network device not found."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unable to find net_device {name}")


class RouteListError(ResourceUnavailableError):
    """Route table could not be listed."""

    pass


class AllocationError(IPAMError):
    """Address could not be allocated."""

    pass


class AddressAlreadyReservedError(AllocationError):
    """Address is already allocated."""

    def __init__(self, ip: str):
        self.ip = ip
        super().__init__(f"Address {ip} is already allocated")


class AddressOutOfRangeError(AllocationError):
    """Address is outside the allocator's prefix."""

    def __init__(self, ip: str, prefix: str):
        self.ip = ip
        self.prefix = prefix
        super().__init__(f"Address {ip} is not in the range {prefix}")


class RangeFullError(AllocationError):
    """No free address left in the allocator's prefix."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(f"Range {prefix} is full")
