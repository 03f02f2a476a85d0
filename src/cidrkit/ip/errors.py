"""
Exceptions raised by the IPv4 calculators.
"""


class AddressError(ValueError):
    """Base exception for IPv4 address arithmetic errors.

    Attributes:
        value: The offending input, exactly as it was given
        reason: Short description of what is wrong with it
    """

    def __init__(self, value: object, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"{reason}: '{value}'")


class InvalidInputError(AddressError):
    """Malformed binary string, dotted-decimal address or CIDR."""
    pass


class InvalidMaskError(AddressError):
    """Subnet mask whose one bits are not contiguous."""
    pass


class InvalidPrefixError(AddressError):
    """Prefix length outside 0-32."""
    pass
