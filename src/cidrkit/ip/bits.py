"""
Octet and bit-string conversions shared by the IPv4 calculators.

Addresses are handled as native ints in [0, 2**32 - 1]; the most
significant octet is always the first one written.
"""

import re

from netaddr import INET_PTON, AddrFormatError, IPAddress

from cidrkit.ip.errors import InvalidInputError, InvalidPrefixError


ADDRESS_WIDTH = 32
OCTET_WIDTH = 8
MAX_ADDRESS = (1 << ADDRESS_WIDTH) - 1

BINARY_ADDRESS_RE = re.compile(r"[01]{32}")
DOTTED_ADDRESS_RE = re.compile(r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})")


def is_binary_address(bits: str) -> bool:
    """Check for exactly 32 characters of '0' and '1'."""
    return isinstance(bits, str) and BINARY_ADDRESS_RE.fullmatch(bits) is not None


def is_dotted_address(address: str) -> bool:
    """Check for four dot-separated decimal octets, each 0-255."""
    if not isinstance(address, str):
        return False
    match = DOTTED_ADDRESS_RE.fullmatch(address)
    if match is None:
        return False
    return all(int(octet) <= 255 for octet in match.groups())


def parse_dotted(address: str) -> int:
    """Convert a dotted-decimal address or mask to its 32-bit value.

    Raises:
        InvalidInputError: If the text is not a valid dotted-decimal address
    """
    if not is_dotted_address(address):
        raise InvalidInputError(address, "invalid dotted-decimal address")
    try:
        return IPAddress(address, 4, flags=INET_PTON).value
    except AddrFormatError as e:
        raise InvalidInputError(address, f"invalid dotted-decimal address ({e})") from e


def to_bits(value: int, width: int = ADDRESS_WIDTH) -> str:
    """Render value as a zero-padded binary string of the given width."""
    if width == 0:
        return ""
    return format(value, f"0{width}b")


def prefix_to_netmask(prefix_length: int) -> int:
    """Build the mask value with prefix_length leading one bits.

    Raises:
        InvalidPrefixError: If prefix_length is outside 0-32
    """
    if isinstance(prefix_length, bool) or not isinstance(prefix_length, int):
        raise InvalidPrefixError(prefix_length, "prefix length must be an integer")
    if not 0 <= prefix_length <= ADDRESS_WIDTH:
        raise InvalidPrefixError(prefix_length, "prefix length must be between 0 and 32")
    return (MAX_ADDRESS << (ADDRESS_WIDTH - prefix_length)) & MAX_ADDRESS
