"""
Core IPv4 address arithmetic.

Binary/dotted-decimal conversion, subnet boundary calculation and
mask to CIDR encoding. Everything here is pure: the only side channel
is the log sink injected at construction time.
"""

import re
from dataclasses import dataclass
from typing import Iterable

from netaddr import IPNetwork

from cidrkit.ip.bits import (
    ADDRESS_WIDTH,
    MAX_ADDRESS,
    OCTET_WIDTH,
    is_binary_address,
    parse_dotted,
    prefix_to_netmask,
    to_bits,
)
from cidrkit.ip.errors import (
    AddressError,
    InvalidInputError,
    InvalidMaskError,
    InvalidPrefixError,
)
from cidrkit.logging_config import NULL_SINK, LogSink, Severity


CIDR_RE = re.compile(r"([0-9]{1,3}(?:\.[0-9]{1,3}){3})/([0-9]{1,2})")


@dataclass(frozen=True)
class SubnetRange:
    """Boundary addresses of one CIDR subnet."""
    subnet: str
    min: str
    max: str
    broadcast: str
    prefix_length: int

    @property
    def usable_hosts(self) -> int:
        if self.prefix_length == 32:
            return 1
        if self.prefix_length == 31:
            return 2
        return (1 << (ADDRESS_WIDTH - self.prefix_length)) - 2

    def to_dict(self) -> dict[str, str]:
        return {
            "Subnet": self.subnet,
            "Min": self.min,
            "Max": self.max,
            "Broadcast": self.broadcast,
        }


@dataclass
class RangeResult:
    """Outcome of one input in a batch range calculation."""
    cidr: str
    range: SubnetRange | None = None
    error: AddressError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BinaryAddressDecoder:
    """Converts between 32-character binary strings and dotted-decimal."""

    component = "BinaryAddressDecoder"

    def __init__(self, sink: LogSink | None = None):
        self.sink = sink or NULL_SINK

    def decode(self, bits: str) -> str:
        """Decode a 32-character binary string into dotted-decimal.

        Example:
            >>> BinaryAddressDecoder().decode("10000100101000101110011111111100")
            '132.162.231.252'

        Raises:
            InvalidInputError: If bits is not exactly 32 characters of 0/1
        """
        if not isinstance(bits, str) or len(bits) != ADDRESS_WIDTH:
            raise InvalidInputError(bits, "binary address must be exactly 32 characters")
        if not is_binary_address(bits):
            raise InvalidInputError(bits, "binary address may only contain '0' and '1'")

        octets = []
        for start in range(0, ADDRESS_WIDTH, OCTET_WIDTH):
            group = bits[start:start + OCTET_WIDTH]
            octet = int(group, 2)
            self.sink.write(f"Decoded octet {group} -> {octet}", Severity.INFO, self.component)
            octets.append(str(octet))
        return ".".join(octets)

    def encode(self, address: str) -> str:
        """Encode a dotted-decimal address as a 32-character binary string."""
        return to_bits(parse_dotted(address))


class SubnetRangeCalculator:
    """Derives subnet, first/last host and broadcast from a CIDR string.

    /31 networks (RFC 3021) have two usable addresses and no broadcast of
    their own: min/subnet is the lower and max/broadcast the upper address.
    A /32 is a single host, so all four fields hold that address.
    """

    component = "SubnetRangeCalculator"

    def __init__(
        self,
        sink: LogSink | None = None,
        decoder: BinaryAddressDecoder | None = None,
    ):
        self.sink = sink or NULL_SINK
        self.decoder = decoder or BinaryAddressDecoder(self.sink)

    def parse(self, cidr: str) -> tuple[int, int]:
        """Split 'a.b.c.d/n' into its address value and prefix length.

        Raises:
            InvalidInputError: If the text is not CIDR notation
            InvalidPrefixError: If the prefix length is above 32
        """
        match = CIDR_RE.fullmatch(cidr) if isinstance(cidr, str) else None
        if match is None:
            raise InvalidInputError(cidr, "invalid CIDR, format is '<ip_addr>/<prefix_length>'")

        address_text, prefix_text = match.groups()
        try:
            address = parse_dotted(address_text)
        except InvalidInputError as e:
            raise InvalidInputError(cidr, f"invalid address in CIDR ({e.reason})") from e

        prefix_length = int(prefix_text)
        if prefix_length > ADDRESS_WIDTH:
            raise InvalidPrefixError(cidr, "prefix length must be between 0 and 32")
        return address, prefix_length

    def compute_range(self, cidr: str) -> SubnetRange:
        """Calculate the boundary addresses of a CIDR subnet.

        Example:
            >>> SubnetRangeCalculator().compute_range("192.168.23.55/20").to_dict()
            {'Subnet': '192.168.16.0', 'Min': '192.168.16.1', 'Max': '192.168.31.254', 'Broadcast': '192.168.31.255'}
        """
        address, prefix_length = self.parse(cidr)
        host_width = ADDRESS_WIDTH - prefix_length
        network = address & prefix_to_netmask(prefix_length)

        broadcast_host = (1 << host_width) - 1
        if prefix_length == 32:
            min_host = max_host = 0
        elif prefix_length == 31:
            min_host, max_host = 0, 1
        else:
            min_host, max_host = 1, broadcast_host - 1

        self.sink.write(
            f"{cidr}: network bits {to_bits(network >> host_width, prefix_length) or '-'}, "
            f"{host_width} host bits",
            Severity.INFO,
            self.component,
        )

        def render(host: int) -> str:
            return self.decoder.decode(to_bits(network | host))

        return SubnetRange(
            subnet=render(0),
            min=render(min_host),
            max=render(max_host),
            broadcast=render(broadcast_host),
            prefix_length=prefix_length,
        )

    def compute_ranges(self, cidrs: Iterable[str]) -> list[RangeResult]:
        """Calculate ranges for many CIDRs, collecting per-input errors."""
        results = []
        for cidr in cidrs:
            try:
                results.append(RangeResult(cidr=cidr, range=self.compute_range(cidr)))
            except AddressError as e:
                self.sink.write(f"Skipping {cidr}: {e}", Severity.WARNING, self.component)
                results.append(RangeResult(cidr=cidr, error=e))
        return results


class MaskToCidrEncoder:
    """Turns an address plus dotted-decimal subnet mask into CIDR notation."""

    component = "MaskToCidrEncoder"

    def __init__(self, sink: LogSink | None = None):
        self.sink = sink or NULL_SINK

    def prefix_length(self, subnet_mask: str) -> int:
        """Count the leading one bits of a contiguous subnet mask.

        Raises:
            InvalidInputError: If the mask is not dotted-decimal
            InvalidMaskError: If the one bits are not contiguous
        """
        mask = parse_dotted(subnet_mask)
        host_bits = ~mask & MAX_ADDRESS
        # all trailing ones: adding one carries into a single bit
        if host_bits & (host_bits + 1):
            self.sink.write(
                f"Subnet mask {subnet_mask} ({to_bits(mask)}) is not contiguous",
                Severity.ERROR,
                self.component,
            )
            raise InvalidMaskError(subnet_mask, "subnet mask is not contiguous")
        return ADDRESS_WIDTH - host_bits.bit_length()

    def to_cidr(self, ip_address: str, subnet_mask: str) -> str:
        """Compose 'ip_address/prefix_length' from an address and its mask.

        Example:
            >>> MaskToCidrEncoder().to_cidr("192.168.0.1", "255.255.240.0")
            '192.168.0.1/20'
        """
        parse_dotted(ip_address)
        prefix_length = self.prefix_length(subnet_mask)
        self.sink.write(
            f"Mask {subnet_mask} has prefix length {prefix_length}",
            Severity.INFO,
            self.component,
        )
        return f"{ip_address}/{prefix_length}"

    def to_mask(self, prefix_length: int) -> str:
        """Dotted-decimal subnet mask for a prefix length."""
        # raises InvalidPrefixError outside 0-32
        prefix_to_netmask(prefix_length)
        return str(IPNetwork(f"0.0.0.0/{prefix_length}").netmask)


def decode_binary(bits: str, sink: LogSink | None = None) -> str:
    """Decode a 32-character binary string into dotted-decimal."""
    return BinaryAddressDecoder(sink).decode(bits)


def encode_address(address: str, sink: LogSink | None = None) -> str:
    """Encode a dotted-decimal address as a 32-character binary string."""
    return BinaryAddressDecoder(sink).encode(address)


def compute_range(cidr: str, sink: LogSink | None = None) -> SubnetRange:
    """Calculate subnet boundaries from CIDR notation."""
    return SubnetRangeCalculator(sink).compute_range(cidr)


def compute_ranges(cidrs: Iterable[str], sink: LogSink | None = None) -> list[RangeResult]:
    """Calculate subnet boundaries for a batch of CIDRs."""
    return SubnetRangeCalculator(sink).compute_ranges(cidrs)


def to_cidr(ip_address: str, subnet_mask: str, sink: LogSink | None = None) -> str:
    """Compose CIDR notation from an address and a dotted-decimal mask."""
    return MaskToCidrEncoder(sink).to_cidr(ip_address, subnet_mask)


def mask_to_prefix(subnet_mask: str, sink: LogSink | None = None) -> int:
    """Prefix length of a contiguous dotted-decimal subnet mask."""
    return MaskToCidrEncoder(sink).prefix_length(subnet_mask)


def prefix_to_mask(prefix_length: int) -> str:
    """Dotted-decimal subnet mask for a prefix length."""
    return MaskToCidrEncoder().to_mask(prefix_length)
