import pytest
from netaddr import IPNetwork

from cidrkit.ip import (
    AddressError,
    BinaryAddressDecoder,
    InvalidInputError,
    InvalidMaskError,
    InvalidPrefixError,
    MaskToCidrEncoder,
    SubnetRange,
    SubnetRangeCalculator,
    compute_range,
    compute_ranges,
    decode_binary,
    encode_address,
    mask_to_prefix,
    prefix_to_mask,
    to_cidr,
)
from cidrkit.logging_config import Severity


# BinaryAddressDecoder


def test_decode_documented_binary_address():
    assert decode_binary("10000100101000101110011111111100") == "132.162.231.252"


def test_decode_boundary_addresses():
    assert decode_binary("0" * 32) == "0.0.0.0"
    assert decode_binary("1" * 32) == "255.255.255.255"
    assert decode_binary("1" + "0" * 31) == "128.0.0.0"
    assert decode_binary("0" * 31 + "1") == "0.0.0.1"


@pytest.mark.parametrize("value", [0, 1, 0x0A000001, 0x7FFFFFFF, 0x80000000, 0xAAAAAAAA, 0xC0A81737, 0xFFFFFFFF])
def test_decode_then_encode_reproduces_bits(value):
    bits = format(value, "032b")
    address = decode_binary(bits)

    octets = [int(octet) for octet in address.split(".")]
    assert len(octets) == 4
    assert all(0 <= octet <= 255 for octet in octets)
    assert encode_address(address) == bits


def test_decode_wrong_length_raises_invalid_input_error():
    with pytest.raises(InvalidInputError) as exc_info:
        decode_binary("101")
    assert exc_info.value.value == "101"
    assert "'101'" in str(exc_info.value)


def test_decode_non_binary_digit_raises_invalid_input_error():
    bits = "1020" + "0" * 28
    with pytest.raises(InvalidInputError) as exc_info:
        decode_binary(bits)
    assert exc_info.value.value == bits


def test_decode_too_long_raises_invalid_input_error():
    with pytest.raises(InvalidInputError):
        decode_binary("0" * 33)


def test_decode_reports_each_octet_to_sink(sink):
    BinaryAddressDecoder(sink).decode("10000100101000101110011111111100")

    assert len(sink.entries) == 4
    assert all(severity == Severity.INFO for _, severity, _ in sink.entries)
    assert all(component == "BinaryAddressDecoder" for _, _, component in sink.entries)
    assert "132" in sink.entries[0][0]
    assert "252" in sink.entries[3][0]


def test_decode_failure_writes_nothing_to_sink(sink):
    with pytest.raises(InvalidInputError):
        BinaryAddressDecoder(sink).decode("101")
    assert sink.entries == []


def test_encode_invalid_address_raises_invalid_input_error():
    with pytest.raises(InvalidInputError):
        encode_address("192.168.1")


# SubnetRangeCalculator


def test_compute_range_documented_subnet():
    result = compute_range("192.168.23.55/20")
    assert result.to_dict() == {
        "Subnet": "192.168.16.0",
        "Min": "192.168.16.1",
        "Max": "192.168.31.254",
        "Broadcast": "192.168.31.255",
    }
    assert result.prefix_length == 20
    assert result.usable_hosts == 4094


def test_compute_range_returns_subnet_range_fields():
    result = compute_range("10.20.30.40/24")
    assert isinstance(result, SubnetRange)
    assert result.subnet == "10.20.30.0"
    assert result.min == "10.20.30.1"
    assert result.max == "10.20.30.254"
    assert result.broadcast == "10.20.30.255"


def test_compute_range_slash_30():
    result = compute_range("192.168.1.6/30")
    assert result.to_dict() == {
        "Subnet": "192.168.1.4",
        "Min": "192.168.1.5",
        "Max": "192.168.1.6",
        "Broadcast": "192.168.1.7",
    }
    assert result.usable_hosts == 2


def test_compute_range_slash_31_point_to_point():
    result = compute_range("10.0.0.5/31")
    assert result.subnet == "10.0.0.4"
    assert result.min == "10.0.0.4"
    assert result.max == "10.0.0.5"
    assert result.broadcast == "10.0.0.5"
    assert result.usable_hosts == 2


def test_compute_range_slash_32_single_host():
    result = compute_range("10.1.2.3/32")
    assert result.to_dict() == {
        "Subnet": "10.1.2.3",
        "Min": "10.1.2.3",
        "Max": "10.1.2.3",
        "Broadcast": "10.1.2.3",
    }
    assert result.usable_hosts == 1


def test_compute_range_slash_0_whole_address_space():
    result = compute_range("1.2.3.4/0")
    assert result.to_dict() == {
        "Subnet": "0.0.0.0",
        "Min": "0.0.0.1",
        "Max": "255.255.255.254",
        "Broadcast": "255.255.255.255",
    }
    assert result.usable_hosts == 4294967294


@pytest.mark.parametrize("prefix_length", range(0, 31))
def test_compute_range_matches_netaddr(prefix_length):
    cidr = f"172.20.99.201/{prefix_length}"
    net = IPNetwork(cidr)

    result = compute_range(cidr)

    assert result.subnet == str(net.network)
    assert result.broadcast == str(net.broadcast)
    assert result.min == str(net.network + 1)
    assert result.max == str(net.broadcast - 1)


@pytest.mark.parametrize("cidr", ["10.0.0.0/33", "10.0.0.0/64", "10.0.0.0/99"])
def test_compute_range_prefix_above_32_raises_invalid_prefix_error(cidr):
    with pytest.raises(InvalidPrefixError) as exc_info:
        compute_range(cidr)
    assert exc_info.value.value == cidr


@pytest.mark.parametrize(
    "cidr",
    [
        "",
        "10.0.0.0",
        "10.0.0.0/",
        "10.0.0/8",
        "10.0.0.0/100",
        "10.0.0.0/-1",
        "300.0.0.0/8",
        "10.0.0.0/8/8",
        "ten.0.0.0/8",
        " 10.0.0.0/8",
        "10.0.0.1/٣٢",
        "١٠.0.0.1/8",
    ],
)
def test_compute_range_malformed_cidr_raises_invalid_input_error(cidr):
    with pytest.raises(InvalidInputError) as exc_info:
        compute_range(cidr)
    assert exc_info.value.value == cidr


def test_compute_range_uses_injected_decoder(sink):
    calculator = SubnetRangeCalculator(sink)
    calculator.compute_range("192.168.23.55/20")

    components = {component for _, _, component in sink.entries}
    assert components == {"SubnetRangeCalculator", "BinaryAddressDecoder"}
    # four boundary addresses, four octets each
    decoder_entries = [e for e in sink.entries if e[2] == "BinaryAddressDecoder"]
    assert len(decoder_entries) == 16


def test_compute_ranges_keeps_going_after_errors(sink):
    results = SubnetRangeCalculator(sink).compute_ranges(
        ["192.168.23.55/20", "10.0.0.0/40", "bogus", "10.1.2.3/32"]
    )

    assert [r.cidr for r in results] == ["192.168.23.55/20", "10.0.0.0/40", "bogus", "10.1.2.3/32"]
    assert [r.ok for r in results] == [True, False, False, True]
    assert results[0].range.broadcast == "192.168.31.255"
    assert isinstance(results[1].error, InvalidPrefixError)
    assert isinstance(results[2].error, InvalidInputError)
    assert results[2].range is None
    assert results[3].range.subnet == "10.1.2.3"

    warnings = sink.by_severity(Severity.WARNING)
    assert len(warnings) == 2
    assert "bogus" in warnings[1][0]


def test_compute_ranges_empty_batch():
    assert compute_ranges([]) == []


# MaskToCidrEncoder


def test_to_cidr_documented_mask():
    assert to_cidr("192.168.0.1", "255.255.240.0") == "192.168.0.1/20"


@pytest.mark.parametrize(
    "mask, expected",
    [
        ("0.0.0.0", 0),
        ("128.0.0.0", 1),
        ("255.0.0.0", 8),
        ("255.255.255.0", 24),
        ("255.255.255.252", 30),
        ("255.255.255.254", 31),
        ("255.255.255.255", 32),
    ],
)
def test_mask_to_prefix(mask, expected):
    assert mask_to_prefix(mask) == expected


@pytest.mark.parametrize("prefix_length", range(1, 31))
def test_prefix_to_mask_and_back(prefix_length):
    assert mask_to_prefix(prefix_to_mask(prefix_length)) == prefix_length


def test_prefix_to_mask_boundaries():
    assert prefix_to_mask(0) == "0.0.0.0"
    assert prefix_to_mask(20) == "255.255.240.0"
    assert prefix_to_mask(32) == "255.255.255.255"


def test_prefix_to_mask_out_of_range_raises_invalid_prefix_error():
    with pytest.raises(InvalidPrefixError):
        prefix_to_mask(33)


@pytest.mark.parametrize("mask", ["255.255.0.255", "0.255.255.255", "255.0.255.0", "255.255.255.253"])
def test_to_cidr_non_contiguous_mask_raises_invalid_mask_error(mask):
    with pytest.raises(InvalidMaskError) as exc_info:
        to_cidr("10.0.0.1", mask)
    assert exc_info.value.value == mask
    assert mask in str(exc_info.value)


def test_to_cidr_non_contiguous_mask_is_logged_as_error(sink):
    with pytest.raises(InvalidMaskError):
        MaskToCidrEncoder(sink).to_cidr("10.0.0.1", "255.255.0.255")

    errors = sink.by_severity(Severity.ERROR)
    assert len(errors) == 1
    assert "255.255.0.255" in errors[0][0]
    assert errors[0][2] == "MaskToCidrEncoder"


def test_to_cidr_malformed_mask_raises_invalid_input_error():
    with pytest.raises(InvalidInputError):
        to_cidr("10.0.0.1", "255.255.0")


def test_to_cidr_malformed_address_raises_invalid_input_error():
    with pytest.raises(InvalidInputError) as exc_info:
        to_cidr("999.1.1.1", "255.0.0.0")
    assert exc_info.value.value == "999.1.1.1"


def test_errors_are_value_errors():
    for error_type in (InvalidInputError, InvalidMaskError, InvalidPrefixError):
        assert issubclass(error_type, AddressError)
        assert issubclass(error_type, ValueError)
