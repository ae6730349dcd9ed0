"""
Unit tests for IPv4 arithmetic.

Tests mask conversion, network/broadcast calculation, host ranges
and block stepping across octet boundaries.
"""

import pytest

from src.netmath import ipv4


# ========================================
# Masks
# ========================================


class TestMaskConversion:
    """Prefix, mask, CIDR and wildcard conversions."""

    def test_prefix_24(self):
        assert ipv4.prefix_to_mask(24) == "255.255.255.0"

    @pytest.mark.parametrize(
        "prefix,mask",
        [(0, "0.0.0.0"), (8, "255.0.0.0"), (20, "255.255.240.0"), (26, "255.255.255.192"), (32, "255.255.255.255")],
    )
    def test_known_masks(self, prefix, mask):
        assert ipv4.prefix_to_mask(prefix) == mask

    def test_every_prefix_round_trips(self):
        for prefix in range(0, 33):
            assert ipv4.mask_to_prefix(ipv4.prefix_to_mask(prefix)) == prefix

    @pytest.mark.parametrize("prefix", [-1, 33])
    def test_prefix_out_of_range(self, prefix):
        with pytest.raises(ValueError):
            ipv4.prefix_to_mask(prefix)

    def test_cidr_helpers(self):
        assert ipv4.cidr_to_mask("/27") == "255.255.255.224"
        assert ipv4.cidr_to_mask("27") == "255.255.255.224"
        assert ipv4.mask_to_cidr("255.255.252.0") == "/22"

    def test_non_contiguous_mask_counts_bits(self):
        """Lenient mode only counts bits."""
        assert ipv4.mask_to_prefix("255.0.255.0") == 16
        assert not ipv4.is_contiguous_mask("255.0.255.0")

    def test_non_contiguous_mask_rejected_in_strict_mode(self):
        with pytest.raises(ValueError):
            ipv4.mask_to_prefix("255.0.255.0", strict=True)

    def test_wildcard_is_octet_complement(self):
        for prefix in range(8, 31):
            mask = ipv4.prefix_to_mask(prefix)
            wildcard = ipv4.wildcard_mask(mask)
            for mask_octet, wildcard_octet in zip(ipv4.parse_ipv4(mask), ipv4.parse_ipv4(wildcard)):
                assert wildcard_octet == 255 - mask_octet
            assert ipv4.wildcard_mask(wildcard) == mask

    def test_increment_and_interesting_octet(self):
        assert ipv4.subnet_increment("255.255.255.192") == 64
        assert ipv4.interesting_octet("255.255.255.192") == 3
        assert ipv4.subnet_increment("255.255.240.0") == 16
        assert ipv4.interesting_octet("255.255.240.0") == 2
        assert ipv4.subnet_increment("255.255.255.255") == 0


# ========================================
# Parsing
# ========================================


class TestParsing:
    """Dotted-decimal parsing and integer conversion."""

    @pytest.mark.parametrize("address", ["1.2.3", "1.2.3.4.5", "256.1.1.1", "a.b.c.d", "1.2.-3.4", ""])
    def test_malformed_addresses_raise(self, address):
        with pytest.raises(ValueError):
            ipv4.parse_ipv4(address)
        assert not ipv4.is_valid_ipv4(address)

    def test_int_round_trip(self):
        assert ipv4.ip_to_int("10.0.0.1") == 167772161
        assert ipv4.int_to_ip(167772161) == "10.0.0.1"

    def test_int_out_of_range(self):
        with pytest.raises(ValueError):
            ipv4.int_to_ip(2**32)


# ========================================
# Network math
# ========================================


class TestNetworkMath:
    """Network, broadcast and host range calculation."""

    def test_network_and_broadcast(self):
        network = ipv4.network_address("192.168.1.130", "255.255.255.192")
        assert network == "192.168.1.128"
        assert ipv4.broadcast_address(network, "255.255.255.192") == "192.168.1.191"

    def test_host_range_carries_across_octets(self):
        network = ipv4.network_address("172.16.37.9", "255.255.240.0")
        broadcast = ipv4.broadcast_address(network, "255.255.240.0")
        assert network == "172.16.32.0"
        assert broadcast == "172.16.47.255"
        assert ipv4.first_host(network) == "172.16.32.1"
        assert ipv4.last_host(broadcast) == "172.16.47.254"

    def test_last_host_borrows(self):
        assert ipv4.last_host("10.1.0.0") == "10.0.255.255"

    def test_usable_hosts_strictly_decreasing(self):
        counts = [ipv4.usable_host_count(prefix) for prefix in range(8, 31)]
        assert all(left > right for left, right in zip(counts, counts[1:]))

    def test_address_counts(self):
        assert ipv4.usable_host_count(24) == 254
        assert ipv4.usable_host_count(30) == 2
        assert ipv4.total_address_count(26) == 64

    def test_advance_by_block_within_octet(self):
        assert ipv4.advance_by_block("192.168.10.0", "255.255.255.128") == "192.168.10.128"

    def test_advance_by_block_carries(self):
        assert ipv4.advance_by_block("192.168.10.224", "255.255.255.224") == "192.168.11.0"
        assert ipv4.advance_by_block("10.255.0.0", "255.255.0.0") == "11.0.0.0"

    def test_advance_past_end_raises(self):
        with pytest.raises(ValueError):
            ipv4.advance_by_block("255.255.255.0", "255.255.255.0")

    def test_subnet_address(self):
        assert ipv4.subnet_address("10.0.0.0", 5, 26) == "10.0.1.64"


class TestSizing:
    """Host-bit and subnet-bit requirements."""

    @pytest.mark.parametrize("hosts,bits", [(1, 2), (2, 2), (3, 3), (30, 5), (62, 6), (63, 7), (500, 9)])
    def test_required_host_bits(self, hosts, bits):
        assert ipv4.required_host_bits(hosts) == bits

    @pytest.mark.parametrize("count,bits", [(1, 0), (2, 1), (3, 2), (8, 3), (9, 4)])
    def test_required_subnet_bits(self, count, bits):
        assert ipv4.required_subnet_bits(count) == bits

    def test_non_positive_requirements_raise(self):
        with pytest.raises(ValueError):
            ipv4.required_host_bits(0)
        with pytest.raises(ValueError):
            ipv4.required_subnet_bits(0)
