"""
IP arithmetic for subnetting and addressing exercises.

Provides:
- IPv4 mask, network, broadcast and host-range math
- Host-bit / subnet-bit sizing and address stepping
- IPv6 expansion and compression
"""

from src.netmath.ipv4 import (
    add_to_address,
    advance_by_block,
    broadcast_address,
    cidr_to_mask,
    first_host,
    ip_to_int,
    int_to_ip,
    is_contiguous_mask,
    last_host,
    mask_to_cidr,
    mask_to_prefix,
    network_address,
    parse_ipv4,
    prefix_to_mask,
    required_host_bits,
    required_subnet_bits,
    subnet_address,
    subnet_increment,
    usable_host_count,
    wildcard_mask,
)
from src.netmath.ipv6 import compress_ipv6, expand_ipv6, parse_ipv6_groups

__all__ = [
    "add_to_address",
    "advance_by_block",
    "broadcast_address",
    "cidr_to_mask",
    "compress_ipv6",
    "expand_ipv6",
    "first_host",
    "int_to_ip",
    "ip_to_int",
    "is_contiguous_mask",
    "last_host",
    "mask_to_cidr",
    "mask_to_prefix",
    "network_address",
    "parse_ipv4",
    "parse_ipv6_groups",
    "prefix_to_mask",
    "required_host_bits",
    "required_subnet_bits",
    "subnet_address",
    "subnet_increment",
    "usable_host_count",
    "wildcard_mask",
]
