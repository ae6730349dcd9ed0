"""
IPv4 arithmetic for subnetting exercises.

Pure, stateless helpers working on dotted-decimal strings and integer
prefix lengths:
- Mask derivation (prefix <-> mask, CIDR <-> mask, wildcard)
- Network / broadcast / host range calculation
- Host-bit and subnet-bit sizing
- Address stepping with carry across octets

Every function returns a new string; nothing here keeps state.
"""

from __future__ import annotations

OCTET_COUNT = 4
ADDRESS_BITS = 32
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1


def parse_ipv4(address: str) -> list[int]:
    """
    Split a dotted-decimal address into its four octets.

    Raises:
        ValueError: If the address does not have four integer octets in 0-255.
    """
    parts = address.strip().split(".")
    if len(parts) != OCTET_COUNT:
        raise ValueError(f"Expected 4 octets in {address!r}")

    octets = []
    for part in parts:
        if not part.isdigit():
            raise ValueError(f"Invalid octet {part!r} in {address!r}")
        value = int(part)
        if value > 255:
            raise ValueError(f"Octet out of range {value} in {address!r}")
        octets.append(value)
    return octets


def format_ipv4(octets: list[int] | tuple[int, ...]) -> str:
    """Join four octets into dotted-decimal notation."""
    return ".".join(str(octet) for octet in octets)


def ip_to_int(address: str) -> int:
    """Convert a dotted-decimal address to its 32-bit integer value."""
    value = 0
    for octet in parse_ipv4(address):
        value = (value << 8) | octet
    return value


def int_to_ip(value: int) -> str:
    """Convert a 32-bit integer to dotted-decimal notation."""
    if not 0 <= value <= MAX_ADDRESS:
        raise ValueError(f"Address value out of range: {value}")
    return format_ipv4([(value >> shift) & 0xFF for shift in (24, 16, 8, 0)])


def is_valid_ipv4(address: str) -> bool:
    """Check whether a string is a well-formed dotted-decimal address."""
    try:
        parse_ipv4(address)
    except ValueError:
        return False
    return True


# ========================================
# Masks
# ========================================


def prefix_to_mask(prefix: int) -> str:
    """
    Convert a prefix length to a dotted-decimal subnet mask.

    Octets left of the prefix boundary are 255, the boundary octet is
    256 - 2^(8 - prefix % 8), everything after it is 0.
    """
    if not 0 <= prefix <= ADDRESS_BITS:
        raise ValueError(f"Prefix must be between 0 and 32, got {prefix}")

    full_octets, remaining_bits = divmod(prefix, 8)
    octets = []
    for index in range(OCTET_COUNT):
        if index < full_octets:
            octets.append(255)
        elif index == full_octets:
            octets.append(256 - 2 ** (8 - remaining_bits))
        else:
            octets.append(0)
    return format_ipv4(octets)


def mask_to_prefix(mask: str, strict: bool = False) -> int:
    """
    Count the set bits of a subnet mask.

    Contiguity is not checked unless strict=True, so 255.0.255.0 yields 16.

    Raises:
        ValueError: If strict and the mask is not a contiguous run of 1-bits.
    """
    if strict and not is_contiguous_mask(mask):
        raise ValueError(f"Subnet mask is not contiguous: {mask}")
    return sum(bin(octet).count("1") for octet in parse_ipv4(mask))


def is_contiguous_mask(mask: str) -> bool:
    """Check that a mask is a run of 1-bits followed only by 0-bits."""
    value = ip_to_int(mask)
    inverted = ~value & MAX_ADDRESS
    # inverted host part must be of the form 0...01...1
    return (inverted & (inverted + 1)) == 0


def cidr_to_mask(cidr: str) -> str:
    """Convert '/24' (or '24') to '255.255.255.0'."""
    return prefix_to_mask(int(cidr.strip().lstrip("/")))


def mask_to_cidr(mask: str) -> str:
    """Convert '255.255.255.0' to '/24'."""
    return f"/{mask_to_prefix(mask)}"


def wildcard_mask(mask: str) -> str:
    """Invert a mask octet by octet (255 - octet)."""
    return format_ipv4([255 - octet for octet in parse_ipv4(mask)])


def subnet_increment(mask: str) -> int:
    """
    Block size in the first octet that is not 255.

    Returns 0 for 255.255.255.255, meaning no further block can be allocated.
    """
    for octet in parse_ipv4(mask):
        if octet < 255:
            return 256 - octet
    return 0


def interesting_octet(mask: str) -> int:
    """Index of the first mask octet below 255 (3 for an all-255 mask)."""
    for index, octet in enumerate(parse_ipv4(mask)):
        if octet < 255:
            return index
    return OCTET_COUNT - 1


# ========================================
# Network math
# ========================================


def network_address(ip: str, mask: str) -> str:
    """Bitwise AND of address and mask, per octet."""
    return format_ipv4([a & m for a, m in zip(parse_ipv4(ip), parse_ipv4(mask))])


def broadcast_address(network: str, mask: str) -> str:
    """Set every host bit: network | (255 - mask), per octet."""
    return format_ipv4([n | (255 - m) for n, m in zip(parse_ipv4(network), parse_ipv4(mask))])


def first_host(network: str) -> str:
    """Network address + 1, carrying into higher octets when needed."""
    return add_to_address(network, 1)


def last_host(broadcast: str) -> str:
    """Broadcast address - 1, borrowing from higher octets when needed."""
    return add_to_address(broadcast, -1)


def usable_host_count(prefix: int) -> int:
    """2^(32 - prefix) - 2. Zero or negative for /31 and /32."""
    return 2 ** (ADDRESS_BITS - prefix) - 2


def total_address_count(prefix: int) -> int:
    """Number of addresses in a block, network and broadcast included."""
    return 2 ** (ADDRESS_BITS - prefix)


def add_to_address(ip: str, amount: int) -> str:
    """Add a (possibly negative) offset to an address with carry propagation."""
    return int_to_ip(ip_to_int(ip) + amount)


def advance_by_block(ip: str, mask: str) -> str:
    """
    Step an address to the start of the next block of the given mask.

    The subnet increment is added to the mask's interesting octet and any
    overflow carries into the octets on its left.

    Raises:
        ValueError: If the step would leave the IPv4 address space.
    """
    increment = subnet_increment(mask)
    if increment == 0:
        return ip

    octets = parse_ipv4(ip)
    index = interesting_octet(mask)
    octets[index] += increment
    for position in range(index, 0, -1):
        if octets[position] < 256:
            break
        octets[position] -= 256
        octets[position - 1] += 1
    if octets[0] > 255:
        raise ValueError(f"Address space exhausted after {ip} with mask {mask}")
    for position in range(index + 1, OCTET_COUNT):
        octets[position] = 0
    return format_ipv4(octets)


def subnet_address(base_network: str, index: int, prefix: int) -> str:
    """Address of the index-th (0-based) equal sized /prefix subnet of a base network."""
    return add_to_address(base_network, index * total_address_count(prefix))


def required_host_bits(hosts: int) -> int:
    """Smallest h with 2^h - 2 >= hosts."""
    if hosts < 1:
        raise ValueError(f"Host requirement must be positive, got {hosts}")
    bits = 1
    while 2**bits - 2 < hosts:
        bits += 1
    return bits


def required_subnet_bits(count: int) -> int:
    """Smallest s with 2^s >= count."""
    if count < 1:
        raise ValueError(f"Subnet count must be positive, got {count}")
    bits = 0
    while 2**bits < count:
        bits += 1
    return bits
