"""
IPv6 notation helpers.

Only the textual forms are handled here: expanding an abbreviated address
to eight 4-digit groups and compressing a full address to its shortest
form. No prefix lengths, no embedded IPv4.
"""

from __future__ import annotations

import random

GROUP_COUNT = 8
GROUP_WIDTH = 4
HEX_DIGITS = set("0123456789abcdefABCDEF")


def expand_ipv6(address: str) -> str:
    """
    Expand an abbreviated IPv6 address to 8 colon-separated 4-digit groups.

    Malformed input (more than one '::') is returned unchanged. Input
    without '::' only gets its groups padded, so an address that is
    short on groups stays short.
    """
    address = address.strip()
    if "::" not in address:
        return ":".join(group.zfill(GROUP_WIDTH) for group in address.split(":"))

    parts = address.split("::")
    if len(parts) != 2:
        return address

    left = parts[0].split(":") if parts[0] else []
    right = parts[1].split(":") if parts[1] else []
    missing = GROUP_COUNT - len(left) - len(right)

    groups = [group.zfill(GROUP_WIDTH) for group in left]
    groups.extend(["0000"] * missing)
    groups.extend(group.zfill(GROUP_WIDTH) for group in right)
    return ":".join(groups)


def parse_ipv6_groups(address: str) -> list[int]:
    """
    Parse an IPv6 address (full or abbreviated) into 8 integer groups.

    Raises:
        ValueError: If the address does not describe exactly 8 hex groups
            of at most 4 digits each.
    """
    expanded = expand_ipv6(address)
    groups = expanded.split(":")
    if len(groups) != GROUP_COUNT:
        raise ValueError(f"Expected 8 groups in {address!r}")

    values = []
    for group in groups:
        if not group or len(group) > GROUP_WIDTH or not set(group) <= HEX_DIGITS:
            raise ValueError(f"Invalid group {group!r} in {address!r}")
        values.append(int(group, 16))
    return values


def format_ipv6_groups(groups: list[int]) -> str:
    """Render 8 integer groups as a full, lowercase, zero-padded address."""
    return ":".join(f"{group:04x}" for group in groups)


def longest_zero_run(groups: list[int]) -> tuple[int, int]:
    """
    Find the longest run of zero groups.

    Returns:
        (start, length) of the first longest run, or (-1, 0) if no group is zero.
    """
    best_start, best_length = -1, 0
    run_start, run_length = -1, 0
    for index, group in enumerate(groups):
        if group == 0:
            if run_length == 0:
                run_start = index
            run_length += 1
            if run_length > best_length:
                best_start, best_length = run_start, run_length
        else:
            run_length = 0
    return best_start, best_length


def compress_ipv6(address: str) -> str:
    """
    Shorten an IPv6 address to its canonical shortest form.

    Leading zeros are dropped from every group and the longest run of two
    or more zero groups is replaced by '::' (the first one on a tie).
    Output is lowercase.
    """
    groups = parse_ipv6_groups(address)
    start, length = longest_zero_run(groups)
    texts = [f"{group:x}" for group in groups]

    if length < 2:
        return ":".join(texts)

    left = ":".join(texts[:start])
    right = ":".join(texts[start + length :])
    return f"{left}::{right}"


def random_ipv6_with_zero_run(rng: random.Random, run_length: int, run_start: int) -> list[int]:
    """
    Build 8 random groups with exactly one zero run at the given position.

    Groups outside the run are never zero, so the run is the only one a
    compressor can pick.
    """
    if not 0 <= run_start <= GROUP_COUNT - run_length:
        raise ValueError(f"Zero run {run_start}+{run_length} does not fit in 8 groups")

    groups = []
    for index in range(GROUP_COUNT):
        if run_start <= index < run_start + run_length:
            groups.append(0)
        else:
            groups.append(rng.randint(1, 0xFFFF))
    return groups
