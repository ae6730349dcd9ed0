"""
Subnetting question generators.

Sub-generators:
- basic: network / broadcast / host range / prefix / mask of one address
- vlsm: largest-first variable-length allocation for departments
- wildcard: wildcard masks and ACL address/wildcard pairs
- network: sizing calculations (required prefix, required mask,
  summarization, host count, subnet count, fixed hosts per subnet)
- ipv6: expanding and abbreviating IPv6 addresses

All of them take a Difficulty, a random.Random and a PhraseTable and
return a Question whose explanation is a tuple of ExplanationStep.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from src.delivery.phrases import PhraseTable, get_phrase_table
from src.generation.models import (
    AnswerField,
    Difficulty,
    ExplanationStep,
    NetworkMode,
    Question,
    SubnetType,
    parse_choice,
)
from src.generation.sampling import (
    random_classful_network,
    random_public_ipv4,
    random_public_network,
)
from src.netmath.ipv4 import (
    ADDRESS_BITS,
    advance_by_block,
    broadcast_address,
    first_host,
    format_ipv4,
    last_host,
    network_address,
    parse_ipv4,
    prefix_to_mask,
    required_host_bits,
    required_subnet_bits,
    subnet_address,
    total_address_count,
    usable_host_count,
    wildcard_mask,
)
from src.netmath.ipv6 import (
    GROUP_COUNT,
    compress_ipv6,
    format_ipv6_groups,
    longest_zero_run,
    random_ipv6_with_zero_run,
)

# ========================================
# Generator constants
# ========================================

BASIC_PREFIXES = {
    Difficulty.EASY: [8, 16, 24],
    Difficulty.MEDIUM: [8, 16, 20, 24, 27, 28],
    Difficulty.HARD: list(range(8, 31)),
}

BASIC_FOCUS = {
    Difficulty.EASY: ["network", "broadcast", "hosts"],
    Difficulty.MEDIUM: ["network", "broadcast", "first-last", "prefix"],
    Difficulty.HARD: ["network", "broadcast", "first-last", "prefix", "mask", "all"],
}

# (low, high) host ranges per department, largest first
VLSM_HOST_POOLS = {
    Difficulty.EASY: [(10, 29), (5, 14), (2, 6)],
    Difficulty.MEDIUM: [(30, 79), (15, 44), (5, 19), (2, 6)],
    Difficulty.HARD: [(50, 149), (20, 69), (10, 29), (5, 14), (2, 6)],
}
VLSM_LARGE_HOST_POOL = [(500, 1499), (200, 699), (100, 299), (50, 149), (20, 69)]

WILDCARD_PREFIXES = {
    Difficulty.EASY: [16, 24],
    Difficulty.MEDIUM: [8, 16, 24, 28],
    Difficulty.HARD: [8, 12, 16, 20, 22, 24, 26, 28, 30],
}

NETWORK_MODES = {
    Difficulty.EASY: [NetworkMode.REQUIRED_PREFIX, NetworkMode.HOST_COUNT, NetworkMode.SUBNET_COUNT],
    Difficulty.MEDIUM: [
        NetworkMode.REQUIRED_PREFIX,
        NetworkMode.REQUIRED_MASK,
        NetworkMode.SUMMARIZATION,
        NetworkMode.HOST_COUNT,
        NetworkMode.SUBNET_COUNT,
    ],
    Difficulty.HARD: list(NetworkMode),
}

FORCED_NETWORK_MODES = {
    SubnetType.SUBNETS_COUNT: NetworkMode.SUBNET_COUNT,
    SubnetType.HOSTS_PER_SUBNET: NetworkMode.FIXED_HOSTS,
    SubnetType.SUMMARIZATION: NetworkMode.SUMMARIZATION,
}

REQUIRED_HOSTS = {
    Difficulty.EASY: [6, 10, 25, 50],
    Difficulty.MEDIUM: [6, 10, 25, 50, 100, 250],
    Difficulty.HARD: [15, 30, 60, 120, 300, 500, 1000],
}

REQUIRED_SUBNETS = {
    Difficulty.EASY: [2, 4, 8],
    Difficulty.MEDIUM: [3, 6, 12, 24],
    Difficulty.HARD: [5, 10, 15, 25, 50, 100],
}

SUMMARY_BITS = {
    Difficulty.EASY: [1, 2],
    Difficulty.MEDIUM: [2, 3],
    Difficulty.HARD: [3, 4],
}

HOST_COUNT_PREFIXES = {
    Difficulty.EASY: [24, 26, 28],
    Difficulty.MEDIUM: [16, 20, 24, 27, 28, 29],
    Difficulty.HARD: [8, 12, 16, 20, 24, 26, 28, 29, 30],
}

SUBNET_COUNT_BASES = {
    Difficulty.EASY: [("192.168.0.0", 24), ("172.16.0.0", 16), ("10.0.0.0", 8)],
    Difficulty.MEDIUM: [("192.168.10.0", 24), ("172.20.0.0", 16), ("10.50.0.0", 16)],
}
SUBNET_COUNTS = {
    Difficulty.EASY: [4, 8, 16, 32],
    Difficulty.MEDIUM: [6, 12, 24, 48],
    Difficulty.HARD: [5, 10, 15, 25, 50, 100],
}
SUBNET_COUNT_HARD_PREFIXES = [8, 16, 20, 24]
LISTED_SUBNETS = 4

FIXED_HOSTS_START_PREFIXES = {
    Difficulty.EASY: [24],
    Difficulty.MEDIUM: [16, 20, 24],
    Difficulty.HARD: [16, 18, 20, 22, 24],
}
FIXED_HOSTS_RANGE = {
    Difficulty.EASY: (5, 30),
    Difficulty.MEDIUM: (5, 54),
    Difficulty.HARD: (5, 54),
}
NTH_SUBNET_RANGE = (5, 15)

# Longest allowed generated prefix; /31 and /32 have no usable hosts
MAX_PREFIX = 30

IPV6_ZERO_RUNS = {
    Difficulty.EASY: (3, 5),
    Difficulty.MEDIUM: (2, 4),
    Difficulty.HARD: (2, 3),
}


def _lines(*parts: str) -> str:
    return "\n".join(part for part in parts if part)


# ========================================
# Basic
# ========================================


def generate_basic_question(
    difficulty: Difficulty,
    rng: random.Random,
    phrases: PhraseTable,
) -> Question:
    """
    One address and prefix, asking for a single derived value (or all of them).

    The prompt never contains the value being asked for: prefix questions
    show the mask, mask questions show the other notation.
    """
    ip = random_public_ipv4(rng)
    prefix = rng.choice(BASIC_PREFIXES[difficulty])
    mask = prefix_to_mask(prefix)
    network = network_address(ip, mask)
    broadcast = broadcast_address(network, mask)
    focus = rng.choice(BASIC_FOCUS[difficulty])

    if focus == "prefix":
        show_prefix = False
    else:
        show_prefix = rng.random() < 0.5

    given = (
        phrases.text("basic.given_prefix", ip=ip, prefix=prefix)
        if show_prefix
        else phrases.text("basic.given_mask", ip=ip, mask=mask)
    )

    steps = [ExplanationStep("mask_from_prefix", {"prefix": prefix}, mask)]
    if focus != "hosts":
        steps.append(ExplanationStep("bitwise_and", {"ip": ip, "mask": mask}, network))

    network_field = AnswerField("network-address", phrases.text("label.network_address"), network)
    broadcast_field = AnswerField("broadcast-address", phrases.text("label.broadcast_address"), broadcast)
    first_field = AnswerField("first-host", phrases.text("label.first_host"), first_host(network))
    last_field = AnswerField("last-host", phrases.text("label.last_host"), last_host(broadcast))

    if focus == "network":
        ask = phrases.text("basic.ask_network")
        fields = [network_field]
    elif focus == "broadcast":
        ask = phrases.text("basic.ask_broadcast")
        fields = [broadcast_field]
        steps.append(ExplanationStep("bitwise_or", {"network": network, "wildcard": wildcard_mask(mask)}, broadcast))
    elif focus == "hosts":
        ask = phrases.text("basic.ask_hosts")
        usable = usable_host_count(prefix)
        fields = [AnswerField("usable-hosts", phrases.text("label.usable_hosts"), str(usable))]
        steps.append(
            ExplanationStep(
                "host_count",
                {"prefix": prefix, "host_bits": ADDRESS_BITS - prefix, "total": total_address_count(prefix)},
                str(usable),
            )
        )
    elif focus == "first-last":
        ask = phrases.text("basic.ask_first_last")
        fields = [first_field, last_field]
        steps.append(ExplanationStep("bitwise_or", {"network": network, "wildcard": wildcard_mask(mask)}, broadcast))
        steps.append(ExplanationStep("first_host", {"network": network}, first_field.answer))
        steps.append(ExplanationStep("last_host", {"broadcast": broadcast}, last_field.answer))
    elif focus == "prefix":
        ask = phrases.text("basic.ask_prefix")
        fields = [AnswerField("cidr-prefix", phrases.text("label.cidr_prefix"), f"/{prefix}")]
        steps.append(ExplanationStep("prefix_from_mask", {"mask": mask}, f"/{prefix}"))
    elif focus == "mask":
        if show_prefix:
            ask = phrases.text("basic.ask_mask_decimal")
            fields = [AnswerField("subnet-mask", phrases.text("label.subnet_mask_decimal"), mask)]
        else:
            ask = phrases.text("basic.ask_mask_cidr")
            fields = [AnswerField("subnet-mask", phrases.text("label.cidr_prefix"), f"/{prefix}")]
            steps.append(ExplanationStep("prefix_from_mask", {"mask": mask}, f"/{prefix}"))
    else:
        ask = phrases.text("basic.ask_all")
        fields = [network_field, broadcast_field, first_field, last_field]
        steps.append(ExplanationStep("bitwise_or", {"network": network, "wildcard": wildcard_mask(mask)}, broadcast))
        steps.append(ExplanationStep("first_host", {"network": network}, first_field.answer))
        steps.append(ExplanationStep("last_host", {"broadcast": broadcast}, last_field.answer))

    return Question(_lines(given, ask), tuple(fields), tuple(steps), SubnetType.BASIC, difficulty)


# ========================================
# VLSM
# ========================================


@dataclass(frozen=True)
class Department:
    name: str
    hosts: int


@dataclass(frozen=True)
class VlsmAllocation:
    """One department's block in a VLSM plan."""

    department: str
    hosts: int
    host_bits: int
    prefix: int
    mask: str
    network: str
    broadcast: str
    first_host: str
    last_host: str

    @property
    def usable_hosts(self) -> int:
        return usable_host_count(self.prefix)

    @property
    def cidr(self) -> str:
        return f"{self.network}/{self.prefix}"


def sort_departments(departments: Sequence[Department]) -> list[Department]:
    """Largest host requirement first; ties keep their original order."""
    return sorted(departments, key=lambda department: department.hosts, reverse=True)


def required_block_prefix(departments: Sequence[Department], base_prefix: int) -> int:
    """
    Longest prefix (at most base_prefix) whose block holds every department.

    Used to widen a base network that is too small for the requirements.
    """
    needed = sum(total_address_count(ADDRESS_BITS - required_host_bits(d.hosts)) for d in departments)
    prefix = base_prefix
    while prefix > 0 and total_address_count(prefix) < needed:
        prefix -= 1
    return prefix


def allocate_vlsm(base_network: str, base_prefix: int, departments: Sequence[Department]) -> list[VlsmAllocation]:
    """
    Allocate subnets largest-first from the start of the base network.

    Each department gets the smallest block with 2^h - 2 >= hosts; the
    cursor then moves by the block's subnet increment with carry. The
    whole chain is recomputed from the sorted order on every call.

    Raises:
        ValueError: If the departments do not fit in base_network/base_prefix.
    """
    base_size = total_address_count(base_prefix)
    base = network_address(base_network, prefix_to_mask(base_prefix))
    cursor = base
    used = 0
    allocations = []

    for department in sort_departments(departments):
        host_bits = required_host_bits(department.hosts)
        prefix = ADDRESS_BITS - host_bits
        used += total_address_count(prefix)
        if used > base_size:
            raise ValueError(f"{department.name} does not fit in {base}/{base_prefix}")

        mask = prefix_to_mask(prefix)
        network = network_address(cursor, mask)
        broadcast = broadcast_address(network, mask)
        allocations.append(
            VlsmAllocation(
                department=department.name,
                hosts=department.hosts,
                host_bits=host_bits,
                prefix=prefix,
                mask=mask,
                network=network,
                broadcast=broadcast,
                first_host=first_host(network),
                last_host=last_host(broadcast),
            )
        )
        cursor = advance_by_block(network, mask)

    return allocations


def generate_vlsm_question(
    difficulty: Difficulty,
    rng: random.Random,
    phrases: PhraseTable,
) -> Question:
    """Departments with host needs; ask for one department's subnet and mask."""
    base_network, base_prefix = random_classful_network(rng, difficulty)

    pools = VLSM_HOST_POOLS[difficulty]
    if difficulty == Difficulty.HARD and rng.random() < 0.5:
        pools = VLSM_LARGE_HOST_POOL

    departments = [
        Department(phrases.text("vlsm.department", letter=chr(ord("A") + index)), rng.randint(low, high))
        for index, (low, high) in enumerate(pools)
    ]

    fitted_prefix = required_block_prefix(departments, base_prefix)
    if fitted_prefix != base_prefix:
        logger.debug(f"Widening VLSM base /{base_prefix} to /{fitted_prefix}")
        base_prefix = fitted_prefix
        base_network = network_address(base_network, prefix_to_mask(base_prefix))

    ordered = sort_departments(departments)
    allocations = allocate_vlsm(base_network, base_prefix, departments)
    target_index = 0 if difficulty == Difficulty.EASY else rng.randint(1, len(ordered) - 1)
    target = allocations[target_index]

    text = _lines(
        phrases.text("vlsm.intro"),
        phrases.text("vlsm.allocated", network=base_network, prefix=base_prefix),
        *(phrases.text("vlsm.needs", department=d.name, hosts=d.hosts) for d in departments),
        phrases.text("vlsm.ask", department=target.department),
    )

    steps = [
        ExplanationStep(
            "sort_departments",
            {"order": ", ".join(f"{d.name} ({d.hosts})" for d in ordered)},
            ordered[0].name,
        )
    ]
    steps.extend(
        ExplanationStep(
            "vlsm_allocate",
            {
                "department": allocation.department,
                "hosts": allocation.hosts,
                "host_bits": allocation.host_bits,
                "usable": allocation.usable_hosts,
                "prefix": allocation.prefix,
            },
            allocation.cidr,
        )
        for allocation in allocations
    )

    fields = (
        AnswerField(
            "subnet-address",
            phrases.text("label.subnet_network_address"),
            target.network,
            (target.cidr,),
        ),
        AnswerField("subnet-mask", phrases.text("label.subnet_mask"), target.mask),
    )
    return Question(text, fields, tuple(steps), SubnetType.VLSM, difficulty)


# ========================================
# Wildcard
# ========================================


def generate_wildcard_question(
    difficulty: Difficulty,
    rng: random.Random,
    phrases: PhraseTable,
) -> Question:
    """Mask to wildcard conversion; ACL address/wildcard pair on hard."""
    prefix = rng.choice(WILDCARD_PREFIXES[difficulty])
    mask = prefix_to_mask(prefix)
    wildcard = wildcard_mask(mask)

    steps = [
        ExplanationStep("wildcard_octet", {"octet": octet}, str(255 - octet)) for octet in parse_ipv4(mask)
    ]
    wildcard_label = phrases.text("label.wildcard_mask")

    if difficulty != Difficulty.HARD:
        text = phrases.text("wildcard.convert", mask=mask)
        fields = (AnswerField("wildcard-mask", wildcard_label, wildcard),)
    else:
        network = random_public_network(rng, prefix)
        text = _lines(
            phrases.text("wildcard.acl_intro", network=network, prefix=prefix),
            phrases.text("wildcard.acl_ask"),
        )
        fields = (
            AnswerField("acl-ip", phrases.text("label.ip_address"), network),
            AnswerField("acl-wildcard", wildcard_label, wildcard),
        )
        steps.append(ExplanationStep("acl_pair", {"network": network, "wildcard": wildcard}, f"{network} {wildcard}"))

    return Question(text, fields, tuple(steps), SubnetType.WILDCARD, difficulty)


# ========================================
# Network calculation
# ========================================


def _subnet_fields(
    phrases: PhraseTable,
    base_network: str,
    prefix: int,
    numbers: Sequence[int],
    ids: Sequence[str],
) -> list[AnswerField]:
    """Fields for the n-th (1-based) subnets, answered as CIDR or bare address."""
    fields = []
    for number, field_id in zip(numbers, ids):
        address = subnet_address(base_network, number - 1, prefix)
        fields.append(
            AnswerField(
                field_id,
                phrases.text("label.subnet_n", number=number),
                f"{address}/{prefix}",
                (address,),
            )
        )
    return fields


def _required_prefix(difficulty, rng, phrases):
    hosts = rng.choice(REQUIRED_HOSTS[difficulty])
    host_bits = required_host_bits(hosts)
    prefix = ADDRESS_BITS - host_bits
    base_prefix = rng.choice([p for p in (16, 20, 24) if p < prefix])
    base = random_public_network(rng, base_prefix)

    text = _lines(
        phrases.text("network.hosts_per_subnet", network=base, prefix=base_prefix, hosts=hosts),
        phrases.text("network.ask_required_prefix"),
    )
    fields = [
        AnswerField("host-bits", phrases.text("label.host_bits"), str(host_bits)),
        AnswerField("subnet-prefix", phrases.text("label.cidr_prefix"), f"/{prefix}"),
    ]
    steps = [
        ExplanationStep("host_bits", {"hosts": hosts, "host_bits": host_bits, "usable": usable_host_count(prefix)}, str(host_bits)),
        ExplanationStep("prefix_from_host_bits", {"host_bits": host_bits}, f"/{prefix}"),
    ]
    return text, fields, steps


def _required_mask(difficulty, rng, phrases):
    count = rng.choice(REQUIRED_SUBNETS[difficulty])
    subnet_bits = required_subnet_bits(count)
    base_prefix = rng.choice([p for p in (8, 16, 20, 24) if p + subnet_bits <= MAX_PREFIX])
    base = random_public_network(rng, base_prefix)
    prefix = base_prefix + subnet_bits
    mask = prefix_to_mask(prefix)

    text = _lines(
        phrases.text("network.divide", network=base, prefix=base_prefix, count=count),
        phrases.text("network.ask_required_mask"),
    )
    fields = [
        AnswerField("subnet-bits", phrases.text("label.subnet_bits"), str(subnet_bits)),
        AnswerField("subnet-mask", phrases.text("label.subnet_mask_decimal"), mask),
    ]
    steps = [
        ExplanationStep("subnet_bits", {"count": count, "subnet_bits": subnet_bits, "subnets": 2**subnet_bits}, str(subnet_bits)),
        ExplanationStep("add_prefix_bits", {"base_prefix": base_prefix, "bits": subnet_bits}, f"/{prefix}"),
        ExplanationStep("mask_from_prefix", {"prefix": prefix}, mask),
    ]
    return text, fields, steps


def _summarization(difficulty, rng, phrases):
    bits = rng.choice(SUMMARY_BITS[difficulty])
    count = 2**bits
    first_octet, second_octet, _, _ = parse_ipv4(random_public_ipv4(rng))
    start = rng.randrange(0, 256, count)
    first = format_ipv4([first_octet, second_octet, start, 0])
    last = format_ipv4([first_octet, second_octet, start + count - 1, 0])

    prefix = 24 - bits
    mask = prefix_to_mask(prefix)
    summary = network_address(first, mask)

    text = _lines(
        phrases.text("network.summary_intro", count=count, first=first, last=last),
        phrases.text("network.ask_summary"),
    )
    fields = [
        AnswerField("summary-address", phrases.text("label.summary_address"), summary, (f"{summary}/{prefix}",)),
        AnswerField("summary-prefix", phrases.text("label.summary_prefix"), f"/{prefix}"),
    ]
    steps = [
        ExplanationStep("summary_bits", {"count": count, "bits": bits}, f"/{prefix}"),
        ExplanationStep("bitwise_and", {"ip": first, "mask": mask}, summary),
    ]
    return text, fields, steps


def _host_count(difficulty, rng, phrases):
    prefix = rng.choice(HOST_COUNT_PREFIXES[difficulty])
    usable = usable_host_count(prefix)
    text = phrases.text("network.ask_host_count", prefix=prefix)
    fields = [AnswerField("host-count", phrases.text("label.host_count"), str(usable))]
    steps = [
        ExplanationStep(
            "host_count",
            {"prefix": prefix, "host_bits": ADDRESS_BITS - prefix, "total": total_address_count(prefix)},
            str(usable),
        )
    ]
    return text, fields, steps


def _subnet_count(difficulty, rng, phrases):
    if difficulty == Difficulty.HARD:
        base_prefix = rng.choice(SUBNET_COUNT_HARD_PREFIXES)
        base = random_public_network(rng, base_prefix)
    else:
        base, base_prefix = rng.choice(SUBNET_COUNT_BASES[difficulty])

    count = rng.choice([c for c in SUBNET_COUNTS[difficulty] if base_prefix + required_subnet_bits(c) <= MAX_PREFIX])
    subnet_bits = required_subnet_bits(count)
    prefix = base_prefix + subnet_bits
    mask = prefix_to_mask(prefix)
    host_bits = ADDRESS_BITS - prefix

    text = _lines(
        phrases.text("network.divide", network=base, prefix=base_prefix, count=count),
        phrases.text("network.answer_following"),
    )
    fields = [
        AnswerField("subnet-mask", phrases.text("label.subnet_mask_decimal"), mask),
        AnswerField("host-bits", phrases.text("label.host_bits"), str(host_bits)),
        AnswerField("subnet-prefix", phrases.text("label.cidr_prefix"), f"/{prefix}"),
    ]
    listed = min(LISTED_SUBNETS, 2**subnet_bits)
    numbers = list(range(1, listed + 1))
    fields.extend(_subnet_fields(phrases, base, prefix, numbers, [f"subnet-{n}" for n in numbers]))

    steps = [
        ExplanationStep("subnet_bits", {"count": count, "subnet_bits": subnet_bits, "subnets": 2**subnet_bits}, str(subnet_bits)),
        ExplanationStep("add_prefix_bits", {"base_prefix": base_prefix, "bits": subnet_bits}, f"/{prefix}"),
        ExplanationStep("mask_from_prefix", {"prefix": prefix}, mask),
        ExplanationStep("host_bits_from_prefix", {"prefix": prefix}, str(host_bits)),
    ]
    steps.extend(
        ExplanationStep("subnet_n", {"number": n, "block": total_address_count(prefix)}, f.answer)
        for n, f in zip(numbers, fields[3:])
    )
    return text, fields, steps


def _fixed_hosts(difficulty, rng, phrases):
    low, high = FIXED_HOSTS_RANGE[difficulty]
    hosts = rng.randint(low, high)
    host_bits = required_host_bits(hosts)
    prefix = ADDRESS_BITS - host_bits
    mask = prefix_to_mask(prefix)

    min_n, max_n = NTH_SUBNET_RANGE
    start_prefix = rng.choice(
        [p for p in FIXED_HOSTS_START_PREFIXES[difficulty] if 2 ** (prefix - p) >= min_n]
    )
    base = random_public_network(rng, start_prefix)
    nth = rng.randint(min_n, min(max_n, 2 ** (prefix - start_prefix)))

    text = _lines(
        phrases.text("network.hosts_per_subnet", network=base, prefix=start_prefix, hosts=hosts),
        phrases.text("network.answer_following"),
        phrases.text("network.ask_fixed_hosts", hosts=hosts, number=nth),
    )
    fields = [
        AnswerField("host-bits", phrases.text("label.host_bits"), str(host_bits)),
        AnswerField("subnet-prefix", phrases.text("label.cidr_prefix"), f"/{prefix}"),
        AnswerField("subnet-mask", phrases.text("label.subnet_mask_decimal"), mask),
    ]
    subnet_fields = _subnet_fields(phrases, base, prefix, [1, 2, nth], ["subnet-1", "subnet-2", "subnet-n"])
    fields.extend(subnet_fields)

    steps = [
        ExplanationStep("host_bits", {"hosts": hosts, "host_bits": host_bits, "usable": usable_host_count(prefix)}, str(host_bits)),
        ExplanationStep("prefix_from_host_bits", {"host_bits": host_bits}, f"/{prefix}"),
        ExplanationStep("mask_from_prefix", {"prefix": prefix}, mask),
    ]
    steps.extend(
        ExplanationStep("subnet_n", {"number": n, "block": total_address_count(prefix)}, f.answer)
        for n, f in zip([1, 2, nth], subnet_fields)
    )
    return text, fields, steps


NETWORK_BUILDERS = {
    NetworkMode.REQUIRED_PREFIX: _required_prefix,
    NetworkMode.REQUIRED_MASK: _required_mask,
    NetworkMode.SUMMARIZATION: _summarization,
    NetworkMode.HOST_COUNT: _host_count,
    NetworkMode.SUBNET_COUNT: _subnet_count,
    NetworkMode.FIXED_HOSTS: _fixed_hosts,
}


def generate_network_question(
    difficulty: Difficulty,
    rng: random.Random,
    phrases: PhraseTable,
    mode: NetworkMode | None = None,
    subnet_type: SubnetType = SubnetType.NETWORK,
) -> Question:
    """Sizing calculations; the mode is picked by difficulty unless forced."""
    mode = mode or rng.choice(NETWORK_MODES[difficulty])
    text, fields, steps = NETWORK_BUILDERS[mode](difficulty, rng, phrases)
    logger.debug(f"Network calculation mode {mode.value}")
    return Question(text, tuple(fields), tuple(steps), subnet_type, difficulty)


# ========================================
# IPv6
# ========================================


def _ipv6_groups(difficulty: Difficulty, rng: random.Random) -> list[int]:
    low, high = IPV6_ZERO_RUNS[difficulty]
    run_length = rng.randint(low, high)
    run_start = rng.randint(0, GROUP_COUNT - run_length)
    groups = random_ipv6_with_zero_run(rng, run_length, run_start)
    if difficulty == Difficulty.HARD:
        # short groups so leading zeros matter
        groups = [group & 0x0FFF or group if rng.random() < 0.5 else group for group in groups]
    return groups


def generate_ipv6_question(
    difficulty: Difficulty,
    rng: random.Random,
    phrases: PhraseTable,
) -> Question:
    """Expand an abbreviated address or abbreviate a full one."""
    groups = _ipv6_groups(difficulty, rng)
    full = format_ipv6_groups(groups)
    abbreviated = compress_ipv6(full)
    start, length = longest_zero_run(groups)

    if rng.random() < 0.5:
        text = phrases.text("ipv6.expand", address=abbreviated)
        fields = (AnswerField("expanded-ipv6", phrases.text("label.expanded_ipv6"), full),)
        steps = (
            ExplanationStep("ipv6_fill_zero_run", {"address": abbreviated, "missing": length}, str(length)),
            ExplanationStep("ipv6_pad_groups", {"address": abbreviated}, full),
        )
    else:
        text = phrases.text("ipv6.abbreviate", address=full)
        fields = (AnswerField("abbreviated-ipv6", phrases.text("label.abbreviated_ipv6"), abbreviated),)
        steps = (
            ExplanationStep("ipv6_strip_leading_zeros", {"address": full}, ":".join(f"{g:x}" for g in groups)),
            ExplanationStep("ipv6_compress_zero_run", {"position": start + 1, "length": length}, abbreviated),
        )

    return Question(text, fields, steps, SubnetType.IPV6, difficulty)


# ========================================
# Dispatch
# ========================================


def generate_subnetting_question(
    subnet_type: str | SubnetType,
    difficulty: str | Difficulty,
    locale: str | None = None,
    rng: random.Random | None = None,
    phrases: PhraseTable | None = None,
) -> Question:
    """
    Generate one subnetting exercise of the requested type.

    Raises:
        InvalidParameterError: If the subnet type, difficulty or locale is unknown.
    """
    kind = parse_choice(SubnetType, subnet_type, "subnet type")
    level = parse_choice(Difficulty, difficulty, "difficulty")
    phrases = phrases or get_phrase_table(locale)
    rng = rng or random.Random()

    if kind == SubnetType.BASIC:
        question = generate_basic_question(level, rng, phrases)
    elif kind == SubnetType.VLSM:
        question = generate_vlsm_question(level, rng, phrases)
    elif kind == SubnetType.WILDCARD:
        question = generate_wildcard_question(level, rng, phrases)
    elif kind == SubnetType.IPV6:
        question = generate_ipv6_question(level, rng, phrases)
    else:
        question = generate_network_question(level, rng, phrases, FORCED_NETWORK_MODES.get(kind), kind)

    logger.debug(
        f"Generated {kind.value} question ({level.value}) with fields "
        f"{[answer_field.id for answer_field in question.answer_fields]}"
    )
    return question
