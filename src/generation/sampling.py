"""
Random address sampling for question generation.

Addresses are drawn with bounded rejection sampling: a draw that lands in
a private, loopback, link-local or multicast range is discarded and
redrawn, at most `ip_sampling_max_attempts` times.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import TypeVar

from loguru import logger

from config import get_settings
from src.generation.errors import GenerationError
from src.generation.models import Difficulty
from src.netmath.ipv4 import format_ipv4, network_address, prefix_to_mask

T = TypeVar("T")


def is_private_or_reserved(first: int, second: int = 0) -> bool:
    """Check the first two octets against the ranges questions must avoid."""
    return (
        first == 10
        or first == 127
        or first >= 224
        or (first == 169 and second == 254)
        or (first == 172 and 16 <= second <= 31)
        or (first == 192 and second == 168)
    )


def _sample(
    draw: Callable[[], T],
    reject: Callable[[T], bool],
    what: str,
    max_attempts: int | None = None,
) -> T:
    """Draw until a value passes `reject`, giving up after max_attempts."""
    attempts = max_attempts or get_settings().ip_sampling_max_attempts
    for _ in range(attempts):
        value = draw()
        if not reject(value):
            return value
    logger.error(f"Sampling {what} failed after {attempts} attempts")
    raise GenerationError(f"Could not sample {what} within {attempts} attempts")


def random_public_ipv4(rng: random.Random, max_attempts: int | None = None) -> str:
    """A random unicast address outside the private and reserved ranges."""
    octets = _sample(
        lambda: [rng.randint(1, 223), rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255)],
        lambda o: is_private_or_reserved(o[0], o[1]),
        "a public IPv4 address",
        max_attempts,
    )
    return format_ipv4(octets)


def random_public_network(rng: random.Random, prefix: int, max_attempts: int | None = None) -> str:
    """Network address of a random public address under the given prefix."""
    return network_address(random_public_ipv4(rng, max_attempts), prefix_to_mask(prefix))


def _class_c(rng: random.Random, max_attempts: int | None) -> tuple[str, int]:
    first, second = _sample(
        lambda: (rng.randint(192, 223), rng.randint(0, 255)),
        lambda pair: is_private_or_reserved(*pair),
        "a class C network",
        max_attempts,
    )
    return format_ipv4([first, second, rng.randint(0, 255), 0]), 24


def _class_b(rng: random.Random, max_attempts: int | None) -> tuple[str, int]:
    first, second = _sample(
        lambda: (rng.randint(128, 191), rng.randint(0, 255)),
        lambda pair: is_private_or_reserved(*pair),
        "a class B network",
        max_attempts,
    )
    return format_ipv4([first, second, 0, 0]), 16


def _class_a(rng: random.Random, max_attempts: int | None) -> tuple[str, int]:
    first = _sample(
        lambda: rng.randint(1, 126),
        lambda octet: is_private_or_reserved(octet),
        "a class A network",
        max_attempts,
    )
    return format_ipv4([first, 0, 0, 0]), 8


def random_classful_network(
    rng: random.Random,
    difficulty: Difficulty,
    max_attempts: int | None = None,
) -> tuple[str, int]:
    """
    Pick a public base network and prefix for allocation exercises.

    easy: class C /24. medium: 60% class C, otherwise class B /16.
    hard: 40% C, 30% B, 30% A; 40% of the time the prefix is nudged by
    -2..+3 bits (kept within 8-30) and the address re-masked.
    """
    if difficulty == Difficulty.EASY:
        return _class_c(rng, max_attempts)

    roll = rng.random()
    if difficulty == Difficulty.MEDIUM:
        return _class_c(rng, max_attempts) if roll < 0.6 else _class_b(rng, max_attempts)

    if roll < 0.4:
        network, prefix = _class_c(rng, max_attempts)
    elif roll < 0.7:
        network, prefix = _class_b(rng, max_attempts)
    else:
        network, prefix = _class_a(rng, max_attempts)

    if rng.random() < 0.4:
        prefix = max(8, min(30, prefix + rng.randint(-2, 3)))
        network = network_address(network, prefix_to_mask(prefix))
    return network, prefix
