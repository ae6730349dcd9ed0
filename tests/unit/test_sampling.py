"""
Unit tests for random address sampling.
"""

import random

import pytest

from src.generation.errors import GenerationError
from src.generation.models import Difficulty
from src.generation.sampling import (
    is_private_or_reserved,
    random_classful_network,
    random_public_ipv4,
    random_public_network,
)
from src.netmath.ipv4 import parse_ipv4


class AlwaysPrivate(random.Random):
    """Random source stuck inside 10.0.0.0/8."""

    def randint(self, a, b):
        return 10 if a <= 10 <= b else a


class TestPrivateRanges:
    @pytest.mark.parametrize(
        "first,second",
        [(10, 1), (127, 0), (169, 254), (172, 16), (172, 31), (192, 168), (224, 0), (240, 1)],
    )
    def test_reserved(self, first, second):
        assert is_private_or_reserved(first, second)

    @pytest.mark.parametrize("first,second", [(8, 8), (172, 15), (172, 32), (192, 169), (169, 253), (223, 255)])
    def test_public(self, first, second):
        assert not is_private_or_reserved(first, second)


class TestRandomAddresses:
    """Rejection sampling."""

    def test_public_addresses_only(self):
        rng = random.Random(17)
        for _ in range(500):
            first, second, _, _ = parse_ipv4(random_public_ipv4(rng))
            assert not is_private_or_reserved(first, second)

    def test_network_is_masked(self):
        network = random_public_network(random.Random(2), 20)
        assert parse_ipv4(network)[2] % 16 == 0
        assert parse_ipv4(network)[3] == 0

    def test_exhausted_sampling_raises(self):
        with pytest.raises(GenerationError):
            random_public_ipv4(AlwaysPrivate(), max_attempts=5)


class TestClassfulNetworks:
    def test_easy_is_class_c(self):
        rng = random.Random(5)
        for _ in range(50):
            network, prefix = random_classful_network(rng, Difficulty.EASY)
            assert prefix == 24
            assert 192 <= parse_ipv4(network)[0] <= 223

    def test_medium_is_class_b_or_c(self):
        rng = random.Random(6)
        prefixes = {random_classful_network(rng, Difficulty.MEDIUM)[1] for _ in range(100)}
        assert prefixes == {16, 24}

    def test_hard_prefix_stays_in_range(self):
        rng = random.Random(7)
        for _ in range(200):
            network, prefix = random_classful_network(rng, Difficulty.HARD)
            assert 8 <= prefix <= 30
            assert parse_ipv4(network)[3] == 0 or prefix > 24
