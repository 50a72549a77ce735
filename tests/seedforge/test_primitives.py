"""
Tests for the sampling primitives.
"""

import math
import re

import pytest

from src.seedforge.engine import Engine
from src.seedforge.errors import RangeError, SeedforgeError
from src.seedforge.primitives import (
    boolean,
    capitalize,
    character,
    floating,
    integer,
    is_prime,
    letter,
    n,
    natural,
    normal,
    normal_pool,
    pad,
    pick,
    pickone,
    pickset,
    prime,
    shuffle,
    string,
    template,
    unique,
    weighted,
)


class FixedSource:
    """Replays a fixed list of uniform deviates."""

    def __init__(self, values):
        self._values = iter(values)

    def random(self):
        return next(self._values)


class TestIntegers:
    def test_bounds_map_to_endpoints(self):
        assert integer(FixedSource([0.0]), 1, 10) == 1
        assert integer(FixedSource([0.9999999]), 1, 10) == 10

    def test_range_containment(self):
        engine = Engine(42)
        values = [integer(engine, -5, 5) for _ in range(2000)]
        assert min(values) >= -5
        assert max(values) <= 5
        assert set(values) == set(range(-5, 6))

    def test_single_value_range(self):
        assert integer(Engine(1), 7, 7) == 7

    def test_min_greater_than_max(self):
        with pytest.raises(RangeError, match="Min cannot be greater than Max"):
            integer(Engine(1), 10, 1)

    def test_natural_rejects_negative_min(self):
        with pytest.raises(RangeError):
            natural(Engine(1), -1, 10)

    def test_natural_numerals(self):
        engine = Engine(8)
        for _ in range(100):
            assert len(str(natural(engine, numerals=4))) == 4

    def test_natural_exclude(self):
        engine = Engine(8)
        values = {natural(engine, 1, 5, exclude=[2, 3]) for _ in range(500)}
        assert values == {1, 4, 5}

    def test_natural_exclude_must_be_list(self):
        with pytest.raises(RangeError, match="exclude must be a list"):
            natural(Engine(1), 1, 5, exclude=2)

    def test_natural_exclude_must_hold_ints(self):
        with pytest.raises(TypeError):
            natural(Engine(1), 1, 5, exclude=["2"])


class TestFloating:
    def test_range_and_precision(self):
        engine = Engine(11)
        for _ in range(1000):
            value = floating(engine, -2.5, 2.5, fixed=3)
            assert -2.5 <= value <= 2.5
            assert round(value, 3) == value

    def test_small_fixed_range(self):
        engine = Engine(11)
        values = {floating(engine, 0.1, 0.3, fixed=1) for _ in range(300)}
        assert values <= {0.1, 0.2, 0.3}

    def test_lowest_draw_stays_above_min(self):
        value = floating(FixedSource([0.0]), 1.0000001, 3.0, fixed=0)
        assert value == 2.0
        assert value >= 1.0000001

    def test_highest_draw_stays_below_max(self):
        value = floating(FixedSource([0.9999999]), 0.0, 0.29999996, fixed=1)
        assert value == 0.2
        assert value <= 0.29999996

    def test_decimal_bounds_are_reachable(self):
        assert floating(FixedSource([0.0]), 0.7, 0.9, fixed=1) == 0.7
        assert floating(FixedSource([0.9999999]), 0.7, 0.9, fixed=1) == 0.9

    def test_no_representable_value(self):
        with pytest.raises(RangeError):
            floating(Engine(1), 0.11, 0.19, fixed=1)

    def test_negative_fixed(self):
        with pytest.raises(RangeError):
            floating(Engine(1), 0, 1, fixed=-1)

    def test_min_greater_than_max(self):
        with pytest.raises(RangeError):
            floating(Engine(1), 2.0, 1.0)


class TestBooleanAndPrimes:
    def test_likelihood_extremes(self):
        engine = Engine(3)
        assert not any(boolean(engine, 0) for _ in range(200))
        assert all(boolean(engine, 100) for _ in range(200))

    def test_likelihood_out_of_range(self):
        with pytest.raises(RangeError, match="Likelihood"):
            boolean(Engine(3), 101)

    @pytest.mark.parametrize("value,expected", [
        (2, True), (3, True), (4, False), (25, False), (97, True),
        (7919, True), (7921, False), (1, False), (0, False), (-7, False), (2.5, False),
    ])
    def test_is_prime(self, value, expected):
        assert is_prime(value) is expected

    def test_prime_in_range(self):
        engine = Engine(5)
        for _ in range(50):
            value = prime(engine, 100, 200)
            assert 100 <= value <= 200
            assert is_prime(value)

    def test_prime_empty_range(self):
        with pytest.raises(RangeError, match="No primes"):
            prime(Engine(5), 24, 28)


class TestStrings:
    def test_character_from_pool(self):
        engine = Engine(2)
        assert all(character(engine, pool="xyz") in "xyz" for _ in range(50))

    def test_character_empty_pool(self):
        with pytest.raises(RangeError):
            character(Engine(2), pool="")

    def test_character_classes(self):
        engine = Engine(2)
        assert all(character(engine, numeric=True).isdigit() for _ in range(50))
        assert all(character(engine, alpha=True, casing="upper").isupper() for _ in range(50))

    def test_string_length(self):
        engine = Engine(2)
        assert len(string(engine, length=12)) == 12
        assert 5 <= len(string(engine)) <= 20

    def test_string_negative_length(self):
        with pytest.raises(RangeError):
            string(Engine(2), length=-1)

    def test_letter(self):
        engine = Engine(2)
        assert letter(engine).islower()
        assert letter(engine, casing="upper").isupper()

    def test_template(self):
        value = template(Engine(4), "{AA###}-{aa}")
        assert re.fullmatch(r"[A-Z]{2}\d{3}-[a-z]{2}", value)

    def test_template_escapes(self):
        assert template(Engine(4), r"\{literal\}") == "{literal}"

    def test_template_invalid_escape(self):
        with pytest.raises(SeedforgeError, match="Invalid escape sequence"):
            template(Engine(4), r"\x")

    def test_template_invalid_replacement(self):
        with pytest.raises(SeedforgeError, match="Invalid replacement character"):
            template(Engine(4), "{#Z}")

    def test_pad_and_capitalize(self):
        assert pad(7, 3) == "007"
        assert pad(1234, 3) == "1234"
        assert pad(5, 4, "x") == "xxx5"
        assert capitalize("seed") == "Seed"
        assert capitalize("") == ""


class TestSelection:
    def test_pickone_from_pool(self):
        engine = Engine(6)
        assert all(pickone(engine, ["a", "b", "c"]) in "abc" for _ in range(50))

    def test_pickone_empty(self):
        with pytest.raises(RangeError, match="empty pool"):
            pickone(Engine(6), [])

    def test_pick_count(self):
        engine = Engine(6)
        assert pick(engine, [1, 2, 3]) in (1, 2, 3)
        assert len(pick(engine, [1, 2, 3], 2)) == 2

    def test_pickset_full_pool_is_permutation(self):
        pool = [1, 2, 3, 4, 5]
        result = pickset(Engine(42), pool, 5)
        assert sorted(result) == pool
        assert pool == [1, 2, 3, 4, 5]

    def test_pickset_distinct_positions(self):
        pool = ["a", "a", "b", "c"]
        engine = Engine(9)
        for _ in range(50):
            assert sorted(pickset(engine, pool, 4)) == sorted(pool)

    def test_pickset_zero(self):
        assert pickset(Engine(9), [1, 2], 0) == []

    def test_pickset_errors(self):
        with pytest.raises(RangeError):
            pickset(Engine(9), [], 1)
        with pytest.raises(RangeError):
            pickset(Engine(9), [1, 2], -1)
        with pytest.raises(RangeError, match="cannot exceed the pool size"):
            pickset(Engine(9), [1, 2], 3)

    def test_shuffle_is_permutation_of_copy(self):
        pool = list(range(20))
        result = shuffle(Engine(10), pool)
        assert sorted(result) == pool
        assert pool == list(range(20))
        assert result is not pool

    def test_shuffle_deterministic(self):
        assert shuffle(Engine(10), "abcdef") == shuffle(Engine(10), "abcdef")


class TestWeighted:
    def test_single_positive_weight(self):
        engine = Engine(12)
        assert all(weighted(engine, ["a", "b", "c"], [0, 1, 0]) == "b" for _ in range(100))

    def test_distribution_follows_weights(self):
        engine = Engine(12)
        picks = [weighted(engine, ["rare", "common"], [1, 99]) for _ in range(2000)]
        assert picks.count("common") > picks.count("rare")

    def test_trim_removes_choice(self):
        pool = ["a", "b"]
        weights = [1, 0]
        assert weighted(Engine(12), pool, weights, trim=True) == "a"
        assert pool == ["b"]
        assert weights == [0]

    def test_length_mismatch(self):
        with pytest.raises(RangeError, match="Length of pool and weights must match"):
            weighted(Engine(12), ["a"], [1, 2])

    def test_negative_weight(self):
        with pytest.raises(RangeError, match="negative"):
            weighted(Engine(12), ["a", "b"], [1, -1])

    def test_all_zero(self):
        with pytest.raises(RangeError, match="No valid entries"):
            weighted(Engine(12), ["a", "b"], [0, 0])

    def test_non_numeric_weight(self):
        with pytest.raises(TypeError, match="must be numbers"):
            weighted(Engine(12), ["a", "b"], [1, "2"])

    def test_nan_weight(self):
        with pytest.raises(RangeError):
            weighted(Engine(12), ["a", "b"], [1, float("nan")])


class TestHelpers:
    def test_n(self):
        engine = Engine(1)
        values = n(natural, 4, engine, 1, 3)
        assert len(values) == 4
        assert all(1 <= v <= 3 for v in values)

    def test_n_requires_callable(self):
        with pytest.raises(TypeError):
            n("natural", 2)

    def test_n_negative_count(self):
        with pytest.raises(RangeError):
            n(lambda: 1, -1)

    def test_unique_values_distinct(self):
        engine = Engine(1)
        values = unique(natural, 10, None, engine, 1, 20)
        assert len(values) == 10
        assert len(set(values)) == 10

    def test_unique_custom_comparator(self):
        engine = Engine(1)

        def same_parity(collected, value):
            return any(c % 2 == value % 2 for c in collected)

        values = unique(natural, 2, same_parity, engine, 1, 100)
        assert {v % 2 for v in values} == {0, 1}

    def test_unique_gives_up(self):
        engine = Engine(1)
        with pytest.raises(RangeError, match="num is likely too large for sample set"):
            unique(lambda: integer(engine, 1, 3), 5)

    def test_unique_requires_callables(self):
        with pytest.raises(TypeError):
            unique(None, 2)
        with pytest.raises(TypeError):
            unique(lambda: 1, 2, "not callable")


class TestNormal:
    def test_mean_and_spread(self):
        engine = Engine(21)
        values = [normal(engine, mean=10, dev=2) for _ in range(4000)]
        mean = sum(values) / len(values)
        variance = sum((v - mean) ** 2 for v in values) / len(values)
        assert abs(mean - 10) < 0.2
        assert abs(math.sqrt(variance) - 2) < 0.2

    def test_non_numeric_arguments(self):
        with pytest.raises(TypeError, match="Mean"):
            normal(Engine(1), mean="0")
        with pytest.raises(TypeError, match="Standard deviation"):
            normal(Engine(1), dev=None)

    def test_pool_must_be_list(self):
        with pytest.raises(TypeError, match="pool option must be a list"):
            normal(Engine(1), pool="abc")

    def test_pool_delegation(self):
        engine = Engine(21)
        pool = list("abcdefghij")
        assert all(normal(engine, mean=5, dev=1, pool=pool) in pool for _ in range(100))

    def test_normal_pool_empty(self):
        with pytest.raises(RangeError, match="pool is too small"):
            normal_pool(Engine(1), [])

    def test_normal_pool_unreachable_mean(self):
        with pytest.raises(RangeError):
            normal_pool(Engine(1), [1, 2, 3], mean=1000, dev=1)
