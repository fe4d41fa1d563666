"""Tests for the seedable random source."""

import numpy as np
import pytest
from pydantic import ValidationError
from scipy.stats import chisquare

from py_galaxy.core.seeded_random import Mulberry32, RandomSource, RandomState, hash_seed


class TestHashSeed:
    """Test FNV-1a seed hashing."""

    def test_known_values(self):
        """ASCII seeds hash like plain FNV-1a over bytes."""
        assert hash_seed("a") == 0xE40C292C
        assert hash_seed("foobar") == 0xBF9CF968

    def test_result_is_uint32(self):
        for seed in ["x", "galaxy", "a much longer seed string", "été", "\U0001F30C"]:
            value = hash_seed(seed)
            assert 0 <= value <= 0xFFFFFFFF

    def test_empty_seed_rejected(self):
        with pytest.raises(ValueError):
            hash_seed("")

    def test_non_string_rejected(self):
        with pytest.raises(ValueError):
            hash_seed(42)


class TestRandomSource:
    """Test draws, counters and argument checking."""

    def test_known_stream(self):
        """The first draws for a fixed seed never change between releases."""
        rng = RandomSource("test-seed")

        assert [rng.next() for _ in range(3)] == [
            0.35841897572390735,
            0.5269410228356719,
            0.12075472134165466,
        ]

    def test_same_seed_same_sequence(self):
        rng1 = RandomSource("test-seed")
        rng2 = RandomSource("test-seed")

        values1 = [rng1.next() for _ in range(50)]
        values2 = [rng2.next() for _ in range(50)]

        assert values1 == values2

    def test_different_seeds_diverge(self):
        rng1 = RandomSource("seed-one")
        rng2 = RandomSource("seed-two")

        assert [rng1.next() for _ in range(10)] != [rng2.next() for _ in range(10)]

    def test_next_in_unit_interval(self):
        rng = RandomSource("range")
        for _ in range(2000):
            value = rng.next()
            assert 0.0 <= value < 1.0

    def test_call_count_tracks_draws(self):
        rng = RandomSource("count")
        assert rng.call_count == 0

        for _ in range(7):
            rng.next()
        assert rng.call_count == 7

        rng.next_int(1, 6)
        rng.next_bool()
        assert rng.call_count == 9

    def test_next_int_inclusive_bounds(self):
        rng = RandomSource("dice")
        values = {rng.next_int(1, 6) for _ in range(600)}
        assert values == {1, 2, 3, 4, 5, 6}

    def test_next_int_negative_range(self):
        rng = RandomSource("negative")
        for _ in range(200):
            assert -3 <= rng.next_int(-3, 3) <= 3

    def test_next_int_equal_bounds_does_not_draw(self):
        rng = RandomSource("fixed")
        assert rng.next_int(4, 4) == 4
        assert rng.call_count == 0

    def test_next_int_rejects_inverted_range(self):
        rng = RandomSource("inverted")
        with pytest.raises(ValueError):
            rng.next_int(5, 1)
        assert rng.call_count == 0

    def test_next_int_rejects_non_integers(self):
        rng = RandomSource("types")
        with pytest.raises(TypeError):
            rng.next_int(0.5, 3)
        with pytest.raises(TypeError):
            rng.next_int(0, "3")
        with pytest.raises(TypeError):
            rng.next_int(False, 3)

    def test_next_choice_returns_member(self):
        rng = RandomSource("choice")
        options = ["alpha", "beta", "gamma"]
        for _ in range(50):
            assert rng.next_choice(options) in options

    def test_next_choice_single_element_does_not_draw(self):
        rng = RandomSource("single")
        assert rng.next_choice(["only"]) == "only"
        assert rng.call_count == 0

    def test_next_choice_empty_rejected(self):
        rng = RandomSource("empty")
        with pytest.raises(ValueError):
            rng.next_choice([])

    def test_next_choice_unordered_rejected(self):
        rng = RandomSource("unordered")
        with pytest.raises(TypeError):
            rng.next_choice({"a", "b"})

    def test_shuffled_is_permutation(self):
        rng = RandomSource("shuffle")
        items = list(range(20))

        result = rng.shuffled(items)

        assert sorted(result) == items
        assert items == list(range(20))  # input untouched
        assert rng.call_count == len(items) - 1

    def test_shuffled_short_inputs(self):
        rng = RandomSource("short")
        assert rng.shuffled([]) == []
        assert rng.shuffled(["x"]) == ["x"]
        assert rng.call_count == 0


class TestRandomState:
    """Test state snapshots and resuming."""

    def test_resume_continues_sequence(self):
        rng = RandomSource("resume")
        for _ in range(25):
            rng.next()

        state = rng.get_state()
        expected = [rng.next() for _ in range(10)]

        resumed = RandomSource.from_state(state)
        assert [resumed.next() for _ in range(10)] == expected
        assert resumed.call_count == state.call_count + 10

    def test_set_state_accepts_dict(self):
        rng = RandomSource("dict-state")
        rng.next()
        snapshot = rng.get_state().model_dump()
        expected = rng.next()

        other = RandomSource("something-else")
        other.set_state(snapshot)

        assert other.seed == "dict-state"
        assert other.next() == expected

    def test_state_records_seed_and_count(self):
        rng = RandomSource("snapshot")
        rng.next()
        rng.next()

        state = rng.get_state()

        assert state.seed == "snapshot"
        assert state.call_count == 2
        assert state.internal_state == rng._rng.state

    def test_invalid_state_rejected(self):
        with pytest.raises(ValidationError):
            RandomState(seed="x", internal_state=0x1_0000_0000, call_count=0)
        with pytest.raises(ValidationError):
            RandomState(seed="x", internal_state=1, call_count=-1)
        with pytest.raises(ValidationError):
            RandomState(seed="", internal_state=1, call_count=0)

    def test_mulberry_state_advances(self):
        gen = Mulberry32(0)
        gen.next()
        assert gen.state == 0x6D2B79F5


class TestUniformity:
    """Statistical checks on the output distribution."""

    def test_next_int_is_uniform(self):
        rng = RandomSource("uniformity")
        draws = np.array([rng.next_int(0, 9) for _ in range(10000)])
        observed = np.bincount(draws, minlength=10)

        _, p_value = chisquare(observed)

        assert p_value > 0.001

    def test_next_is_uniform_over_buckets(self):
        rng = RandomSource("buckets")
        values = np.array([rng.next() for _ in range(10000)])
        observed, _ = np.histogram(values, bins=20, range=(0.0, 1.0))

        _, p_value = chisquare(observed)

        assert p_value > 0.001
        assert abs(values.mean() - 0.5) < 0.02

    def test_next_choice_is_uniform(self):
        rng = RandomSource("choices")
        options = ["alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta"]
        draws = np.array([options.index(rng.next_choice(options)) for _ in range(7000)])
        observed = np.bincount(draws, minlength=len(options))

        _, p_value = chisquare(observed)

        assert p_value > 0.001
        assert rng.call_count == 7000
