"""Tests for the name generation system."""

import pytest
from pydantic import ValidationError

from py_galaxy.core.name_generator import DEFAULT_SYLLABLE_SETS, NameGenerator, SyllableSet
from py_galaxy.core.seeded_random import RandomSource


class TestNameGenerator:
    """Test the name generator functionality."""

    def test_default_styles(self):
        gen = NameGenerator(RandomSource("names"))

        for style in ("GENERIC", "GUTTURAL", "MELODIC", "SECTOR", "PLANET", "REALM"):
            assert style in gen.syllable_sets

    def test_deterministic_generation(self):
        gen1 = NameGenerator(RandomSource("42"))
        gen2 = NameGenerator(RandomSource("42"))

        names1 = [gen1.generate_syllable_name("PLANET") for _ in range(10)]
        names2 = [gen2.generate_syllable_name("PLANET") for _ in range(10)]

        assert names1 == names2

    def test_names_are_capitalised(self):
        gen = NameGenerator(RandomSource("caps"))

        for style in DEFAULT_SYLLABLE_SETS:
            name = gen.generate_syllable_name(style)
            assert name[0].isupper()
            assert name[1:] == name[1:].lower()

    def test_each_name_draws_three_times(self):
        rng = RandomSource("draws")
        gen = NameGenerator(rng)

        gen.generate_syllable_name("REALM")

        assert rng.call_count == 3

    def test_name_built_from_syllables(self):
        rng = RandomSource("parts")
        gen = NameGenerator(rng)
        gen.add_syllable_set("FIXED", SyllableSet(initial=["zar"], middle=["ka"], final=["th"]))

        assert gen.generate_syllable_name("FIXED") == "Zarkath"
        assert rng.call_count == 0

    def test_unknown_style_rejected(self):
        gen = NameGenerator(RandomSource("unknown"))

        with pytest.raises(ValueError):
            gen.generate_syllable_name("ELVISH")
        with pytest.raises(ValueError):
            gen.generate_syllable_name("")

    def test_custom_sets_do_not_leak(self):
        gen = NameGenerator(RandomSource("isolated"))
        gen.add_syllable_set("LOCAL", SyllableSet(initial=["a"], middle=["b"], final=["c"]))

        assert "LOCAL" not in DEFAULT_SYLLABLE_SETS

    def test_empty_syllables_rejected(self):
        with pytest.raises(ValidationError):
            SyllableSet(initial=[], middle=["a"], final=["b"])

    def test_blank_syllables_rejected(self):
        with pytest.raises(ValidationError):
            SyllableSet(initial=[""], middle=["a"], final=["b"])
        with pytest.raises(ValidationError):
            SyllableSet(initial=["a"], middle=["b", ""], final=["c"])
