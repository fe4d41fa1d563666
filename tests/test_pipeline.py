"""Tests for the single-pass generation pipeline."""

import json

from py_galaxy.config.options import GalaxyGenOptions, GenerationConfig, RealmOptions
from py_galaxy.core.pipeline import generate_galaxy
from py_galaxy.core.seeded_random import RandomSource
from py_galaxy.core.territory import ClaimStatus


def small_config(seed="pipeline"):
    return GenerationConfig(
        seed=seed,
        galaxy=GalaxyGenOptions(sector_count=5, galaxy_radius=20, planets_per_sector=4),
        realms=RealmOptions(realm_count=4, min_planets_per_realm=2, max_planets_per_realm=4),
        founding_year=42,
    )


class TestGenerateGalaxy:
    """Test the end-to-end pass."""

    def test_result_contents(self):
        result = generate_galaxy(small_config())

        assert result.galaxy_map.sector_count == 5
        assert result.galaxy_map.planet_count == 20
        assert result.realm_ids == list(result.ledger.realm_ids())
        assert 1 <= len(result.realm_ids) <= 4
        assert result.random_state.seed == "pipeline"
        assert result.random_state.call_count > 0

    def test_realm_invariants(self):
        result = generate_galaxy(small_config())
        ledger = result.ledger

        owners = {}
        for realm_id in result.realm_ids:
            planets = ledger.planets_of(realm_id)
            assert 2 <= len(planets) <= 4
            assert ledger.get_territory(realm_id).founding_year == 42
            for planet_id, status in planets.items():
                assert status is ClaimStatus.CORE
                assert result.galaxy_map.has_planet(planet_id)
                assert planet_id not in owners
                owners[planet_id] = realm_id

        for planet_id, realm_id in owners.items():
            assert dict(ledger.claims_on(planet_id)) == {realm_id: ClaimStatus.CORE}

    def test_same_seed_same_output(self):
        first = generate_galaxy(small_config("repeat")).to_dict()
        second = generate_galaxy(small_config("repeat")).to_dict()

        assert first == second

    def test_different_seed_different_output(self):
        first = generate_galaxy(small_config("one")).to_dict()
        second = generate_galaxy(small_config("two")).to_dict()

        assert first != second

    def test_to_dict_is_json_serializable(self):
        data = generate_galaxy(small_config()).to_dict()
        decoded = json.loads(json.dumps(data))

        assert set(decoded) == {"sectors", "planets", "lanes", "realms", "claims", "random_state"}
        assert len(decoded["sectors"]) == 5
        assert len(decoded["planets"]) == 20
        assert decoded["random_state"]["seed"] == "pipeline"

    def test_final_state_resumes_the_pass(self):
        rng = RandomSource("pipeline")
        result = generate_galaxy(small_config(), random_source=rng)

        resumed = RandomSource.from_state(result.random_state)

        assert resumed.call_count == rng.call_count
        assert [resumed.next() for _ in range(5)] == [rng.next() for _ in range(5)]

    def test_explicit_source_matches_default(self):
        implicit = generate_galaxy(small_config()).to_dict()
        explicit = generate_galaxy(small_config(), random_source=RandomSource("pipeline")).to_dict()

        assert implicit == explicit
