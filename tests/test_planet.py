"""Tests for planet nodes."""

import pytest
from pydantic import ValidationError

from py_galaxy.core.planet import Continent, Planet, PlanetStatus, ResourceSpecialization


def make_planet(**overrides):
    fields = {"id": "sector-1-planet-1", "name": "Arrakis", "sector_id": "sector-1"}
    fields.update(overrides)
    return Planet(**fields)


class TestPlanet:
    """Test planet defaults and level clamping."""

    def test_defaults(self):
        planet = make_planet()

        assert planet.ownership == ""
        assert planet.status is PlanetStatus.NORMAL
        assert planet.development_level == 1
        assert planet.fortification_level == 0
        assert planet.resource_specialization is ResourceSpecialization.AGRICULTURE
        assert planet.continents == []

    def test_levels_clamped_on_construction(self):
        planet = make_planet(development_level=15, fortification_level=-2)

        assert planet.development_level == 10
        assert planet.fortification_level == 0

    def test_levels_rounded(self):
        planet = make_planet(development_level=4.6, fortification_level=2.2)

        assert planet.development_level == 5
        assert planet.fortification_level == 2

    def test_levels_clamped_on_assignment(self):
        planet = make_planet()

        planet.development_level = 0
        planet.fortification_level = 9

        assert planet.development_level == 1
        assert planet.fortification_level == 5

    def test_non_numeric_level_rejected(self):
        with pytest.raises(ValidationError):
            make_planet(development_level="high")

    def test_status_from_value(self):
        planet = make_planet(status="Besieged")
        assert planet.status is PlanetStatus.BESIEGED

        planet.status = PlanetStatus.DEVASTATED
        assert planet.status is PlanetStatus.DEVASTATED

    def test_identity_is_immutable(self):
        planet = make_planet()

        with pytest.raises(ValidationError):
            planet.id = "other"
        with pytest.raises(ValidationError):
            planet.sector_id = "sector-2"

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            make_planet(id="")

    def test_ownership_is_mutable(self):
        planet = make_planet()
        planet.ownership = "realm-1"
        assert planet.ownership == "realm-1"

    def test_add_continent(self):
        planet = make_planet()
        planet.add_continent(Continent(name="Eastern Reach", features=["Dune Sea"]))

        assert len(planet.continents) == 1
        assert planet.continents[0].features == ["Dune Sea"]
