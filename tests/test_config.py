"""Tests for settings and generation options."""

import json

import pytest
from pydantic import ValidationError

from py_galaxy.config import GalaxyGenOptions, GenerationConfig, RealmOptions, Settings, SpatialDistribution


class TestSettings:
    """Test environment driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PY_GALAXY_DEFAULT_SEED", raising=False)
        settings = Settings(_env_file=None)

        assert settings.default_seed == "default"
        assert settings.api_port == 8000
        assert settings.database_url.startswith("sqlite")

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("PY_GALAXY_DEFAULT_SEED", "from-env")
        monkeypatch.setenv("PY_GALAXY_API_PORT", "9100")

        settings = Settings(_env_file=None)

        assert settings.default_seed == "from-env"
        assert settings.api_port == 9100


class TestGenerationOptions:
    """Test option validation and loading."""

    def test_galaxy_defaults(self):
        options = GalaxyGenOptions()

        assert options.sector_count == 10
        assert options.galaxy_radius == 50.0
        assert options.planets_per_sector == 6

    def test_galaxy_bounds(self):
        with pytest.raises(ValidationError):
            GalaxyGenOptions(sector_count=0)
        with pytest.raises(ValidationError):
            GalaxyGenOptions(galaxy_radius=-1)
        with pytest.raises(ValidationError):
            GalaxyGenOptions(planets_per_sector=-1)

    def test_realm_defaults(self):
        options = RealmOptions()

        assert options.realm_count == 6
        assert options.min_planets_per_realm == 3
        assert options.max_planets_per_realm == 5
        assert options.spatial_distribution is SpatialDistribution.RANDOM

    def test_options_are_frozen(self):
        options = RealmOptions()
        with pytest.raises(ValidationError):
            options.realm_count = 2

    def test_seed_required(self):
        with pytest.raises(ValidationError):
            GenerationConfig(seed="")

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "galaxy.json"
        path.write_text(
            json.dumps(
                {
                    "seed": "file-seed",
                    "galaxy": {"sector_count": 4},
                    "realms": {"realm_count": 2, "spatial_distribution": "sectored"},
                }
            ),
            encoding="utf-8",
        )

        config = GenerationConfig.from_json_file(path)

        assert config.seed == "file-seed"
        assert config.galaxy.sector_count == 4
        assert config.galaxy.planets_per_sector == 6
        assert config.realms.spatial_distribution is SpatialDistribution.SECTORED

    def test_from_json_file_validates(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"seed": "x", "realms": {"min_planets_per_realm": 5, "max_planets_per_realm": 1}}),
            encoding="utf-8",
        )

        with pytest.raises(ValidationError):
            GenerationConfig.from_json_file(path)
