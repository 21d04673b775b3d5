"""
Tests for skill configuration
"""
import pytest
from pydantic import ValidationError

from minecraft_skills.config import SkillsConfig


def test_defaults():
    config = SkillsConfig(_env_file=None)

    assert config.max_craft_depth == 5
    assert config.max_displayed_alternatives == 8
    assert config.station_reach == 3
    assert config.minecraft_version == "1.21.1"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MINECRAFT_SKILLS_MAX_CRAFT_DEPTH", "3")
    monkeypatch.setenv("MINECRAFT_SKILLS_MINECRAFT_VERSION", "1.20.4")

    config = SkillsConfig(_env_file=None)

    assert config.max_craft_depth == 3
    assert config.minecraft_version == "1.20.4"


def test_negative_depth_rejected():
    with pytest.raises(ValidationError):
        SkillsConfig(_env_file=None, max_craft_depth=-1)


def test_settings_options():
    assert SkillsConfig.model_config["env_prefix"] == "MINECRAFT_SKILLS_"
    assert SkillsConfig.model_config["env_file"] == ".env"

    config = SkillsConfig(_env_file=None, unknown_option=1)

    assert not hasattr(config, "unknown_option")
