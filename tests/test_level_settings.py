"""Tests for the level settings."""

import constants
from model.level_settings import LevelSettings


def test_defaults():
    settings = LevelSettings()

    assert settings.initial_constraints == ()
    assert settings.stop_on_success
    assert settings.max_attempts == constants.MAX_ATTEMPTS_DEFAULT
    assert not settings.uses_fixed_seed


def test_fixed_seed():
    assert LevelSettings(random_seed=0).uses_fixed_seed
