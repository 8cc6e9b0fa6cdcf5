import pytest

import config
from config.local import LocalSettings
from config.prod import ProdSettings
from config.stage import StageSettings
from config.test import TestSettings


@pytest.mark.parametrize(
    "mode, expected",
    [
        ("local", LocalSettings),
        ("stage", StageSettings),
        ("prod", ProdSettings),
        ("test", TestSettings),
        ("anything-else", LocalSettings),
    ],
)
def test_mode_selects_settings_class(mode, expected):
    assert config._choose_settings_class(mode) is expected


@pytest.mark.parametrize("settings_class", [LocalSettings, StageSettings, ProdSettings, TestSettings])
def test_app_env_default_selects_its_own_class(settings_class):
    app_env = settings_class.model_fields["APP_ENV"].default
    assert config._choose_settings_class(app_env) is settings_class


def test_running_under_test_settings():
    assert isinstance(config.settings, TestSettings)
    assert config.settings.DATABASE_URL.startswith("sqlite+aiosqlite")
