import importlib

import pytest

from florina_attendance.config import get_settings_module


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "florina_attendance.config.production"),
        ("PROD", "florina_attendance.config.production"),
        ("test", "florina_attendance.config.testing"),
        ("anything", "florina_attendance.config.development"),
    ],
)
def test_settings_module_from_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == expected


def test_testing_settings_are_cheap():
    settings = importlib.import_module("florina_attendance.config.testing")
    assert settings.PASSWORD_HASH_ITERATIONS < 10_000
    assert settings.ATTENDANCE_FIRST_SUBMISSION_FINAL is False
