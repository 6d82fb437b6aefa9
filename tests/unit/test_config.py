"""
Tests for environment / .env configuration.
"""

import logging

import pytest

from bigecdh.config import Settings, load_settings


class TestLoadSettings:
    def test_defaults(self, clean_env) -> None:
        settings = load_settings()
        assert settings == Settings()
        assert settings.curve == "p192"
        assert settings.log_level == "WARNING"
        assert settings.scalar_bound is None
        assert settings.seed is None
        assert settings.log_level_value == logging.WARNING

    def test_environment(self, clean_env, monkeypatch) -> None:
        monkeypatch.setenv("BIGECDH_CURVE", "TOY17")
        monkeypatch.setenv("BIGECDH_LOG_LEVEL", "debug")
        monkeypatch.setenv("BIGECDH_SCALAR_BOUND", "65536")
        monkeypatch.setenv("BIGECDH_SEED", "42")
        settings = load_settings()
        assert settings.curve == "toy17"
        assert settings.log_level == "DEBUG"
        assert settings.scalar_bound == 65536
        assert settings.seed == 42

    def test_dotenv_in_working_directory(self, clean_env) -> None:
        (clean_env / ".env").write_text(
            "BIGECDH_CURVE=secp256k1\nBIGECDH_SEED=7\n"
        )
        settings = load_settings()
        assert settings.curve == "secp256k1"
        assert settings.seed == 7

    def test_explicit_env_file(self, clean_env) -> None:
        path = clean_env / "demo.env"
        path.write_text("BIGECDH_LOG_LEVEL=INFO\n")
        assert load_settings(path).log_level == "INFO"

    def test_environment_wins_over_file(self, clean_env, monkeypatch) -> None:
        (clean_env / ".env").write_text("BIGECDH_CURVE=secp256k1\n")
        monkeypatch.setenv("BIGECDH_CURVE", "toy17")
        assert load_settings().curve == "toy17"

    def test_empty_values_are_unset(self, clean_env, monkeypatch) -> None:
        monkeypatch.setenv("BIGECDH_SEED", "  ")
        monkeypatch.setenv("BIGECDH_SCALAR_BOUND", "")
        settings = load_settings()
        assert settings.seed is None
        assert settings.scalar_bound is None

    @pytest.mark.parametrize(
        "var, value, message",
        [
            ("BIGECDH_LOG_LEVEL", "loud", "unknown log level"),
            ("BIGECDH_SEED", "seven", "BIGECDH_SEED"),
            ("BIGECDH_SCALAR_BOUND", "0", "BIGECDH_SCALAR_BOUND"),
        ],
    )
    def test_invalid_values(
        self, clean_env, monkeypatch, var, value, message,
    ) -> None:
        monkeypatch.setenv(var, value)
        with pytest.raises(ValueError, match=message):
            load_settings()
