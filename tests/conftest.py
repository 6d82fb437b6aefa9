"""Shared fixtures for the bigecdh test suite."""

import random

import pytest

from bigecdh import TOY17, Curve

ENV_VARS = (
    "BIGECDH_CURVE",
    "BIGECDH_LOG_LEVEL",
    "BIGECDH_SCALAR_BOUND",
    "BIGECDH_SEED",
)


@pytest.fixture
def toy() -> Curve:
    """y² = x³ + 7 over F₁₇, G = (6, 11), group order 18."""
    return TOY17


@pytest.fixture
def rng() -> random.Random:
    return random.Random(20240611)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """
    No BIGECDH_* variables and no stray .env file.

    Each variable is set then deleted so that monkeypatch also removes
    whatever ``load_dotenv`` writes during the test.
    """
    for var in ENV_VARS:
        monkeypatch.setenv(var, "placeholder")
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)
    return tmp_path
