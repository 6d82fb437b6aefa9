"""
Runtime settings from the environment (optionally a ``.env`` file).

=========================  ===========  =================================
Variable                   Default      Meaning
=========================  ===========  =================================
``BIGECDH_CURVE``          ``p192``     named curve for the demo
``BIGECDH_LOG_LEVEL``      ``WARNING``  logging level name
``BIGECDH_SCALAR_BOUND``   unset        decimal bound for private scalars
``BIGECDH_SEED``           unset        integer seed, deterministic demo
=========================  ===========  =================================
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv

from .bigint import BigInt

DEFAULT_CURVE = "p192"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    curve: str = DEFAULT_CURVE
    log_level: str = DEFAULT_LOG_LEVEL
    scalar_bound: Optional[BigInt] = None
    seed: Optional[int] = None

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def parse_log_level(value: str) -> str:
    name = value.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"unknown log level {value!r}")
    return name


def _parse_seed(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(
            f"BIGECDH_SEED must be an integer, got {value!r}"
        ) from None


def _parse_bound(value: Optional[str]) -> Optional[BigInt]:
    if value is None or not value.strip():
        return None
    bound = BigInt.from_string(value.strip())
    if bound.is_zero():
        raise ValueError(
            f"BIGECDH_SCALAR_BOUND must be positive, got {value!r}"
        )
    return bound


def load_settings(env_file: Optional[Union[str, Path]] = None) -> Settings:
    """
    Read settings, after loading *env_file* (or a ``.env`` found from
    the working directory) into the environment.  Variables already set
    in the environment win over the file.
    """
    if env_file is None:
        env_file = find_dotenv(usecwd=True)
    load_dotenv(dotenv_path=env_file, override=False)
    return Settings(
        curve=os.getenv("BIGECDH_CURVE", DEFAULT_CURVE).strip().lower(),
        log_level=parse_log_level(
            os.getenv("BIGECDH_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        ),
        scalar_bound=_parse_bound(os.getenv("BIGECDH_SCALAR_BOUND")),
        seed=_parse_seed(os.getenv("BIGECDH_SEED")),
    )
