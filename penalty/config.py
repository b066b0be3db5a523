from __future__ import annotations

import datetime as dt
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

log = logging.getLogger(__name__)

DEFAULT_DECAY_DAYS = 720


@dataclass(slots=True)
class BanPolicyConfig:
    decay_days: int = DEFAULT_DECAY_DAYS

    @property
    def decay_horizon(self) -> dt.timedelta:
        return dt.timedelta(days=self.decay_days)


@dataclass(slots=True)
class AppConfig:
    ban_policy: BanPolicyConfig = field(default_factory=BanPolicyConfig)
    log_level: str = "INFO"


def _ensure_env_loaded() -> None:
    """
    Load `.env` from the current working directory, if present. Values already
    in the environment win over the file.
    """
    env_path = Path.cwd() / ".env"
    if env_path.is_file():
        load_dotenv(dotenv_path=env_path)


def load_config() -> AppConfig:
    _ensure_env_loaded()

    decay_days = _read_int("BAN_DECAY_DAYS")
    if decay_days is None:
        decay_days = DEFAULT_DECAY_DAYS
    elif decay_days <= 0:
        log.warning("BAN_DECAY_DAYS=%s is not positive; using %d", decay_days, DEFAULT_DECAY_DAYS)
        decay_days = DEFAULT_DECAY_DAYS

    return AppConfig(
        ban_policy=BanPolicyConfig(decay_days=decay_days),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(app_config: AppConfig) -> None:
    logging.basicConfig(level=app_config.log_level)


def _read_int(env_key: str) -> Optional[int]:
    # Unset or unparsable counts (BAN_DECAY_DAYS) mean "use the default".
    value = os.getenv(env_key)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None
