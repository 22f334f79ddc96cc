"""Configuration for the Big Two engine.

Rule policies, AI pacing and logging level live here. Defaults can be
overridden through ``BIGTWO_*`` environment variables by whatever bootstraps
the process; the engine itself only receives the resulting dataclasses.
"""

import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class RulesConfig:
    """Rule policy knobs.

    allow_flush: whether a single-suit, non-straight five-card hand is a
        recognized shape (ranked between Straight and FullHouse).
    urgency_threshold: opponent hand size at or below which the AI stops
        conserving strong cards.
    """

    allow_flush: bool = True
    urgency_threshold: int = 3


@dataclass(frozen=True)
class RoomConfig:
    """Room runtime settings."""

    ai_delay: float = 1.0  # seconds before an AI seat acts
    num_seats: int = 4


@dataclass(frozen=True)
class EngineConfig:
    """Top-level configuration bundle."""

    rules: RulesConfig = field(default_factory=RulesConfig)
    room: RoomConfig = field(default_factory=RoomConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "EngineConfig":
        """Build a configuration from ``BIGTWO_*`` environment variables."""
        env = os.environ if environ is None else environ

        rules = RulesConfig(
            allow_flush=_env_bool(env, "BIGTWO_ALLOW_FLUSH", RulesConfig.allow_flush),
            urgency_threshold=_env_int(env, "BIGTWO_URGENCY_THRESHOLD", RulesConfig.urgency_threshold),
        )
        room = RoomConfig(ai_delay=_env_float(env, "BIGTWO_AI_DELAY", RoomConfig.ai_delay))

        log_level = env.get("BIGTWO_LOG_LEVEL", "INFO").upper()
        if log_level not in VALID_LOG_LEVELS:
            logger.warning("Invalid BIGTWO_LOG_LEVEL '%s'. Using 'INFO'.", log_level)
            log_level = "INFO"

        return cls(rules=rules, room=room, log_level=log_level)

    def get_status(self) -> Dict[str, Any]:
        """Get current configuration status."""
        return asdict(self)


def _env_bool(env, name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    logger.warning("Invalid %s '%s'. Using %s.", name, raw, default)
    return default


def _env_int(env, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid %s '%s'. Using %s.", name, raw, default)
        return default
    if value < 0:
        logger.warning("Negative %s '%s'. Using %s.", name, raw, default)
        return default
    return value


def _env_float(env, name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s '%s'. Using %s.", name, raw, default)
        return default
    if value < 0:
        logger.warning("Negative %s '%s'. Using %s.", name, raw, default)
        return default
    return value


DEFAULT_RULES = RulesConfig()
DEFAULT_CONFIG = EngineConfig()
