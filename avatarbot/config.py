"""Environment-driven settings for AvatarBot."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .identifiers import DEFAULT_SPRITE_HOST
from .persistence import DEFAULT_SAVE_DELAY
from .utils import bool_from_env, float_from_env, int_from_env, path_from_env

BASE_DIR = Path(__file__).resolve().parent.parent


def _resolve(path: Optional[Path], fallback: str) -> Path:
    resolved = path or Path(fallback)
    if not resolved.is_absolute():
        resolved = (BASE_DIR / resolved).resolve()
    return resolved


@dataclass(frozen=True)
class AvatarSettings:
    command_prefix: str
    log_level: str
    avatars_file: Path
    avatar_dir: Path
    name_history_file: Path
    legacy_config: Optional[Path]
    save_delay: float
    sprite_host: str
    probe_timeout: float
    modlog_channel_id: int
    custom_hosted: bool


def load_settings() -> AvatarSettings:
    legacy_config = path_from_env("AVATARBOT_LEGACY_CONFIG")
    return AvatarSettings(
        command_prefix=os.getenv("AVATARBOT_PREFIX", "!"),
        log_level=os.getenv("AVATARBOT_LOG_LEVEL", "INFO"),
        avatars_file=_resolve(path_from_env("AVATARBOT_AVATARS_FILE"), "config/avatars.json"),
        avatar_dir=_resolve(path_from_env("AVATARBOT_AVATAR_DIR"), "config/avatars"),
        name_history_file=_resolve(path_from_env("AVATARBOT_NAME_HISTORY_FILE"), "config/name_history.json"),
        legacy_config=_resolve(legacy_config, "") if legacy_config else None,
        save_delay=max(0.0, float_from_env("AVATARBOT_SAVE_DELAY", DEFAULT_SAVE_DELAY)),
        sprite_host=os.getenv("AVATARBOT_SPRITE_HOST", DEFAULT_SPRITE_HOST).strip() or DEFAULT_SPRITE_HOST,
        probe_timeout=max(1.0, float_from_env("AVATARBOT_PROBE_TIMEOUT", 10.0)),
        modlog_channel_id=int_from_env("AVATARBOT_MODLOG_CHANNEL_ID", 0),
        custom_hosted=bool_from_env("AVATARBOT_CUSTOM_HOSTED", True),
    )


__all__ = ["AvatarSettings", "BASE_DIR", "load_settings"]
