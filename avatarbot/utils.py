"""Utility helpers for AvatarBot."""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

import discord

logger = logging.getLogger("avatarbot.utils")

_NON_ID_CHARS = re.compile(r"[^a-z0-9]+")


def int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%s. Falling back to %s.", name, raw, default)
        return default


def float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid float for %s=%s. Falling back to %s.", name, raw, default)
        return default


def bool_from_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off", ""}:
        return False
    logger.warning("Invalid boolean for %s=%s. Falling back to %s.", name, raw, default)
    return default


def path_from_env(name: str) -> Optional[Path]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    return Path(value).expanduser()


def to_id(name: object) -> str:
    """Collapse a display name into the lowercase alphanumeric user id."""
    if name is None:
        return ""
    return _NON_ID_CHARS.sub("", str(name).lower())


def is_username(name: str) -> bool:
    """Return True when name can identify an account."""
    stripped = (name or "").strip()
    if not stripped or len(stripped) > 32:
        return False
    if not stripped[0].isalnum():
        return False
    return bool(re.search(r"[a-z]", stripped.lower()))


def split_one(target: str, delimiter: str = ",") -> tuple[str, str]:
    head, _, tail = (target or "").partition(delimiter)
    return head.strip(), tail.strip()


def is_admin(member: discord.abc.User) -> bool:
    if isinstance(member, discord.Member):
        if member.guild_permissions.administrator:
            return True
        roles: Iterable[discord.Role] = getattr(member, "roles", [])
        return any(role.name.lower() == "admin" for role in roles)
    return False


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def epoch_ms(when: Optional[datetime] = None) -> int:
    return int((when or utc_now()).timestamp() * 1000)


__all__ = [
    "bool_from_env",
    "epoch_ms",
    "float_from_env",
    "int_from_env",
    "is_admin",
    "is_username",
    "path_from_env",
    "split_one",
    "to_id",
    "utc_now",
]
