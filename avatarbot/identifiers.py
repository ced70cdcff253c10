"""Parsing and classification of avatar identifiers.

Avatar IDs come in three shapes:

- ``cynthia`` - official sprites under ``sprites/trainers/`` on the sprite host
- ``#splxraiders`` - hosted custom sprites under ``sprites/trainers-custom/``
- ``example.png`` - side-server files kept in the local avatar directory
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from .catalog import is_official

OFFICIAL_PATTERN = re.compile(r"^[a-z0-9-]+$")
CUSTOM_PATTERN = re.compile(r"^#[a-z0-9-]+$")
FILE_PATTERN = re.compile(r"^[a-z0-9.-]+$")
_MAYBE_CUSTOM_PATTERN = re.compile(r"^#?[a-z0-9-]+$")
_STRIP_PATTERN = re.compile(r"[^a-z0-9.-]+")

DEFAULT_SPRITE_HOST = "https://play.pokemonshowdown.com"

CUSTOM_FORMAT_HELP = "Custom avatars start with '#', like '#splxraiders'."
FILE_FORMAT_HELP = (
    "Custom avatars look like 'example.png'. Custom avatars should be put in the avatar directory. "
    "Your server must be registered for custom avatars to work."
)


class AvatarKind(str, Enum):
    OFFICIAL = "official"
    CUSTOM = "custom"
    FILE = "file"


def normalize(raw: str) -> str:
    """Lowercase and drop everything outside ``[a-z0-9-.]``."""
    return _STRIP_PATTERN.sub("", (raw or "").lower())


def clean_input(raw: str) -> str:
    return (raw or "").strip().lower()


def convert(avatar: str) -> str:
    """Fold ``#name.png`` into ``name.png``; files never carry the custom marker."""
    if avatar.startswith("#") and "." in avatar:
        return avatar[1:]
    return avatar


def is_well_formed(avatar: str) -> bool:
    return bool(_MAYBE_CUSTOM_PATTERN.match(avatar) or FILE_PATTERN.match(avatar))


def classify(avatar: str) -> Optional[AvatarKind]:
    if CUSTOM_PATTERN.match(avatar):
        return AvatarKind.CUSTOM
    if OFFICIAL_PATTERN.match(avatar):
        return AvatarKind.OFFICIAL if is_official(avatar) else None
    if FILE_PATTERN.match(avatar) and "." in avatar:
        return AvatarKind.FILE
    return None


def looks_official(avatar: str) -> bool:
    """True for bare ids, whether or not the catalog knows them."""
    return bool(OFFICIAL_PATTERN.match(avatar))


def avatar_src(avatar: str, sprite_host: str = DEFAULT_SPRITE_HOST) -> str:
    """Return the sprite URL, or an empty string for locally hosted files."""
    if "." in avatar:
        return ""
    if avatar.startswith("#"):
        path = f"trainers-custom/{avatar[1:]}.png"
    else:
        path = f"trainers/{avatar}.png"
    return f"{sprite_host.rstrip('/')}/sprites/{path}"


def format_help(custom_hosted: bool) -> str:
    return CUSTOM_FORMAT_HELP if custom_hosted else FILE_FORMAT_HELP


__all__ = [
    "AvatarKind",
    "CUSTOM_PATTERN",
    "DEFAULT_SPRITE_HOST",
    "FILE_PATTERN",
    "OFFICIAL_PATTERN",
    "avatar_src",
    "classify",
    "clean_input",
    "convert",
    "format_help",
    "is_well_formed",
    "looks_official",
    "normalize",
]
