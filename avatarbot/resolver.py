"""Read-only avatar queries: permissions, defaults and asset existence."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

import aiohttp

from .catalog import is_official
from .errors import AlreadyUniversal, InvalidFormat, NotFound
from .identifiers import (
    DEFAULT_SPRITE_HOST,
    avatar_src,
    clean_input,
    convert,
    format_help,
    is_well_formed,
    looks_official,
    normalize,
)
from .models import UNSET, ChatUser
from .store import EntryStore
from .utils import utc_now

logger = logging.getLogger("avatarbot.resolver")

DECEMBER = 12
SEASONAL_SUFFIX = "xmas"

AssetExistenceChecker = Callable[[str], Awaitable[bool]]


class HttpAssetChecker:
    """Probe the sprite mirror; any failure counts as a missing asset."""

    def __init__(self, *, timeout: float = 10.0):
        self.timeout = timeout

    async def __call__(self, url: str) -> bool:
        if not url:
            return False
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(url, timeout=aiohttp.ClientTimeout(total=self.timeout)) as resp:
                    if resp.status != 200:
                        logger.debug("Avatar probe failed (%s): %s", resp.status, url)
                        return False
                    return True
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.debug("Avatar probe error for %s: %s", url, exc)
            return False


class AvatarResolver:
    def __init__(
        self,
        store: EntryStore,
        *,
        avatar_dir: Path,
        sprite_host: str = DEFAULT_SPRITE_HOST,
        checker: Optional[AssetExistenceChecker] = None,
        clock: Callable[[], datetime] = utc_now,
        custom_hosted: bool = True,
    ):
        self.store = store
        self.avatar_dir = avatar_dir
        self.sprite_host = sprite_host
        self.checker: AssetExistenceChecker = checker or HttpAssetChecker()
        self.clock = clock
        self.custom_hosted = custom_hosted

    @property
    def format_help(self) -> str:
        return format_help(self.custom_hosted)

    def src(self, avatar: str) -> str:
        return avatar_src(avatar, self.sprite_host)

    def can_use(self, user_id: str, raw_avatar: str) -> Optional[str]:
        avatar = normalize(raw_avatar)
        if not avatar:
            return None
        if is_official(avatar):
            return avatar

        entry = self.store.get(user_id)
        if entry is None:
            return None

        if avatar in entry:
            return avatar
        if f"#{avatar}" in entry:
            return f"#{avatar}"
        if avatar.startswith("#") and avatar[1:] in entry:
            return avatar[1:]
        return None

    def resolve_for_user(self, user: ChatUser, raw_avatar: str) -> Optional[str]:
        """Check the current id first, then ids the account previously held."""
        for user_id in (user.id, *user.previous_ids):
            avatar = self.can_use(user_id, raw_avatar)
            if avatar:
                return avatar
        return None

    def get_default(self, user_id: str) -> Optional[str]:
        entry = self.store.get(user_id)
        if entry is None:
            return None
        if self.clock().month == DECEMBER:
            for avatar in entry.allowed:
                if avatar and avatar.endswith(SEASONAL_SUFFIX):
                    return avatar
        if entry.default is UNSET:
            return entry.personal
        return entry.default

    def users_with(self, avatar: str) -> List[str]:
        return self.store.users_with(avatar)

    async def exists(self, avatar: str) -> bool:
        if "." in avatar:
            return (self.avatar_dir / avatar).is_file()
        if not avatar.startswith("#"):
            return is_official(avatar)
        try:
            return bool(await self.checker(self.src(avatar)))
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
            logger.debug("Existence check for %s failed: %s", avatar, exc)
            return False

    async def validate(self, raw_avatar: str, *, reject_official: bool = False) -> str:
        """Return the canonical id for raw_avatar or raise an AvatarError."""
        avatar = convert(clean_input(raw_avatar))
        if not avatar or not is_well_formed(avatar):
            raise InvalidFormat(f'Avatar "{avatar}" is not in a valid format. {self.format_help}')
        if not await self.exists(avatar):
            raise NotFound(f"Avatar \"{avatar}\" doesn't exist. {self.format_help}")
        if reject_official and looks_official(avatar):
            raise AlreadyUniversal(
                f'Avatar "{avatar}" is an official avatar that all users already have access to.'
            )
        return avatar


__all__ = [
    "AssetExistenceChecker",
    "AvatarResolver",
    "DECEMBER",
    "HttpAssetChecker",
    "SEASONAL_SUFFIX",
]
