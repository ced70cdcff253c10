"""Adapters between discord.py objects and the avatar core."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import discord
from discord.ext import commands

from .persistence import atomic_write
from .utils import to_id

logger = logging.getLogger("avatarbot.discord")


class NameHistory:
    """Usernames each Discord account has been seen with, oldest first.

    Only account usernames are recorded. Discord keeps those unique, unlike
    nicknames and display names, which anyone can set to anything.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path
        self._names: Dict[int, List[str]] = {}

    def load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load name history %s: %s", self.path, exc)
            return
        if not isinstance(payload, dict):
            logger.warning("Name history %s must be an object; ignoring it.", self.path)
            return
        for key, names in payload.items():
            try:
                discord_id = int(key)
            except ValueError:
                continue
            if not isinstance(names, list):
                continue
            cleaned = [to_id(name) for name in names if isinstance(name, str)]
            self._names[discord_id] = [name for name in cleaned if name]

    def save(self) -> None:
        if self.path is None:
            return
        payload = {str(discord_id): names for discord_id, names in self._names.items()}
        try:
            atomic_write(self.path, json.dumps(payload))
        except OSError as exc:
            logger.warning("Failed to persist name history %s: %s", self.path, exc)

    def observe(self, discord_id: int, user_id: str) -> bool:
        """Record that discord_id currently goes by user_id. Returns True on a rename."""
        if not user_id:
            return False
        names = self._names.setdefault(discord_id, [])
        if names and names[-1] == user_id:
            return False
        if user_id in names:
            names.remove(user_id)
        names.append(user_id)
        if len(names) > 1:
            logger.info("Account %s renamed to %s (previously %s)", discord_id, user_id, names[-2])
        self.save()
        return True

    def previous_ids(self, discord_id: int, current_id: str) -> Tuple[str, ...]:
        """Most recent first, excluding the current id."""
        names = self._names.get(discord_id, [])
        return tuple(name for name in reversed(names) if name != current_id)


class DiscordChatUser:
    """Presents a Discord account through the ChatUser protocol.

    The id is derived from the account username. Previous ids are usernames
    the same account held earlier, so grants made before a rename still
    resolve.
    """

    def __init__(
        self,
        user: discord.abc.User,
        *,
        sessions: Dict[int, str],
        history: Optional[NameHistory] = None,
    ):
        self.user = user
        self._sessions = sessions
        self.id = to_id(user.name)
        self.previous_ids = history.previous_ids(user.id, self.id) if history is not None else ()

    @property
    def avatar(self) -> Optional[str]:
        return self._sessions.get(self.user.id)

    @avatar.setter
    def avatar(self, value: Optional[str]) -> None:
        if value is None:
            self._sessions.pop(self.user.id, None)
        else:
            self._sessions[self.user.id] = value

    async def send(self, text: str) -> bool:
        try:
            await self.user.send(text)
        except discord.HTTPException as exc:
            logger.warning("Failed to DM %s: %s", self.user, exc)
            return False
        return True

    def __repr__(self) -> str:
        return f"<DiscordChatUser id={self.id!r} discord_id={self.user.id}>"


def is_online(member: discord.Member) -> bool:
    return member.status != discord.Status.offline


class DiscordUserDirectory:
    """Finds reachable members across the guilds the bot can see."""

    def __init__(
        self,
        bot: commands.Bot,
        *,
        sessions: Optional[Dict[int, str]] = None,
        history: Optional[NameHistory] = None,
    ):
        self.bot = bot
        self.sessions: Dict[int, str] = sessions if sessions is not None else {}
        self.history = history if history is not None else NameHistory()

    def wrap(self, user: discord.abc.User) -> DiscordChatUser:
        self.history.observe(user.id, to_id(user.name))
        return DiscordChatUser(user, sessions=self.sessions, history=self.history)

    def find_member(self, user_id: str) -> Optional[discord.Member]:
        for guild in self.bot.guilds:
            for member in guild.members:
                if to_id(member.name) == user_id:
                    return member
        return None

    def get(self, user_id: str) -> Optional[DiscordChatUser]:
        member = self.find_member(user_id)
        if member is None or member.bot or not is_online(member):
            return None
        return self.wrap(member)


__all__ = ["DiscordChatUser", "DiscordUserDirectory", "NameHistory", "is_online"]
