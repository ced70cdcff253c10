"""One-shot "you have a new avatar" delivery."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional, Protocol

from .models import AvatarEntry, ChatUser
from .persistence import AvatarFileGateway
from .resolver import AvatarResolver
from .store import EntryStore

logger = logging.getLogger("avatarbot.notifier")


class UserDirectory(Protocol):
    def get(self, user_id: str) -> Optional[ChatUser]:
        """Return the user if they are currently reachable."""
        ...


class AvatarNotifier:
    """Tells users about new grants the next time they can be reached.

    The ``not_notified`` flag is only cleared after a successful send, and the
    clear is written immediately. Users who never come back keep the flag.
    Sends to one user never overlap, and a send only clears the flag when it
    listed every avatar the user holds once it completes.
    """

    def __init__(
        self,
        store: EntryStore,
        resolver: AvatarResolver,
        gateway: AvatarFileGateway,
        directory: Optional[UserDirectory] = None,
        *,
        command_prefix: str = "!",
    ):
        self.store = store
        self.resolver = resolver
        self.gateway = gateway
        self.directory = directory
        self.command_prefix = command_prefix
        self._locks: Dict[str, asyncio.Lock] = {}

    def compose_message(self, entry: AvatarEntry) -> str:
        lines = ["You have a new custom avatar!"]
        for avatar in entry.real_avatars():
            src = self.resolver.src(avatar)
            lines.append(f"- `{avatar}` {src}".rstrip())
        lines.append(f"Use `{self.command_prefix}avatars` for usage instructions.")
        return "\n".join(lines)

    async def try_notify(self, user: Optional[ChatUser]) -> bool:
        if user is None:
            return False
        lock = self._locks.setdefault(user.id, asyncio.Lock())
        async with lock:
            entry = self.store.get(user.id)
            if entry is None or not entry.not_notified:
                return False
            announced = set(entry.real_avatars())
            delivered = await user.send(self.compose_message(entry))
            if not delivered:
                logger.debug("Avatar notice for %s not delivered; will retry on next login.", user.id)
                return False
            # Grants made while the send was in flight were not in the message.
            current = self.store.get(user.id)
            if current is None or not set(current.real_avatars()) <= announced:
                return True
            current.not_notified = False
            self.gateway.save(instant=True)
        return True

    async def notify_user_id(self, user_id: str) -> bool:
        if self.directory is None:
            return False
        return await self.try_notify(self.directory.get(user_id))

    async def handle_login(self, user: ChatUser) -> Optional[str]:
        """Apply the user's default avatar and deliver any pending notice."""
        avatar = self.resolver.get_default(user.id)
        if avatar:
            user.avatar = avatar
        await self.try_notify(user)
        return avatar


__all__ = ["AvatarNotifier", "UserDirectory"]
