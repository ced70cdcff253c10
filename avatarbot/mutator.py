"""Grant, revoke, default and transfer operations on the avatar store."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from .models import UNSET
from .notifier import AvatarNotifier
from .persistence import AvatarFileGateway
from .resolver import AvatarResolver
from .store import EntryStore
from .utils import epoch_ms, to_id, utc_now

logger = logging.getLogger("avatarbot.mutator")


class AvatarMutator:
    """Idempotent write operations. Each returns whether anything changed.

    Store updates happen without awaiting, so a grant is fully applied before
    the notifier gets a chance to run.
    """

    def __init__(
        self,
        store: EntryStore,
        resolver: AvatarResolver,
        gateway: AvatarFileGateway,
        *,
        notifier: Optional[AvatarNotifier] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.resolver = resolver
        self.gateway = gateway
        self.notifier = notifier
        self.clock = clock

    def commit(self, instant: bool = False) -> None:
        self.gateway.save(instant=instant)

    async def _notify(self, user_id: str) -> None:
        if self.notifier is not None:
            await self.notifier.notify_user_id(to_id(user_id))

    async def add_personal(self, user_id: str, avatar: str) -> bool:
        existing = self.store.get(user_id)
        if existing is not None and avatar in existing:
            return False

        entry = self.store.ensure(user_id)
        now = epoch_ms(self.clock())
        if entry.time_received is None:
            entry.time_received = now
        entry.time_updated = now
        if entry.personal:
            entry.extra.insert(0, entry.personal)
        entry.personal = avatar
        entry.default = UNSET
        entry.not_notified = True
        self.commit()

        await self._notify(user_id)
        return True

    async def add_allowed(self, user_id: str, avatar: str) -> bool:
        if not self._grant_allowed(user_id, avatar):
            return False
        self.commit()
        await self._notify(user_id)
        return True

    def _grant_allowed(self, user_id: str, avatar: str) -> bool:
        existing = self.store.get(user_id)
        if existing is not None and avatar in existing:
            return False
        entry = self.store.ensure(user_id)
        entry.extra.append(avatar)
        entry.not_notified = True
        return True

    def remove_allowed(self, user_id: str, avatar: str) -> bool:
        """Revoke one avatar. Callers flush with ``commit()`` when done."""
        entry = self.store.get(user_id)
        if entry is None or avatar not in entry:
            return False

        if entry.personal == avatar:
            entry.personal = None
        else:
            entry.extra = [current for current in entry.extra if current != avatar]
        self.store.prune(user_id)
        return True

    def remove_all(self, user_id: str) -> List[str]:
        entry = self.store.pop(user_id)
        if entry is None:
            return []
        self.commit(instant=True)
        return entry.real_avatars()

    def set_default(self, user_id: str, avatar: Optional[str]) -> bool:
        if avatar == self.resolver.get_default(user_id):
            return False
        entry = self.store.get(user_id)
        if entry is None:
            return False

        if avatar == entry.personal:
            entry.default = UNSET
        else:
            entry.default = avatar
        self.commit()
        return True

    async def move_avatars(self, source_id: str, target_id: str) -> bool:
        """Merge every grant of source_id into target_id and drop source_id."""
        if to_id(source_id) == to_id(target_id):
            return False
        source = self.store.get(source_id)
        if source is None:
            return False

        destination = self.store.get(target_id)
        merged = source.copy()
        if destination is not None:
            for avatar in destination.real_avatars():
                if avatar not in merged:
                    merged.extra.append(avatar)
        self.store.put(target_id, merged)
        self.store.pop(source_id)
        self.commit(instant=True)
        logger.info("Moved avatars from %s to %s", to_id(source_id), to_id(target_id))

        await self._notify(target_id)
        return True

    async def sync_group(self, avatar: str, user_ids: Iterable[str]) -> Tuple[List[str], List[str]]:
        """Make exactly user_ids hold avatar. Returns (added, removed)."""
        wanted: List[str] = []
        for user_id in user_ids:
            normalized = to_id(user_id)
            if normalized and normalized not in wanted:
                wanted.append(normalized)
        holders = set(self.store.users_with(avatar))

        added = [user_id for user_id in wanted if user_id not in holders]
        removed = sorted(holders.difference(wanted))
        for user_id in added:
            self._grant_allowed(user_id, avatar)
        for user_id in removed:
            self.remove_allowed(user_id, avatar)
        if added or removed:
            self.commit(instant=True)

        for user_id in added:
            await self._notify(user_id)
        return added, removed


__all__ = ["AvatarMutator"]
