"""Durable storage of the avatar record, including the legacy config migration."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from .errors import AvatarFileCorrupt
from .identifiers import clean_input
from .models import MigrationReport
from .store import EntryStore
from .utils import to_id

logger = logging.getLogger("avatarbot.persistence")

DEFAULT_SAVE_DELAY = 60.0
LEGACY_PERSONAL_KEY = "customavatars"
LEGACY_GROUP_KEY = "allowedavatars"


def atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(content, encoding="utf-8")
    os.replace(tmp, path)


def load_legacy_config(path: Optional[Path]) -> Dict[str, object]:
    """Read the operator config that may still carry the old avatar maps."""
    if path is None or not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse legacy config %s: %s", path, exc)
        raise
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Legacy config %s must be a mapping; ignoring it.", path)
        return {}
    return data


def has_legacy_keys(config: Mapping[str, object]) -> bool:
    return bool(config.get(LEGACY_PERSONAL_KEY)) or bool(config.get(LEGACY_GROUP_KEY))


def migrate_legacy(
    personal_avatars: Optional[Mapping[str, object]],
    group_avatars: Optional[Mapping[str, Sequence[str]]],
) -> Tuple[EntryStore, int]:
    """Fold the user->avatar and avatar->users maps into per-user entries."""
    store = EntryStore()
    for user_id, avatar in (personal_avatars or {}).items():
        avatar_id = clean_input(str(avatar))
        if not avatar_id or not to_id(user_id):
            continue
        entry = store.ensure(str(user_id))
        entry.personal = avatar_id

    for avatar, users in (group_avatars or {}).items():
        avatar_id = clean_input(str(avatar))
        if not avatar_id:
            continue
        if isinstance(users, str):
            users = [users]
        for user_id in users or ():
            if not to_id(user_id):
                continue
            entry = store.ensure(str(user_id))
            if avatar_id not in entry:
                entry.extra.append(avatar_id)

    return store, len(store)


class AvatarFileGateway:
    """Owns the JSON file behind an EntryStore.

    ``save()`` coalesces writes inside ``save_delay`` seconds; ``save(instant=True)``
    writes right away and supersedes any pending debounced write.
    """

    def __init__(
        self,
        path: Path,
        *,
        save_delay: float = DEFAULT_SAVE_DELAY,
        legacy_config: Optional[Mapping[str, object]] = None,
    ):
        self.path = path
        self.save_delay = max(0.0, save_delay)
        self.legacy_config: Mapping[str, object] = legacy_config or {}
        self.store: Optional[EntryStore] = None
        self.flush_count = 0
        self.save_requests = 0
        self._pending: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def load(self) -> Tuple[EntryStore, MigrationReport]:
        legacy_present = has_legacy_keys(self.legacy_config)
        if self.path.exists():
            try:
                payload = json.loads(self.path.read_text(encoding="utf-8"))
                store = EntryStore.from_payload(payload)
            except (OSError, ValueError) as exc:
                # json.JSONDecodeError is a ValueError.
                raise AvatarFileCorrupt(f"Unable to load avatar record {self.path}: {exc}") from exc
            self.store = store
            logger.info("Loaded %s avatar entries from %s", len(store), self.path)
            return store, MigrationReport(legacy_keys_present=legacy_present)

        personal = self.legacy_config.get(LEGACY_PERSONAL_KEY)
        group = self.legacy_config.get(LEGACY_GROUP_KEY)
        store, migrated = migrate_legacy(
            personal if isinstance(personal, Mapping) else None,
            group if isinstance(group, Mapping) else None,
        )
        self.store = store
        self.flush()
        logger.info("Created avatar record %s with %s migrated entries", self.path, migrated)
        return store, MigrationReport(
            migrated=True,
            migrated_users=migrated,
            legacy_keys_present=legacy_present,
        )

    def save(self, instant: bool = False) -> None:
        self.save_requests += 1
        if instant or self.save_delay == 0:
            self.flush()
            return
        if self._pending is not None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.flush()
            return
        self._pending = loop.call_later(self.save_delay, self._flush_pending)

    def flush(self) -> None:
        """Write the current store to disk now."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self.store is None:
            raise RuntimeError("Avatar store not loaded. Call load() first.")
        atomic_write(self.path, json.dumps(self.store.to_payload()))
        self.flush_count += 1

    def flush_pending(self) -> bool:
        """Write a pending debounced save, if there is one."""
        if self._pending is None:
            return False
        self.flush()
        return True

    def _flush_pending(self) -> None:
        self._pending = None
        try:
            self.flush()
        except OSError as exc:
            logger.warning("Failed to persist avatar record %s: %s", self.path, exc)


def legacy_user_ids(config: Mapping[str, object]) -> List[str]:
    """Every user id mentioned by the legacy maps, for operator reports."""
    ids = set()
    personal = config.get(LEGACY_PERSONAL_KEY)
    if isinstance(personal, Mapping):
        ids.update(to_id(user_id) for user_id in personal)
    group = config.get(LEGACY_GROUP_KEY)
    if isinstance(group, Mapping):
        for users in group.values():
            if isinstance(users, str):
                users = [users]
            ids.update(to_id(user_id) for user_id in users or ())
    ids.discard("")
    return sorted(ids)


__all__ = [
    "AvatarFileGateway",
    "DEFAULT_SAVE_DELAY",
    "LEGACY_GROUP_KEY",
    "LEGACY_PERSONAL_KEY",
    "atomic_write",
    "has_legacy_keys",
    "legacy_user_ids",
    "load_legacy_config",
    "migrate_legacy",
]
