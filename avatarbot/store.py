"""In-memory avatar entitlement store and its JSON record shape."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .models import UNSET, AvatarEntry
from .utils import to_id

logger = logging.getLogger("avatarbot.store")


def serialize_entry(entry: AvatarEntry) -> Dict[str, object]:
    payload: Dict[str, object] = {"allowed": entry.allowed}
    if entry.default is not UNSET:
        payload["default"] = entry.default
    if entry.time_received is not None:
        payload["timeReceived"] = entry.time_received
    if entry.time_updated is not None:
        payload["timeUpdated"] = entry.time_updated
    if entry.not_notified:
        payload["notNotified"] = True
    return payload


def _optional_timestamp(payload: Mapping[str, object], key: str) -> Optional[int]:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be an epoch timestamp, got {value!r}")
    return int(value)


def deserialize_entry(payload: object) -> AvatarEntry:
    if not isinstance(payload, dict):
        raise ValueError(f"entry must be an object, got {type(payload).__name__}")
    allowed = payload.get("allowed")
    if not isinstance(allowed, list) or not allowed:
        raise ValueError("allowed must be a non-empty list")
    for avatar in allowed:
        if avatar is not None and not isinstance(avatar, str):
            raise ValueError(f"allowed contains a non-string avatar {avatar!r}")

    personal = allowed[0] or None
    extra: List[str] = []
    for avatar in allowed[1:]:
        if avatar and avatar != personal and avatar not in extra:
            extra.append(avatar)

    if "default" in payload:
        default = payload["default"]
        if default is not None and not isinstance(default, str):
            raise ValueError(f"default must be a string or null, got {default!r}")
    else:
        default = UNSET

    return AvatarEntry(
        personal=personal,
        extra=extra,
        default=default,
        time_received=_optional_timestamp(payload, "timeReceived"),
        time_updated=_optional_timestamp(payload, "timeUpdated"),
        not_notified=bool(payload.get("notNotified", False)),
    )


class EntryStore:
    """Mapping from user id to that user's avatar grants."""

    def __init__(self, entries: Optional[Mapping[str, AvatarEntry]] = None):
        self._entries: Dict[str, AvatarEntry] = {}
        for user_id, entry in (entries or {}).items():
            self.put(user_id, entry)

    def __contains__(self, user_id: object) -> bool:
        return isinstance(user_id, str) and to_id(user_id) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def items(self) -> List[Tuple[str, AvatarEntry]]:
        return list(self._entries.items())

    def get(self, user_id: str) -> Optional[AvatarEntry]:
        return self._entries.get(to_id(user_id))

    def ensure(self, user_id: str) -> AvatarEntry:
        """Return the user's entry, creating an empty one.

        The caller must give a freshly created entry a real avatar before
        yielding control.
        """
        key = to_id(user_id)
        entry = self._entries.get(key)
        if entry is None:
            entry = AvatarEntry()
            self._entries[key] = entry
        return entry

    def put(self, user_id: str, entry: AvatarEntry) -> None:
        if not entry.has_avatars():
            raise ValueError(f"refusing to store an entry without avatars for {user_id!r}")
        self._entries[to_id(user_id)] = entry

    def pop(self, user_id: str) -> Optional[AvatarEntry]:
        return self._entries.pop(to_id(user_id), None)

    def prune(self, user_id: str) -> bool:
        """Drop the entry if it holds no real avatar. Returns True if dropped."""
        key = to_id(user_id)
        entry = self._entries.get(key)
        if entry is not None and not entry.has_avatars():
            del self._entries[key]
            return True
        return False

    def users_with(self, avatar: str) -> List[str]:
        return sorted(user_id for user_id, entry in self._entries.items() if avatar in entry)

    def to_payload(self) -> Dict[str, Dict[str, object]]:
        return {user_id: serialize_entry(entry) for user_id, entry in self._entries.items()}

    @classmethod
    def from_payload(cls, payload: object) -> "EntryStore":
        """Build a store from the durable record.

        Raises ValueError when the record does not have the expected shape.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"avatar record must be an object, got {type(payload).__name__}")
        store = cls()
        for user_id, raw_entry in payload.items():
            try:
                entry = deserialize_entry(raw_entry)
            except ValueError as exc:
                raise ValueError(f"invalid entry for {user_id!r}: {exc}") from exc
            if not entry.has_avatars():
                logger.warning("Dropping avatar entry for %s: no avatars left.", user_id)
                continue
            if str(user_id) in store:
                raise ValueError(f"user id {user_id!r} collides with another entry once normalized")
            store.put(str(user_id), entry)
        return store


__all__ = ["EntryStore", "deserialize_entry", "serialize_entry"]
