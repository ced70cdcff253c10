"""Dataclasses and shared type definitions for AvatarBot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Union


class _Unset:
    """Marker for an entry whose default follows the personal slot."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

DefaultAvatar = Union[str, None, _Unset]


@dataclass
class AvatarEntry:
    """Avatar grants held by one user id.

    ``personal`` is the first allow-list slot and may be empty; ``extra`` holds
    every other grant in order. An entry without any real avatar is never kept
    in the store.
    """

    personal: Optional[str] = None
    extra: List[str] = field(default_factory=list)
    default: DefaultAvatar = UNSET
    time_received: Optional[int] = None
    time_updated: Optional[int] = None
    not_notified: bool = False

    @property
    def allowed(self) -> List[Optional[str]]:
        return [self.personal, *self.extra]

    def real_avatars(self) -> List[str]:
        return [avatar for avatar in self.allowed if avatar]

    def has_avatars(self) -> bool:
        return bool(self.personal) or bool(self.extra)

    def __contains__(self, avatar: object) -> bool:
        if not avatar:
            return False
        return avatar == self.personal or avatar in self.extra

    def copy(self) -> "AvatarEntry":
        return AvatarEntry(
            personal=self.personal,
            extra=list(self.extra),
            default=self.default,
            time_received=self.time_received,
            time_updated=self.time_updated,
            not_notified=self.not_notified,
        )


@dataclass(frozen=True)
class MigrationReport:
    """Outcome of loading the durable avatar record."""

    migrated: bool = False
    migrated_users: int = 0
    legacy_keys_present: bool = False


class ChatUser(Protocol):
    """A connected account as seen by the avatar core."""

    id: str
    previous_ids: Sequence[str]
    avatar: Optional[str]

    async def send(self, text: str) -> bool:
        """Deliver a private message; return False when it could not be sent."""
        ...


__all__ = [
    "AvatarEntry",
    "ChatUser",
    "DefaultAvatar",
    "MigrationReport",
    "UNSET",
]
