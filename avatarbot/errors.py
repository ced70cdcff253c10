"""Exceptions raised by the avatar entitlement core."""

from __future__ import annotations


class AvatarError(Exception):
    """Recoverable, user-facing failure. The message is shown verbatim."""


class InvalidFormat(AvatarError):
    """The identifier does not match any recognised avatar grammar."""


class NotFound(AvatarError):
    """The identifier is well-formed but no asset backs it."""


class AlreadyUniversal(AvatarError):
    """Official avatars are available to everyone and cannot be granted."""


class NoSuchGrant(AvatarError):
    """The user does not hold the referenced grant."""


class InvalidUsername(AvatarError):
    """An administrative command was given a malformed account name."""


class AvatarFileCorrupt(RuntimeError):
    """The durable avatar record exists but cannot be parsed.

    Raised at startup instead of silently replacing existing grants with an
    empty store.
    """


__all__ = [
    "AlreadyUniversal",
    "AvatarError",
    "AvatarFileCorrupt",
    "InvalidFormat",
    "InvalidUsername",
    "NoSuchGrant",
    "NotFound",
]
