"""AvatarBot package providing the avatar entitlement store and its commands."""

from . import (  # noqa: F401
    catalog,
    commands,
    config,
    discord_glue,
    errors,
    identifiers,
    models,
    mutator,
    notifier,
    persistence,
    resolver,
    store,
    utils,
)

__all__ = [
    "catalog",
    "commands",
    "config",
    "discord_glue",
    "errors",
    "identifiers",
    "models",
    "mutator",
    "notifier",
    "persistence",
    "resolver",
    "store",
    "utils",
]
