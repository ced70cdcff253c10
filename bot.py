import logging
import os
from typing import Optional

import discord
from discord.ext import commands
from dotenv import load_dotenv

load_dotenv()

from avatarbot.commands import AvatarCommands, setup_avatar_commands
from avatarbot.config import load_settings
from avatarbot.discord_glue import DiscordUserDirectory, NameHistory
from avatarbot.mutator import AvatarMutator
from avatarbot.notifier import AvatarNotifier
from avatarbot.persistence import (
    LEGACY_GROUP_KEY,
    LEGACY_PERSONAL_KEY,
    AvatarFileGateway,
    load_legacy_config,
)
from avatarbot.resolver import AvatarResolver, HttpAssetChecker

SETTINGS = load_settings()

logging.basicConfig(
    level=SETTINGS.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("avatarbot")
startup_logger = logging.getLogger("avatarbot.startup")

DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")
if not DISCORD_TOKEN:
    raise RuntimeError("Missing DISCORD_TOKEN. Set it in your environment or .env file.")

GATEWAY = AvatarFileGateway(
    SETTINGS.avatars_file,
    save_delay=SETTINGS.save_delay,
    legacy_config=load_legacy_config(SETTINGS.legacy_config),
)
# AvatarFileCorrupt propagates: never start over an unreadable record.
STORE, MIGRATION = GATEWAY.load()
if MIGRATION.migrated and MIGRATION.migrated_users:
    startup_logger.info("Migrated %s users from the legacy avatar config.", MIGRATION.migrated_users)
if MIGRATION.legacy_keys_present:
    startup_logger.warning(
        "Please remove '%s' and '%s' from %s. Your avatars have been migrated to %s.",
        LEGACY_PERSONAL_KEY,
        LEGACY_GROUP_KEY,
        SETTINGS.legacy_config,
        SETTINGS.avatars_file,
    )

intents = discord.Intents.default()
intents.message_content = True
intents.members = True
intents.presences = True


class AvatarBot(commands.Bot):
    async def setup_hook(self) -> None:
        await setup_bot_extensions()

    async def close(self) -> None:
        if GATEWAY.flush_pending():
            logger.info("Flushed pending avatar changes to %s", SETTINGS.avatars_file)
        await super().close()


bot = AvatarBot(command_prefix=SETTINGS.command_prefix, intents=intents)
NAME_HISTORY = NameHistory(SETTINGS.name_history_file)
NAME_HISTORY.load()
DIRECTORY = DiscordUserDirectory(bot, history=NAME_HISTORY)
RESOLVER = AvatarResolver(
    STORE,
    avatar_dir=SETTINGS.avatar_dir,
    sprite_host=SETTINGS.sprite_host,
    checker=HttpAssetChecker(timeout=SETTINGS.probe_timeout),
    custom_hosted=SETTINGS.custom_hosted,
)
NOTIFIER = AvatarNotifier(
    STORE,
    RESOLVER,
    GATEWAY,
    DIRECTORY,
    command_prefix=SETTINGS.command_prefix,
)
MUTATOR = AvatarMutator(STORE, RESOLVER, GATEWAY, notifier=NOTIFIER)
AVATAR_COMMANDS: Optional[AvatarCommands] = None


async def setup_bot_extensions() -> None:
    global AVATAR_COMMANDS
    AVATAR_COMMANDS = setup_avatar_commands(
        bot,
        settings=SETTINGS,
        resolver=RESOLVER,
        mutator=MUTATOR,
        notifier=NOTIFIER,
        directory=DIRECTORY,
    )


@bot.event
async def on_ready():
    logger.info("Logged in as %s (id=%s)", bot.user, bot.user.id if bot.user else "unknown")
    logger.info("Tracking custom avatars for %s users from %s", len(STORE), SETTINGS.avatars_file)
    if SETTINGS.modlog_channel_id > 0 and bot.get_channel(SETTINGS.modlog_channel_id) is None:
        logger.warning("Modlog channel %s is not visible to the bot.", SETTINGS.modlog_channel_id)


def main():
    bot.run(DISCORD_TOKEN)


if __name__ == "__main__":
    main()
