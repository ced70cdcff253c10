"""Prefix commands for managing and using custom avatars."""

from __future__ import annotations

import logging
import re
from collections import OrderedDict
from functools import wraps
from typing import Awaitable, Callable, Dict, List, Sequence

import discord
from discord.ext import commands

from .catalog import ARTIST_LINKS, artist_for
from .config import AvatarSettings
from .discord_glue import DiscordUserDirectory, is_online
from .errors import AvatarError, InvalidUsername, NoSuchGrant
from .identifiers import clean_input, convert
from .mutator import AvatarMutator
from .notifier import AvatarNotifier
from .resolver import SEASONAL_SUFFIX, AvatarResolver
from .utils import is_admin, is_username, split_one, to_id

logger = logging.getLogger("avatarbot.commands")
modlog_logger = logging.getLogger("avatarbot.modlog")

EMBED_COLOR = 0x9B59B6
MESSAGE_CHAR_LIMIT = 1900
SESSION_CACHE_LIMIT = 5000
MULTILINE_SPLIT = re.compile(r"\s*\n\s*|,\s*")

CommandHandler = Callable[..., Awaitable[None]]


def surface_avatar_errors(func: CommandHandler) -> CommandHandler:
    """Reply with the message of any AvatarError raised by the handler."""

    @wraps(func)
    async def wrapper(self: "AvatarCommands", ctx: commands.Context, *args, **kwargs) -> None:
        try:
            await func(self, ctx, *args, **kwargs)
        except AvatarError as exc:
            await ctx.reply(str(exc), mention_author=False)

    return wrapper


def chunk_lines(lines: Sequence[str], limit: int = MESSAGE_CHAR_LIMIT) -> List[str]:
    chunks: List[str] = []
    current: List[str] = []
    size = 0
    for line in lines:
        if current and size + len(line) + 1 > limit:
            chunks.append("\n".join(current))
            current = []
            size = 0
        current.append(line)
        size += len(line) + 1
    if current:
        chunks.append("\n".join(current))
    return chunks


def split_mass_arguments(target: str) -> List[str]:
    return [arg for arg in MULTILINE_SPLIT.split((target or "").strip()) if arg]


def _strip_suffix(value: str, suffix: str) -> str:
    return value[: -len(suffix)] if value.endswith(suffix) else value


class AvatarCommands:
    """Command handlers built on the avatar resolver and mutator."""

    def __init__(
        self,
        *,
        bot: commands.Bot,
        settings: AvatarSettings,
        resolver: AvatarResolver,
        mutator: AvatarMutator,
        notifier: AvatarNotifier,
        directory: DiscordUserDirectory,
    ):
        self.bot = bot
        self.settings = settings
        self.resolver = resolver
        self.mutator = mutator
        self.notifier = notifier
        self.directory = directory
        self._logged_in: "OrderedDict[int, None]" = OrderedDict()
        self.session_limit = SESSION_CACHE_LIMIT

    @property
    def prefix(self) -> str:
        return self.settings.command_prefix

    #
    # Rendering helpers
    #
    def avatar_label(self, avatar: str) -> str:
        src = self.resolver.src(avatar)
        if not src:
            return f"**`{avatar}`**"
        return f"[`{avatar}`]({src})"

    def avatar_embed(self, avatar: str, description: str) -> discord.Embed:
        embed = discord.Embed(description=description, color=EMBED_COLOR)
        embed.set_author(name=avatar)
        src = self.resolver.src(avatar)
        if src:
            embed.set_thumbnail(url=src)
        return embed

    def add_avatar_help(self) -> str:
        p = self.prefix
        return "\n".join(
            [
                f"`{p}personalavatar [username], [avatar]` - Gives a user a default (personal) avatar.",
                f"`{p}groupavatar [username], [avatar]` - Gives a user an allowed (group) avatar.",
                f"`{p}removeavatar [username], [avatar]` - Removes access to an avatar from a user.",
                f"`{p}removeavatar [username]` - Removes access to all custom avatars from a user.",
                f"`{p}moveavatars [from user], [to user]` - Moves every custom avatar to another account.",
                self.resolver.format_help,
            ]
        )

    async def _send_lines(self, ctx: commands.Context, lines: Sequence[str]) -> None:
        for chunk in chunk_lines(lines):
            await ctx.send(chunk, allowed_mentions=discord.AllowedMentions.none())

    async def _modlog(self, ctx: commands.Context, action: str, user_id: str, note: str) -> None:
        actor = getattr(ctx.author, "name", "unknown")
        modlog_logger.info("(%s) %s: %s by %s", action, user_id, note, actor)
        channel_id = self.settings.modlog_channel_id
        if channel_id <= 0:
            return
        channel = self.bot.get_channel(channel_id)
        if not isinstance(channel, discord.abc.Messageable):
            return
        try:
            await channel.send(
                f"({action}) {user_id}: {note} by {actor}",
                allowed_mentions=discord.AllowedMentions.none(),
            )
        except discord.HTTPException as exc:
            logger.warning("Failed to write modlog entry to channel %s: %s", channel_id, exc)

    async def _ensure_admin(self, ctx: commands.Context) -> bool:
        if is_admin(ctx.author):
            return True
        await ctx.reply("You lack permission to run this command.", mention_author=False)
        return False

    @staticmethod
    def _require_username(name: str) -> str:
        if not is_username(name):
            raise InvalidUsername(f'"{name}" is not a valid username.')
        return to_id(name)

    #
    # Everyone
    #
    @surface_avatar_errors
    async def command_avatar(self, ctx: commands.Context, target: str) -> None:
        if not target:
            await self.command_avatars(ctx, "")
            return
        maybe_avatar, silent = split_one(target)
        user = self.directory.wrap(ctx.author)
        avatar = self.resolver.resolve_for_user(user, maybe_avatar)
        if not avatar:
            if not silent:
                await ctx.reply(
                    "Unrecognized avatar - make sure you're on the right account?",
                    mention_author=False,
                )
            return

        user.avatar = avatar
        if user.id in self.mutator.store and not avatar.endswith(SEASONAL_SUFFIX):
            self.mutator.set_default(user.id, avatar)
        if silent:
            return

        description = "Avatar changed."
        artist = artist_for(avatar)
        if artist:
            link = ARTIST_LINKS.get(artist)
            credit = f"[{artist}]({link})" if link else artist
            description += f"\n(Artist: {credit})"
        await ctx.reply(embed=self.avatar_embed(avatar, description), mention_author=False)

    @surface_avatar_errors
    async def command_avatars(self, ctx: commands.Context, target: str) -> None:
        if target.startswith("#"):
            await self.command_avatar_users(ctx, target)
            return

        user = self.directory.wrap(ctx.author)
        own_ids = [user.id, *user.previous_ids]
        if target:
            target_id = to_id(target)
            member = self.directory.find_member(target_id)
            target_ids = [target_id]
            if member is not None:
                wrapped = self.directory.wrap(member)
                target_ids = [wrapped.id, *wrapped.previous_ids]
            if target_id not in own_ids and not is_admin(ctx.author):
                raise AvatarError("You don't have permission to look at another user's avatars!")
        else:
            target_ids = own_ids

        lines: List[str] = []
        if not target:
            lines.append(
                f"You can use any official avatar by typing `{self.prefix}avatar [avatar's name]`, "
                f"for example `{self.prefix}avatar erika-gen2`. "
                f"Full list: <{self.resolver.sprite_host.rstrip('/')}/sprites/trainers/>"
            )
        found = False
        for user_id in target_ids:
            entry = self.mutator.store.get(user_id)
            if entry is None:
                continue
            found = True
            lines.append(f"Custom avatars from account **{user_id}**:")
            for avatar in entry.real_avatars():
                lines.append(f"{self.avatar_label(avatar)} `{self.prefix}avatar {avatar.replace('#', '')}`")
        if not found:
            if target:
                lines.append(f"User **{to_id(target)}** doesn't have any custom avatars.")
            else:
                lines.append("Custom avatars require you to be a contributor/staff or win a tournament prize.")
        await self._send_lines(ctx, lines)

    @surface_avatar_errors
    async def command_avatar_users(self, ctx: commands.Context, target: str) -> None:
        avatar = "#" + to_id(target)
        user = self.directory.wrap(ctx.author)
        if not self.resolver.resolve_for_user(user, avatar) and not is_admin(ctx.author):
            raise AvatarError(f'You don\'t have access to avatar "{avatar}"')

        users = self.resolver.users_with(avatar)
        if not users and not await self.resolver.exists(avatar):
            raise AvatarError(f'Unrecognized avatar "{avatar}"')
        holders = ", ".join(users) if users else "No users currently allowed to use this avatar"
        await ctx.reply(embed=self.avatar_embed(avatar, holders), mention_author=False)

    #
    # Administration
    #
    async def _grant(self, ctx: commands.Context, target: str, *, personal: bool) -> None:
        if not await self._ensure_admin(ctx):
            return
        if not target:
            await ctx.reply(self.add_avatar_help(), mention_author=False)
            return
        username, raw_avatar = split_one(target)
        user_id = self._require_username(username)
        avatar = await self.resolver.validate(raw_avatar, reject_official=True)

        if personal:
            changed = await self.mutator.add_personal(user_id, avatar)
        else:
            changed = await self.mutator.add_allowed(user_id, avatar)
        if not changed:
            raise AvatarError(f'User "{username}" can already use avatar "{avatar}".')

        await self._modlog(ctx, "PERSONAL AVATAR" if personal else "GROUP AVATAR", user_id, avatar)
        await ctx.reply(embed=self.avatar_embed(avatar, f"Added to **{username}**"), mention_author=False)

    @surface_avatar_errors
    async def command_personal_avatar(self, ctx: commands.Context, target: str) -> None:
        await self._grant(ctx, target, personal=True)

    @surface_avatar_errors
    async def command_group_avatar(self, ctx: commands.Context, target: str) -> None:
        await self._grant(ctx, target, personal=False)

    @surface_avatar_errors
    async def command_remove_avatar(self, ctx: commands.Context, target: str) -> None:
        if not await self._ensure_admin(ctx):
            return
        if not target:
            await ctx.reply(self.add_avatar_help(), mention_author=False)
            return
        username, raw_avatar = split_one(target)
        user_id = self._require_username(username)
        avatar = convert(clean_input(raw_avatar))

        entry = self.mutator.store.get(user_id)
        if entry is None:
            raise NoSuchGrant(f"{username} doesn't have any custom avatars.")
        if avatar:
            if not self.mutator.remove_allowed(user_id, avatar):
                raise NoSuchGrant(f'{username} doesn\'t have access to avatar "{avatar}"')
            self.mutator.commit()
            await self._modlog(ctx, "REMOVE AVATAR", user_id, avatar)
            await ctx.reply(embed=self.avatar_embed(avatar, f"Removed from **{username}**"), mention_author=False)
            return

        removed = self.mutator.remove_all(user_id)
        await self._modlog(ctx, "REMOVE AVATARS", user_id, ",".join(removed))
        lines = [self.avatar_label(current) for current in removed]
        lines.append(f"Removed from **{username}**")
        await self._send_lines(ctx, lines)

    @surface_avatar_errors
    async def command_move_avatars(self, ctx: commands.Context, target: str) -> None:
        if not await self._ensure_admin(ctx):
            return
        source, destination = (to_id(part) for part in split_one(target))
        if not source or not destination:
            await ctx.reply(
                f"`{self.prefix}moveavatars [from user], [to user]` - Move all of the custom avatars "
                "from [from user] to [to user].",
                mention_author=False,
            )
            return
        if not await self.mutator.move_avatars(source, destination):
            raise NoSuchGrant("That user has no avatars.")
        await self._modlog(ctx, "MOVEAVATARS", destination, f"from {source}")
        await ctx.reply(f"Moved {source}'s avatars to '{destination}'.", mention_author=False)

    @surface_avatar_errors
    async def command_mass_personal(self, ctx: commands.Context, target: str) -> None:
        if not await self._ensure_admin(ctx):
            return
        usernames = [_strip_suffix(name, ".png") for name in split_mass_arguments(target)]
        for username in usernames:
            if not is_username(username):
                raise InvalidUsername(f'Invalid username "{username}"')
            await self.resolver.validate("#" + to_id(username))

        user_ids = [to_id(username) for username in usernames]
        for user_id in user_ids:
            avatar = "#" + user_id
            await self.mutator.add_personal(user_id, avatar)
            await self._modlog(ctx, "PERSONAL AVATAR", user_id, avatar)
        await ctx.reply(f"Added {len(user_ids)} avatars", mention_author=False)

    @surface_avatar_errors
    async def command_mass_xmas(self, ctx: commands.Context, target: str) -> None:
        if not await self._ensure_admin(ctx):
            return
        usernames = [
            _strip_suffix(_strip_suffix(name, ".png"), SEASONAL_SUFFIX)
            for name in split_mass_arguments(target)
        ]
        for username in usernames:
            if not is_username(username):
                raise InvalidUsername(f'Invalid username "{username}"')
            await self.resolver.validate(f"#{to_id(username)}{SEASONAL_SUFFIX}")

        user_ids = [to_id(username) for username in usernames]
        for user_id in user_ids:
            avatar = f"#{user_id}{SEASONAL_SUFFIX}"
            await self.mutator.add_allowed(user_id, avatar)
            await self._modlog(ctx, "GROUP AVATAR", user_id, avatar)
        await ctx.reply(f"Added {len(user_ids)} avatars", mention_author=False)

    @surface_avatar_errors
    async def command_mass_group(self, ctx: commands.Context, target: str) -> None:
        if not await self._ensure_admin(ctx):
            return
        current_avatar = ""
        to_update: Dict[str, List[str]] = {}
        for arg in split_mass_arguments(target):
            if arg.startswith("#"):
                current_avatar = await self.resolver.validate(arg)
                continue
            if not current_avatar:
                await ctx.reply(
                    f"`{self.prefix}massgavatar [#avatar], [users...]` - Sets exactly which users "
                    "may use each listed avatar.",
                    mention_author=False,
                )
                return
            if not re.match(r"[A-Za-z0-9]", arg) or not re.search(r"[A-Za-z]", arg):
                raise InvalidUsername(f'Invalid username "{arg}"')
            to_update.setdefault(current_avatar, []).append(to_id(arg))

        lines: List[str] = []
        for avatar, user_ids in to_update.items():
            had_holders = bool(self.resolver.users_with(avatar))
            added, removed = await self.mutator.sync_group(avatar, user_ids)
            for user_id in added:
                await self._modlog(ctx, "GROUP AVATAR", user_id, avatar)
            for user_id in removed:
                await self._modlog(ctx, "REMOVE AVATAR", user_id, avatar)

            lines.append(self.avatar_label(avatar))
            if added:
                lines.append(f"{'Added' if had_holders else 'New'}: {', '.join(added)}")
            if removed:
                lines.append(f"Removed: {', '.join(removed)}")
            if not added and not removed:
                lines.append("No change")
        await self._send_lines(ctx, lines)

    #
    # Login hooks
    #
    async def _login(self, user: discord.abc.User) -> None:
        if user.bot:
            return
        if user.id in self._logged_in:
            self._logged_in.move_to_end(user.id)
            return
        self._logged_in[user.id] = None
        while len(self._logged_in) > self.session_limit:
            evicted, _ = self._logged_in.popitem(last=False)
            self.directory.sessions.pop(evicted, None)
        await self.notifier.handle_login(self.directory.wrap(user))

    def _logout(self, discord_id: int) -> None:
        self._logged_in.pop(discord_id, None)
        self.directory.sessions.pop(discord_id, None)

    async def on_presence_update(self, before: discord.Member, after: discord.Member) -> None:
        if is_online(after) and not is_online(before):
            self._logout(after.id)
            await self._login(after)
        elif not is_online(after):
            self._logout(after.id)

    async def on_member_remove(self, member: discord.Member) -> None:
        self._logout(member.id)

    async def on_message(self, message: discord.Message) -> None:
        await self._login(message.author)

    #
    # Registration
    #
    def _register_command(self, command: commands.Command) -> None:
        existing = self.bot.get_command(command.name)
        if existing is not None:
            self.bot.remove_command(existing.name)
        self.bot.add_command(command)

    def register_commands(self) -> None:
        @commands.command(name="avatar")
        async def avatar_command(ctx: commands.Context, *, target: str = "") -> None:
            await self.command_avatar(ctx, target.strip())

        @commands.command(name="avatars")
        async def avatars_command(ctx: commands.Context, *, target: str = "") -> None:
            await self.command_avatars(ctx, target.strip())

        @commands.command(name="avatarusers")
        async def avatar_users_command(ctx: commands.Context, *, target: str = "") -> None:
            await self.command_avatar_users(ctx, target.strip())

        @commands.command(name="addavatar")
        async def add_avatar_command(ctx: commands.Context) -> None:
            await ctx.reply(
                "Is this a personal avatar or a group avatar?\n" + self.add_avatar_help(),
                mention_author=False,
            )

        @commands.command(name="personalavatar", aliases=["defaultavatar"])
        async def personal_avatar_command(ctx: commands.Context, *, target: str = "") -> None:
            await self.command_personal_avatar(ctx, target.strip())

        @commands.command(name="groupavatar", aliases=["allowavatar", "allowedavatar"])
        async def group_avatar_command(ctx: commands.Context, *, target: str = "") -> None:
            await self.command_group_avatar(ctx, target.strip())

        @commands.command(name="removeavatar", aliases=["removeavatars", "denyavatar", "disallowavatar"])
        async def remove_avatar_command(ctx: commands.Context, *, target: str = "") -> None:
            await self.command_remove_avatar(ctx, target.strip())

        @commands.command(name="moveavatars")
        async def move_avatars_command(ctx: commands.Context, *, target: str = "") -> None:
            await self.command_move_avatars(ctx, target.strip())

        @commands.command(name="masspavatar")
        async def mass_personal_command(ctx: commands.Context, *, target: str = "") -> None:
            await self.command_mass_personal(ctx, target)

        @commands.command(name="massxmasavatar")
        async def mass_xmas_command(ctx: commands.Context, *, target: str = "") -> None:
            await self.command_mass_xmas(ctx, target)

        @commands.command(name="massgavatar")
        async def mass_group_command(ctx: commands.Context, *, target: str = "") -> None:
            await self.command_mass_group(ctx, target)

        for command in (
            avatar_command,
            avatars_command,
            avatar_users_command,
            add_avatar_command,
            personal_avatar_command,
            group_avatar_command,
            remove_avatar_command,
            move_avatars_command,
            mass_personal_command,
            mass_xmas_command,
            mass_group_command,
        ):
            self._register_command(command)

        self.bot.add_listener(self.on_presence_update, "on_presence_update")
        self.bot.add_listener(self.on_message, "on_message")
        self.bot.add_listener(self.on_member_remove, "on_member_remove")


def setup_avatar_commands(
    bot: commands.Bot,
    *,
    settings: AvatarSettings,
    resolver: AvatarResolver,
    mutator: AvatarMutator,
    notifier: AvatarNotifier,
    directory: DiscordUserDirectory,
) -> AvatarCommands:
    """Factory used by bot.py to wire the avatar commands."""
    manager = AvatarCommands(
        bot=bot,
        settings=settings,
        resolver=resolver,
        mutator=mutator,
        notifier=notifier,
        directory=directory,
    )
    manager.register_commands()
    return manager


__all__ = ["AvatarCommands", "chunk_lines", "setup_avatar_commands", "split_mass_arguments"]
