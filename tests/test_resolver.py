import asyncio
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Sequence

import aiohttp

from avatarbot.errors import AlreadyUniversal, InvalidFormat, NotFound
from avatarbot.identifiers import normalize
from avatarbot.models import AvatarEntry
from avatarbot.resolver import AvatarResolver
from avatarbot.store import EntryStore

JUNE = datetime(2024, 6, 15, tzinfo=timezone.utc)
DECEMBER = datetime(2024, 12, 24, tzinfo=timezone.utc)


class FakeChecker:
    def __init__(self, existing: Sequence[str] = (), error: Exception = None):
        self.existing = set(existing)
        self.error = error
        self.urls: List[str] = []

    async def __call__(self, url: str) -> bool:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return url in self.existing


class FakeUser:
    def __init__(self, user_id: str, previous_ids: Sequence[str] = ()):
        self.id = user_id
        self.previous_ids = tuple(previous_ids)
        self.avatar = None

    async def send(self, text: str) -> bool:
        return True


class ResolverTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.avatar_dir = Path(self._tmp.name)
        self.now = JUNE
        self.store = EntryStore(
            {
                "alice": AvatarEntry(personal="#alice", extra=["#group", "alice.png"]),
                "oldbob": AvatarEntry(personal="#bob"),
            }
        )
        self.checker = FakeChecker(existing=["https://sprites.test/sprites/trainers-custom/alice.png"])
        self.resolver = AvatarResolver(
            self.store,
            avatar_dir=self.avatar_dir,
            sprite_host="https://sprites.test",
            checker=self.checker,
            clock=lambda: self.now,
        )

    def tearDown(self) -> None:
        self._tmp.cleanup()


class CanUseTests(ResolverTestCase):
    def test_official_avatars_are_open_to_everyone(self) -> None:
        self.assertEqual(self.resolver.can_use("nobody", "Erika-GEN2!!"), "erika-gen2")

    def test_custom_avatar_matches_with_or_without_marker(self) -> None:
        self.assertEqual(self.resolver.can_use("alice", "group"), "#group")
        self.assertEqual(self.resolver.can_use("alice", "#Group"), "#group")
        self.assertEqual(self.resolver.can_use("Alice", "alice.png"), "alice.png")

    def test_unknown_user_or_avatar(self) -> None:
        self.assertIsNone(self.resolver.can_use("carol", "#group"))
        self.assertIsNone(self.resolver.can_use("alice", "#missing"))
        self.assertIsNone(self.resolver.can_use("alice", "!!!"))

    def test_previous_ids_are_tried_in_order(self) -> None:
        renamed = FakeUser("newbob", previous_ids=["ghost", "oldbob"])
        self.assertEqual(self.resolver.resolve_for_user(renamed, "bob"), "#bob")
        self.assertIsNone(self.resolver.resolve_for_user(FakeUser("newbob"), "bob"))


class DefaultAvatarTests(ResolverTestCase):
    def test_no_entry_has_no_default(self) -> None:
        self.assertIsNone(self.resolver.get_default("carol"))

    def test_personal_slot_is_the_implicit_default(self) -> None:
        self.assertEqual(self.resolver.get_default("alice"), "#alice")

    def test_explicit_default_wins_outside_december(self) -> None:
        self.store.get("alice").default = "#group"
        self.assertEqual(self.resolver.get_default("alice"), "#group")

    def test_explicit_null_default(self) -> None:
        self.store.get("alice").default = None
        self.assertIsNone(self.resolver.get_default("alice"))

    def test_first_xmas_avatar_wins_in_december(self) -> None:
        entry = self.store.get("alice")
        entry.extra.extend(["#alicexmas", "#groupxmas"])
        entry.default = "#group"
        self.now = DECEMBER
        self.assertEqual(self.resolver.get_default("alice"), "#alicexmas")
        self.now = JUNE
        self.assertEqual(self.resolver.get_default("alice"), "#group")

    def test_december_without_xmas_avatar_uses_normal_rules(self) -> None:
        self.now = DECEMBER
        self.assertEqual(self.resolver.get_default("alice"), "#alice")


class ExistsAndValidateTests(ResolverTestCase):
    def test_file_avatars_check_local_directory(self) -> None:
        (self.avatar_dir / "present.png").write_bytes(b"png")
        self.assertTrue(asyncio.run(self.resolver.exists("present.png")))
        self.assertFalse(asyncio.run(self.resolver.exists("absent.png")))

    def test_bare_ids_check_catalog_without_network(self) -> None:
        self.assertTrue(asyncio.run(self.resolver.exists("cynthia")))
        self.assertFalse(asyncio.run(self.resolver.exists("not-a-trainer")))
        self.assertEqual(self.checker.urls, [])

    def test_custom_ids_probe_the_sprite_mirror(self) -> None:
        self.assertTrue(asyncio.run(self.resolver.exists("#alice")))
        self.assertFalse(asyncio.run(self.resolver.exists("#nobody")))
        self.assertEqual(
            self.checker.urls,
            [
                "https://sprites.test/sprites/trainers-custom/alice.png",
                "https://sprites.test/sprites/trainers-custom/nobody.png",
            ],
        )

    def test_probe_failures_count_as_missing(self) -> None:
        for error in (aiohttp.ClientError("boom"), asyncio.TimeoutError()):
            with self.subTest(error=error):
                self.resolver.checker = FakeChecker(error=error)
                self.assertFalse(asyncio.run(self.resolver.exists("#alice")))

    def test_validate_returns_canonical_id(self) -> None:
        (self.avatar_dir / "thing.png").write_bytes(b"png")
        self.assertEqual(asyncio.run(self.resolver.validate("  #Alice ")), "#alice")
        self.assertEqual(asyncio.run(self.resolver.validate("#thing.png")), "thing.png")
        self.assertEqual(asyncio.run(self.resolver.validate(normalize("Erika-GEN2!!"))), "erika-gen2")

    def test_validate_error_taxonomy(self) -> None:
        with self.assertRaises(InvalidFormat):
            asyncio.run(self.resolver.validate("bad avatar!"))
        with self.assertRaises(NotFound):
            asyncio.run(self.resolver.validate("#nobody"))
        with self.assertRaises(NotFound):
            asyncio.run(self.resolver.validate("not-a-trainer"))
        with self.assertRaises(AlreadyUniversal):
            asyncio.run(self.resolver.validate("cynthia", reject_official=True))

    def test_validation_messages_explain_the_format(self) -> None:
        with self.assertRaises(InvalidFormat) as ctx:
            asyncio.run(self.resolver.validate("bad avatar!"))
        self.assertIn("Custom avatars start with '#'", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
