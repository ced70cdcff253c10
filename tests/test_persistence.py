import asyncio
import json
import tempfile
import unittest
from pathlib import Path

from avatarbot.errors import AvatarFileCorrupt
from avatarbot.models import AvatarEntry
from avatarbot.persistence import (
    AvatarFileGateway,
    has_legacy_keys,
    legacy_user_ids,
    load_legacy_config,
    migrate_legacy,
)

LEGACY_CONFIG = {
    "customavatars": {"Alice": "alice.png", "carol": "#carolsprite"},
    "allowedavatars": {"#group": ["alice", "Bob"], "#other": "bob"},
}


class LegacyMigrationTests(unittest.TestCase):
    def test_merges_both_maps_into_entries(self) -> None:
        store, migrated = migrate_legacy(LEGACY_CONFIG["customavatars"], LEGACY_CONFIG["allowedavatars"])
        self.assertEqual(migrated, 3)
        self.assertEqual(store.get("alice").allowed, ["alice.png", "#group"])
        self.assertEqual(store.get("bob").allowed, [None, "#group", "#other"])
        self.assertEqual(store.get("carol").allowed, ["#carolsprite"])

    def test_legacy_key_detection(self) -> None:
        self.assertTrue(has_legacy_keys(LEGACY_CONFIG))
        self.assertFalse(has_legacy_keys({"customavatars": {}}))
        self.assertEqual(legacy_user_ids(LEGACY_CONFIG), ["alice", "bob", "carol"])


class GatewayLoadTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.path = self.root / "config" / "avatars.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_runs_migration_and_writes_immediately(self) -> None:
        gateway = AvatarFileGateway(self.path, legacy_config=LEGACY_CONFIG)
        store, report = gateway.load()
        self.assertTrue(report.migrated)
        self.assertEqual(report.migrated_users, 3)
        self.assertTrue(report.legacy_keys_present)
        self.assertEqual(gateway.flush_count, 1)
        on_disk = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(on_disk["bob"], {"allowed": [None, "#group", "#other"]})
        self.assertEqual(len(store), 3)

    def test_missing_file_without_legacy_config_starts_empty(self) -> None:
        gateway = AvatarFileGateway(self.path)
        store, report = gateway.load()
        self.assertEqual(len(store), 0)
        self.assertTrue(report.migrated)
        self.assertFalse(report.legacy_keys_present)
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), {})

    def test_existing_file_is_loaded_not_migrated(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({"dave": {"allowed": ["#dave"], "notNotified": True}}), encoding="utf-8")
        gateway = AvatarFileGateway(self.path, legacy_config=LEGACY_CONFIG)
        store, report = gateway.load()
        self.assertFalse(report.migrated)
        self.assertTrue(report.legacy_keys_present)
        self.assertEqual(list(store), ["dave"])
        self.assertTrue(store.get("dave").not_notified)
        self.assertEqual(gateway.flush_count, 0)

    def test_unparseable_file_is_fatal_and_left_alone(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        gateway = AvatarFileGateway(self.path, legacy_config=LEGACY_CONFIG)
        with self.assertRaises(AvatarFileCorrupt):
            gateway.load()
        self.assertEqual(self.path.read_text(encoding="utf-8"), "{not json")

    def test_wrong_shape_is_fatal(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps(["alice"]), encoding="utf-8")
        with self.assertRaises(AvatarFileCorrupt):
            AvatarFileGateway(self.path).load()

    def test_colliding_user_ids_are_fatal(self) -> None:
        self.path.parent.mkdir(parents=True)
        content = json.dumps({"Alice": {"allowed": ["#a"]}, "alice": {"allowed": ["#b"]}})
        self.path.write_text(content, encoding="utf-8")
        with self.assertRaises(AvatarFileCorrupt):
            AvatarFileGateway(self.path).load()
        self.assertEqual(self.path.read_text(encoding="utf-8"), content)

    def test_flush_round_trips_through_load(self) -> None:
        gateway = AvatarFileGateway(self.path)
        store, _ = gateway.load()
        store.put("erin", AvatarEntry(personal=None, extra=["#a", "#b"], default="#b", time_received=10))
        gateway.flush()

        reloaded, _ = AvatarFileGateway(self.path).load()
        self.assertEqual(reloaded.to_payload(), store.to_payload())

    def test_save_without_event_loop_writes_immediately(self) -> None:
        gateway = AvatarFileGateway(self.path, save_delay=60)
        gateway.load()
        gateway.save()
        self.assertEqual(gateway.flush_count, 2)
        self.assertFalse(gateway.pending)

    def test_yaml_legacy_config_is_read(self) -> None:
        config_path = self.root / "config.yaml"
        config_path.write_text(
            "customavatars:\n  alice: alice.png\nallowedavatars:\n  '#group':\n    - alice\n    - bob\n",
            encoding="utf-8",
        )
        config = load_legacy_config(config_path)
        self.assertEqual(config["customavatars"], {"alice": "alice.png"})
        self.assertEqual(config["allowedavatars"], {"#group": ["alice", "bob"]})
        self.assertEqual(load_legacy_config(self.root / "missing.yaml"), {})


class DebouncedSaveTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "avatars.json"
        self.gateway = AvatarFileGateway(self.path, save_delay=0.05)
        self.store, _ = self.gateway.load()

    async def asyncTearDown(self) -> None:
        self._tmp.cleanup()

    async def test_saves_inside_window_coalesce(self) -> None:
        self.store.put("alice", AvatarEntry(personal="#a"))
        self.gateway.save()
        self.store.put("bob", AvatarEntry(personal="#b"))
        self.gateway.save()
        self.assertTrue(self.gateway.pending)
        self.assertEqual(self.gateway.flush_count, 1)

        await asyncio.sleep(0.2)
        self.assertFalse(self.gateway.pending)
        self.assertEqual(self.gateway.flush_count, 2)
        self.assertEqual(self.gateway.save_requests, 2)
        on_disk = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(sorted(on_disk), ["alice", "bob"])

    async def test_instant_save_supersedes_pending_write(self) -> None:
        self.gateway.save()
        self.assertTrue(self.gateway.pending)
        self.gateway.save(instant=True)
        self.assertFalse(self.gateway.pending)
        self.assertEqual(self.gateway.flush_count, 2)

        await asyncio.sleep(0.2)
        self.assertEqual(self.gateway.flush_count, 2)

    async def test_flush_pending_writes_only_when_needed(self) -> None:
        self.assertFalse(self.gateway.flush_pending())
        self.gateway.save()
        self.assertTrue(self.gateway.flush_pending())
        self.assertEqual(self.gateway.flush_count, 2)


if __name__ == "__main__":
    unittest.main()
