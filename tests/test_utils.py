import os
import unittest
from datetime import datetime, timezone
from unittest import mock

from avatarbot.utils import (
    bool_from_env,
    epoch_ms,
    float_from_env,
    int_from_env,
    is_username,
    split_one,
    to_id,
)


class IdentityHelperTests(unittest.TestCase):
    def test_to_id_collapses_names(self) -> None:
        self.assertEqual(to_id("Some User_42"), "someuser42")
        self.assertEqual(to_id(None), "")

    def test_is_username(self) -> None:
        self.assertTrue(is_username("Bob"))
        self.assertTrue(is_username("2fast"))
        self.assertFalse(is_username("!!!"))
        self.assertFalse(is_username("12345"))
        self.assertFalse(is_username("a" * 33))
        self.assertFalse(is_username("   "))

    def test_split_one_only_splits_once(self) -> None:
        self.assertEqual(split_one("bob, #a, extra"), ("bob", "#a, extra"))
        self.assertEqual(split_one("bob"), ("bob", ""))

    def test_epoch_ms(self) -> None:
        self.assertEqual(epoch_ms(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)), 1000)


class EnvHelperTests(unittest.TestCase):
    def test_invalid_values_fall_back(self) -> None:
        env = {"A_INT": "abc", "A_FLOAT": "1.5", "A_BOOL": "maybe"}
        with mock.patch.dict(os.environ, env, clear=False):
            self.assertEqual(int_from_env("A_INT", 7), 7)
            self.assertEqual(float_from_env("A_FLOAT", 0.0), 1.5)
            self.assertTrue(bool_from_env("A_BOOL", True))
            self.assertFalse(bool_from_env("A_MISSING_BOOL", False))

    def test_boolean_spellings(self) -> None:
        with mock.patch.dict(os.environ, {"A_BOOL": "off"}, clear=False):
            self.assertFalse(bool_from_env("A_BOOL", True))
        with mock.patch.dict(os.environ, {"A_BOOL": "Yes"}, clear=False):
            self.assertTrue(bool_from_env("A_BOOL", False))


if __name__ == "__main__":
    unittest.main()
