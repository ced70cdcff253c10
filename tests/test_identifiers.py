import unittest

from avatarbot.catalog import artist_for, is_official
from avatarbot.identifiers import (
    AvatarKind,
    avatar_src,
    classify,
    clean_input,
    convert,
    is_well_formed,
    normalize,
)


class NormalizeTests(unittest.TestCase):
    def test_strips_punctuation_and_lowercases(self) -> None:
        self.assertEqual(normalize("Erika-GEN2!!"), "erika-gen2")
        self.assertEqual(normalize("  My Avatar.PNG "), "myavatar.png")

    def test_drops_custom_marker(self) -> None:
        self.assertEqual(normalize("#SplxRaiders"), "splxraiders")

    def test_clean_input_keeps_custom_marker(self) -> None:
        self.assertEqual(clean_input("  #SplxRaiders "), "#splxraiders")


class ConvertTests(unittest.TestCase):
    def test_hash_with_file_extension_folds_to_filename(self) -> None:
        self.assertEqual(convert("#example.png"), "example.png")

    def test_other_ids_are_unchanged(self) -> None:
        self.assertEqual(convert("#example"), "#example")
        self.assertEqual(convert("example.png"), "example.png")
        self.assertEqual(convert("cynthia"), "cynthia")


class ClassifyTests(unittest.TestCase):
    def test_official_requires_catalog_membership(self) -> None:
        self.assertEqual(classify(normalize("Erika-GEN2!!")), AvatarKind.OFFICIAL)
        self.assertIsNone(classify("not-a-real-trainer"))

    def test_custom_and_file_shapes(self) -> None:
        self.assertEqual(classify("#splxraiders"), AvatarKind.CUSTOM)
        self.assertEqual(classify("example.png"), AvatarKind.FILE)

    def test_malformed_ids(self) -> None:
        self.assertIsNone(classify("bad avatar"))
        self.assertIsNone(classify("#bad.png.extra!"))
        self.assertFalse(is_well_formed("bad avatar"))
        self.assertFalse(is_well_formed("#two#marks"))
        self.assertTrue(is_well_formed("#splxraiders"))
        self.assertTrue(is_well_formed("example.png"))


class AvatarSrcTests(unittest.TestCase):
    def test_official_and_custom_urls(self) -> None:
        host = "https://sprites.example.org/"
        self.assertEqual(avatar_src("cynthia", host), "https://sprites.example.org/sprites/trainers/cynthia.png")
        self.assertEqual(
            avatar_src("#splxraiders", host),
            "https://sprites.example.org/sprites/trainers-custom/splxraiders.png",
        )

    def test_files_have_no_url(self) -> None:
        self.assertEqual(avatar_src("example.png"), "")


class CatalogTests(unittest.TestCase):
    def test_artist_attribution(self) -> None:
        self.assertEqual(artist_for("acerola"), "Beliot419")
        self.assertEqual(artist_for("gloria-dojo"), "ZacWeavile")
        self.assertIsNone(artist_for("cynthia"))
        self.assertTrue(is_official("acerola"))
        self.assertTrue(is_official("cynthia"))


if __name__ == "__main__":
    unittest.main()
