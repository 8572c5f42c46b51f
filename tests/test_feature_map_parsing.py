import sys
import unittest
from pathlib import Path

# Ensure `src/` layout is importable when running tests without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
sys.path.insert(0, str(SRC_DIR))


class TestResolveFeatureMap(unittest.TestCase):
    def test_missing_features_resolve_to_unsupported(self):
        from adapterfeatures.feature_map import UNSUPPORTED_ASSETS_FEATURE, resolve_feature_map
        from adapterfeatures.types import AdapterFeatureMap, SupportKind

        resolved = resolve_feature_map(AdapterFeatureMap(hybrid_output=SupportKind.STABLE))
        self.assertEqual(resolved.static_output, SupportKind.UNSUPPORTED)
        self.assertEqual(resolved.hybrid_output, SupportKind.STABLE)
        self.assertEqual(resolved.server_output, SupportKind.UNSUPPORTED)
        self.assertEqual(resolved.assets, UNSUPPORTED_ASSETS_FEATURE)

    def test_partial_assets_fields_get_defaults(self):
        from adapterfeatures.feature_map import resolve_feature_map
        from adapterfeatures.types import AdapterFeatureMap, AssetsFeature, SupportKind

        resolved = resolve_feature_map(AdapterFeatureMap(assets=AssetsFeature(is_squoosh_compatible=True)))
        self.assertEqual(resolved.assets.support_kind, SupportKind.UNSUPPORTED)
        self.assertFalse(resolved.assets.is_sharp_compatible)
        self.assertTrue(resolved.assets.is_squoosh_compatible)


class TestParseFeatureMap(unittest.TestCase):
    def test_parses_camel_case_json(self):
        from adapterfeatures.feature_map import parse_feature_map
        from adapterfeatures.types import AssetsFeature, SupportKind

        fm = parse_feature_map(
            {
                "serverOutput": "stable",
                "hybridOutput": "experimental",
                "assets": {"supportKind": "stable", "isSharpCompatible": True},
                "somethingNew": "ignored",
            }
        )
        self.assertIsNone(fm.static_output)
        self.assertEqual(fm.server_output, SupportKind.STABLE)
        self.assertEqual(fm.hybrid_output, SupportKind.EXPERIMENTAL)
        self.assertEqual(fm.assets, AssetsFeature(SupportKind.STABLE, is_sharp_compatible=True))

    def test_unknown_support_kind_reports_path(self):
        from adapterfeatures.errors import InvalidFeatureMapError
        from adapterfeatures.feature_map import parse_feature_map

        with self.assertRaises(InvalidFeatureMapError) as ctx:
            parse_feature_map({"assets": {"supportKind": "beta"}})
        msg = str(ctx.exception)
        self.assertIn("assets['supportKind']", msg)
        self.assertIn("'beta'", msg)

    def test_compat_flag_must_be_bool(self):
        from adapterfeatures.feature_map import validate_feature_map_json

        with self.assertRaises(ValueError) as ctx:
            validate_feature_map_json({"assets": {"isSharpCompatible": "yes"}})
        self.assertIn("isSharpCompatible", str(ctx.exception))

    def test_output_keys_follow_feature_keys(self):
        from adapterfeatures.feature_map import validate_feature_map_json
        from adapterfeatures.types import FEATURE_KEYS

        for key in FEATURE_KEYS:
            if key == "assets":
                continue
            with self.subTest(key=key):
                with self.assertRaises(ValueError) as ctx:
                    validate_feature_map_json({key: "beta"})
                self.assertIn(key, str(ctx.exception))

    def test_top_level_must_be_object(self):
        from adapterfeatures.feature_map import validate_feature_map_json

        with self.assertRaises(ValueError):
            validate_feature_map_json(["stable"])


class TestParseProjectConfig(unittest.TestCase):
    def test_defaults(self):
        from adapterfeatures.feature_map import parse_project_config
        from adapterfeatures.types import ImageService, OutputMode

        cfg = parse_project_config({})
        self.assertEqual(cfg.output, OutputMode.STATIC)
        self.assertEqual(cfg.image.service.entrypoint, ImageService.SHARP.value)
        self.assertEqual(parse_project_config(None), cfg)

    def test_reads_output_and_entrypoint(self):
        from adapterfeatures.feature_map import parse_project_config
        from adapterfeatures.types import OutputMode

        cfg = parse_project_config({"output": "hybrid", "image": {"service": {"entrypoint": "astro/assets/services/squoosh"}}})
        self.assertEqual(cfg.output, OutputMode.HYBRID)
        self.assertEqual(cfg.image.service.entrypoint, "astro/assets/services/squoosh")

    def test_invalid_output(self):
        from adapterfeatures.errors import InvalidConfigError
        from adapterfeatures.feature_map import parse_project_config

        with self.assertRaises(InvalidConfigError) as ctx:
            parse_project_config({"output": "edge"})
        self.assertIn("output", str(ctx.exception))

    def test_non_object_image_sections_are_rejected(self):
        from adapterfeatures.errors import InvalidConfigError
        from adapterfeatures.feature_map import parse_project_config

        for image in ([], "", 0, "sharp"):
            with self.subTest(image=image):
                with self.assertRaises(InvalidConfigError) as ctx:
                    parse_project_config({"image": image})
                self.assertIn("image", str(ctx.exception))

        for service in ([], ""):
            with self.subTest(service=service):
                with self.assertRaises(InvalidConfigError) as ctx:
                    parse_project_config({"image": {"service": service}})
                self.assertIn("service", str(ctx.exception))

    def test_invalid_entrypoint(self):
        from adapterfeatures.errors import InvalidConfigError
        from adapterfeatures.feature_map import parse_project_config

        with self.assertRaises(InvalidConfigError):
            parse_project_config({"image": {"service": {"entrypoint": 42}}})


if __name__ == "__main__":
    unittest.main()
