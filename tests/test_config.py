from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase, mock

import yaml

from basedirs.config import (
    default_config,
    load_config,
    load_config_or_default,
    save_default_config,
    validate_config,
)
from basedirs.errors import ConfigError, PasswdUnreadable, UnsupportedPlatform
from basedirs.paths import config_path


class ConfigTests(TestCase):
    def test_default_config_is_valid(self) -> None:
        errors, warnings = validate_config(default_config())
        self.assertEqual(errors, [])
        self.assertEqual(warnings, [])

    def test_save_and_load_roundtrip(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "config.yaml"
            save_default_config(path)
            self.assertTrue(path.exists())
            self.assertEqual(load_config(path), default_config())

    def test_save_does_not_overwrite(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("platform: macos\n", encoding="utf-8")
            save_default_config(path)
            self.assertEqual(load_config(path)["platform"], "macos")
            save_default_config(path, overwrite=True)
            self.assertIsNone(load_config(path)["platform"])

    def test_partial_config_merges_with_defaults(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text(yaml.safe_dump({"output": {"format": "json"}}), encoding="utf-8")
            config = load_config(path)
        self.assertEqual(config["output"]["format"], "json")
        self.assertEqual(config["passwd_path"], "/etc/passwd")

    def test_env_expansion(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text(
                "passwd_path: ${ENV:FAKE_ROOT}/etc/passwd\nenv:\n  HOME: {_env: FAKE_HOME}\n",
                encoding="utf-8",
            )
            config = load_config(path, environ={"FAKE_ROOT": "/chroot", "FAKE_HOME": "/home/alice"})
        self.assertEqual(config["passwd_path"], "/chroot/etc/passwd")
        self.assertEqual(config["env"]["HOME"], "/home/alice")

    def test_missing_file(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "absent.yaml"
            with self.assertRaises(FileNotFoundError):
                load_config(path)
            self.assertEqual(load_config_or_default(path), default_config())

    def test_non_mapping_is_rejected(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(path)

    def test_validation_errors(self) -> None:
        config = default_config()
        config["platform"] = "amigaos"
        config["output"] = {"format": "xml"}
        config["surprise"] = True
        errors, _ = validate_config(config)
        self.assertTrue(any(e.startswith("platform:") for e in errors))
        self.assertTrue(any(e.startswith("output.format:") for e in errors))
        self.assertTrue(any("surprise" in e for e in errors))

    def test_validation_warnings(self) -> None:
        config = default_config()
        config["passwd_path"] = "etc/passwd"
        config["env"] = {"XDG_CACHE_HOME": ""}
        errors, warnings = validate_config(config)
        self.assertEqual(errors, [])
        self.assertEqual(len(warnings), 2)


class PathsTests(TestCase):
    def test_config_path_override(self) -> None:
        self.assertEqual(config_path({"BASEDIRS_CONFIG": "/tmp/custom.yaml"}), Path("/tmp/custom.yaml"))

    def test_config_path_survives_host_resolution_errors(self) -> None:
        expected = Path.home() / "basedirs" / "config.yaml"
        for error in (PasswdUnreadable("cannot read /etc/passwd"), UnsupportedPlatform("no mapping")):
            with mock.patch("basedirs.paths.resolve", side_effect=error):
                self.assertEqual(config_path({}), expected)

