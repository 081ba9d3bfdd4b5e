"""Tests for config loading and validation."""

import tempfile
import unittest
from pathlib import Path

from core.tree_config import (
    ConfigValidationError,
    TreeConfig,
    load_config_payload,
    load_tree_config,
)


class TestTreeConfig(unittest.TestCase):
    def _write_config(self, content: str) -> str:
        handle = tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False)
        handle.write(content)
        handle.flush()
        handle.close()
        return handle.name

    def test_defaults_without_file(self) -> None:
        self.assertEqual(load_tree_config(None), TreeConfig())

    def test_load_non_strict_missing_returns_empty(self) -> None:
        payload = load_config_payload("/definitely/missing.yml", strict=False)
        self.assertEqual(payload, {})

    def test_load_strict_missing_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_config_payload("/definitely/missing.yml", strict=True)

    def test_valid_config(self) -> None:
        path = self._write_config(
            "encoding: latin-1\nlog_level: info\nmax_version: 16\nshow_line_label: false\n"
        )
        try:
            config = load_tree_config(path, strict=True)
            self.assertEqual(config.encoding, "latin-1")
            self.assertEqual(config.log_level, "INFO")
            self.assertEqual(config.max_version, 16)
            self.assertFalse(config.show_line_label)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_empty_file_gives_defaults(self) -> None:
        path = self._write_config("")
        try:
            self.assertEqual(load_tree_config(path, strict=True), TreeConfig())
        finally:
            Path(path).unlink(missing_ok=True)

    def test_invalid_yaml_non_strict_falls_back(self) -> None:
        path = self._write_config("encoding: [unclosed\n")
        try:
            self.assertEqual(load_tree_config(path, strict=False), TreeConfig())
        finally:
            Path(path).unlink(missing_ok=True)

    def test_unknown_encoding_strict_raises(self) -> None:
        path = self._write_config("encoding: klingon-8\n")
        try:
            with self.assertRaises(ConfigValidationError):
                load_tree_config(path, strict=True)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_unknown_encoding_non_strict_uses_default(self) -> None:
        path = self._write_config("encoding: klingon-8\nmax_version: 14\n")
        try:
            config = load_tree_config(path, strict=False)
            self.assertEqual(config.encoding, "utf-8")
            self.assertEqual(config.max_version, 14)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_max_version_defaults_to_no_limit(self) -> None:
        self.assertIsNone(TreeConfig().max_version)
        path = self._write_config("max_version: null\n")
        try:
            self.assertIsNone(load_tree_config(path, strict=True).max_version)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_bool_max_version_rejected(self) -> None:
        path = self._write_config("max_version: true\n")
        try:
            with self.assertRaises(ConfigValidationError):
                load_tree_config(path, strict=True)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_unknown_key_strict_raises(self) -> None:
        path = self._write_config("colour: blue\n")
        try:
            with self.assertRaises(ConfigValidationError):
                load_tree_config(path, strict=True)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_non_mapping_payload_strict_raises(self) -> None:
        path = self._write_config("- a\n- b\n")
        try:
            with self.assertRaises(ConfigValidationError):
                load_tree_config(path, strict=True)
        finally:
            Path(path).unlink(missing_ok=True)


if __name__ == "__main__":
    unittest.main()
