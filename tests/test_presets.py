"""Tests for YAML preset loading."""

import logging

import pytest

from chaosgame.patterns.presets import PRESETS_PATH, load_presets
from chaosgame.validation import Settings


class TestBundledPresets:
    def test_bundled_file_exists(self):
        assert PRESETS_PATH.exists()

    def test_sierpinski(self):
        presets = load_presets()
        p = presets["sierpinski"]
        assert p.id == "sierpinski"
        assert p.settings == Settings(vertices=3, jump_ratio=2, rule="uniform")
        assert p.description

    def test_all_bundled_presets_valid(self):
        presets = load_presets()
        assert len(presets) >= 5
        for p in presets.values():
            assert 3 <= p.settings.vertices <= 12
            assert 2 <= p.settings.jump_ratio <= 12


class TestCustomFile:
    def test_invalid_entries_skipped(self, tmp_path, caplog):
        path = tmp_path / "presets.yaml"
        path.write_text(
            "good:\n"
            "  vertices: 6\n"
            "  jump_ratio: 3\n"
            "too-many:\n"
            "  vertices: 20\n"
            "  jump_ratio: 2\n"
            "triangle-no-neighbor:\n"
            "  vertices: 3\n"
            "  jump_ratio: 2\n"
            "  rule: no-neighbor\n",
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING):
            presets = load_presets(path)
        assert list(presets) == ["good"]
        assert presets["good"].settings == Settings(6, 3, "uniform")
        assert "too-many" in caplog.text
        assert "triangle-no-neighbor" in caplog.text

    def test_missing_file(self, tmp_path):
        assert load_presets(tmp_path / "nope.yaml") == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_presets(path) == {}

    def test_non_mapping_entries_skipped(self, tmp_path, caplog):
        path = tmp_path / "presets.yaml"
        path.write_text(
            "good:\n"
            "  vertices: 4\n"
            "  jump_ratio: 2\n"
            "scalar: 7\n"
            "listy: [3, 2]\n"
            "odd-rule:\n"
            "  vertices: 5\n"
            "  jump_ratio: 2\n"
            "  rule: [uniform]\n",
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING):
            presets = load_presets(path)
        assert list(presets) == ["good"]
        for pid in ("scalar", "listy", "odd-rule"):
            assert pid in caplog.text

    @pytest.mark.parametrize("body", ["- sierpinski\n- hexagon\n", "just a string\n", "42\n"])
    def test_non_mapping_document_ignored(self, tmp_path, caplog, body):
        path = tmp_path / "presets.yaml"
        path.write_text(body, encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert load_presets(path) == {}
        assert "expected a mapping" in caplog.text
