"""Tests for the command-line entry point (headless mode only)."""

import logging

import pytest

from chaosgame import main as chaosgame_main
from chaosgame.main import build_parser, main, resolve_settings
from chaosgame.patterns.presets import load_presets
from chaosgame.validation import Settings


class TestResolveSettings:
    def _resolve(self, argv):
        return resolve_settings(build_parser().parse_args(argv), load_presets())

    def test_defaults(self):
        assert self._resolve([]) == Settings(3, 2, "uniform")

    def test_flags(self):
        assert self._resolve(["--vertices", "5", "--jump-ratio", "3", "--rule", "no-repeat"]) == Settings(
            5, 3, "no-repeat"
        )

    def test_preset_with_override(self):
        s = self._resolve(["--preset", "hexagon", "--jump-ratio", "4"])
        assert s == Settings(6, 4, "uniform")

    def test_out_of_range_resets_field_to_default(self, caplog):
        with caplog.at_level(logging.WARNING):
            s = self._resolve(["--vertices", "13", "--jump-ratio", "5"])
        assert s == Settings(3, 5, "uniform")
        assert "Invalid vertex count" in caplog.text
        assert "3 to 12" in caplog.text

    @pytest.mark.parametrize("text", ["\u00b2", "+-5", "9" * 5000])
    def test_malformed_number_falls_back(self, caplog, text):
        with caplog.at_level(logging.WARNING):
            s = self._resolve(["--vertices", text, "--jump-ratio", "4"])
        assert s == Settings(3, 4, "uniform")
        assert "Invalid vertex count" in caplog.text

    def test_out_of_range_with_preset_uses_preset_value(self):
        s = self._resolve(["--preset", "pentaflake", "--jump-ratio", "1"])
        assert s == Settings(5, 3, "uniform")


class TestMain:
    def test_headless_run(self, capsys):
        assert main(["--headless", "200", "--seed", "3"]) == 0
        out = capsys.readouterr().out
        assert "vertices=3 jump_ratio=2 rule=uniform" in out
        assert "points=200" in out
        assert "state=running" in out

    def test_headless_exhausts(self, capsys):
        assert main(["--headless", "500", "--capacity", "100", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "points=100" in out
        assert "state=exhausted" in out

    def test_headless_is_deterministic(self, capsys):
        main(["--headless", "300", "--seed", "11", "--vertices", "5", "--jump-ratio", "3"])
        first = capsys.readouterr().out
        main(["--headless", "300", "--seed", "11", "--vertices", "5", "--jump-ratio", "3"])
        assert capsys.readouterr().out == first

    def test_list_presets(self, capsys):
        assert main(["--list-presets"]) == 0
        assert "sierpinski" in capsys.readouterr().out

    def test_unknown_preset_exits(self):
        with pytest.raises(SystemExit) as exc:
            main(["--preset", "nope", "--headless", "1"])
        assert exc.value.code == 2

    def test_bad_capacity_exits(self):
        with pytest.raises(SystemExit) as exc:
            main(["--capacity", "0", "--headless", "1"])
        assert exc.value.code == 2

    def test_min_alpha_reaches_config(self, monkeypatch):
        seen = []
        monkeypatch.setattr(chaosgame_main, "run_headless", lambda settings, cfg, steps: seen.append(cfg))
        assert main(["--headless", "10", "--min-alpha", "0.2"]) == 0
        assert seen[0].min_alpha == pytest.approx(0.2)

    def test_min_alpha_defaults_to_zero(self, monkeypatch):
        seen = []
        monkeypatch.setattr(chaosgame_main, "run_headless", lambda settings, cfg, steps: seen.append(cfg))
        main(["--headless", "10"])
        assert seen[0].min_alpha == 0.0

    @pytest.mark.parametrize("value", ["-0.1", "1.5", "nan"])
    def test_min_alpha_out_of_range_exits(self, value):
        with pytest.raises(SystemExit) as exc:
            main(["--headless", "1", "--min-alpha", value])
        assert exc.value.code == 2
