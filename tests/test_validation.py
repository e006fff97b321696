"""Tests for caller-side settings validation and fallbacks."""

import pytest

from chaosgame.validation import (
    DEFAULT_SETTINGS,
    RANGES_HELP,
    ConfigError,
    Settings,
    validate_settings,
)


class TestAccepted:
    @pytest.mark.parametrize("vertices", [3, 7, 12])
    @pytest.mark.parametrize("jump_ratio", [2, 5, 12])
    def test_in_range(self, vertices, jump_ratio):
        s = validate_settings(vertices, jump_ratio)
        assert s == Settings(vertices=vertices, jump_ratio=jump_ratio, rule="uniform")

    def test_string_and_integral_float_inputs(self):
        assert validate_settings(" 6 ", "3") == Settings(6, 3, "uniform")
        assert validate_settings(4.0, 2.0) == Settings(4, 2, "uniform")

    def test_rule_passthrough(self):
        assert validate_settings(4, 2, "no-neighbor").rule == "no-neighbor"


class TestRejected:
    @pytest.mark.parametrize("vertices", [2, 13, 0, -3, "abc", "", None, 3.5, True])
    def test_bad_vertices_fall_back_to_default(self, vertices):
        with pytest.raises(ConfigError) as exc:
            validate_settings(vertices, 5)
        err = exc.value
        assert set(err.errors) == {"vertices"}
        assert err.corrected == Settings(vertices=DEFAULT_SETTINGS.vertices, jump_ratio=5)

    @pytest.mark.parametrize("jump_ratio", [1, 13, "x", 2.5])
    def test_bad_jump_ratio(self, jump_ratio):
        with pytest.raises(ConfigError) as exc:
            validate_settings(4, jump_ratio)
        assert set(exc.value.errors) == {"jump_ratio"}
        assert exc.value.corrected.jump_ratio == DEFAULT_SETTINGS.jump_ratio
        assert exc.value.corrected.vertices == 4

    def test_falls_back_to_last_good(self):
        last = Settings(vertices=8, jump_ratio=4, rule="no-repeat")
        with pytest.raises(ConfigError) as exc:
            validate_settings(40, 99, "bogus", fallback=last)
        assert set(exc.value.errors) == {"vertices", "jump_ratio", "rule"}
        assert exc.value.corrected == last

    def test_message_lists_valid_ranges(self):
        with pytest.raises(ConfigError) as exc:
            validate_settings(1, 2)
        msg = exc.value.user_message()
        assert "Invalid vertex count 1" in msg
        assert RANGES_HELP in msg
        assert "3 to 12" in msg and "2 to 12" in msg
        assert str(exc.value) == msg

    def test_no_neighbor_needs_four_vertices(self):
        with pytest.raises(ConfigError) as exc:
            validate_settings(3, 2, "no-neighbor")
        assert set(exc.value.errors) == {"rule"}
        assert exc.value.corrected == Settings(3, 2, "uniform")

    @pytest.mark.parametrize(
        "text",
        ["\u00b2", "\u0663", "+-5", "--4", "1_0", "9" * 5000, "4 2"],
    )
    def test_malformed_numbers_rejected_not_raised(self, text):
        with pytest.raises(ConfigError) as exc:
            validate_settings(text, text)
        assert set(exc.value.errors) == {"vertices", "jump_ratio"}
        assert exc.value.corrected == DEFAULT_SETTINGS

    def test_long_input_is_shortened_in_message(self):
        with pytest.raises(ConfigError) as exc:
            validate_settings("9" * 5000, 2)
        assert len(exc.value.errors["vertices"]) < 80

    def test_non_string_rule_rejected(self):
        with pytest.raises(ConfigError) as exc:
            validate_settings(4, 2, ["uniform"])
        assert set(exc.value.errors) == {"rule"}
        assert exc.value.corrected.rule == "uniform"

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)
