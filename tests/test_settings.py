"""Tests for settings clamping, the min/max invariant, and persistence."""

from __future__ import annotations

import json
import random

import pytest

from airbike import settings as settings_mod
from airbike.settings import (
    DEFAULT_SETTINGS,
    Settings,
    load_settings,
    reset_to_defaults,
    save_settings,
    update_settings,
    with_accelerations_enabled,
    with_accelerations_per_minute,
    with_max_acceleration_duration,
    with_min_acceleration_duration,
    with_preparation_time,
    with_rest_time,
    with_rounds,
    with_work_time,
)


# ═══════════════════════════════════════════════════════════════════════
#  DEFAULTS
# ═══════════════════════════════════════════════════════════════════════


class TestDefaults:
    def test_values(self):
        s = Settings()
        assert s.preparation_time == 10
        assert s.work_time == 120
        assert s.rest_time == 60
        assert s.rounds == 4
        assert s.accelerations_enabled is False
        assert s.min_acceleration_duration == 2
        assert s.max_acceleration_duration == 15
        assert s.accelerations_per_minute == 4

    def test_reset_to_defaults(self):
        assert reset_to_defaults() == DEFAULT_SETTINGS

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Settings().work_time = 30  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════════
#  CLAMPING
# ═══════════════════════════════════════════════════════════════════════


class TestClamping:

    @pytest.mark.parametrize("value,expected", [
        (-10, 5), (0, 5), (4, 5), (5, 5), (90, 90), (3600, 3600), (3601, 3600), (10**6, 3600),
    ])
    def test_work_time(self, value, expected):
        assert with_work_time(Settings(), value).work_time == expected

    @pytest.mark.parametrize("value,expected", [(-1, 0), (0, 0), (31, 30), (15, 15)])
    def test_preparation_time(self, value, expected):
        assert with_preparation_time(Settings(), value).preparation_time == expected

    @pytest.mark.parametrize("value,expected", [(-5, 0), (1801, 1800), (45, 45)])
    def test_rest_time(self, value, expected):
        assert with_rest_time(Settings(), value).rest_time == expected

    @pytest.mark.parametrize("value,expected", [(0, 1), (101, 100), (8, 8)])
    def test_rounds(self, value, expected):
        assert with_rounds(Settings(), value).rounds == expected

    @pytest.mark.parametrize("value,expected", [(1, 3), (7, 6), (5, 5)])
    def test_accelerations_per_minute(self, value, expected):
        assert with_accelerations_per_minute(Settings(), value).accelerations_per_minute == expected

    @pytest.mark.parametrize("value,expected", [(1, 2), (0, 2), (11, 10), (6, 6)])
    def test_min_acceleration(self, value, expected):
        assert with_min_acceleration_duration(Settings(), value).min_acceleration_duration == expected

    def test_max_acceleration_upper_bound(self):
        assert with_max_acceleration_duration(Settings(), 45).max_acceleration_duration == 20

    def test_toggle_accelerations(self):
        assert with_accelerations_enabled(Settings(), True).accelerations_enabled is True

    def test_non_numeric_is_ignored(self):
        s = update_settings(Settings(), work_time="lots", rounds=6)
        assert s.work_time == 120
        assert s.rounds == 6

    def test_boolean_for_number_is_ignored_with_warning(self, caplog):
        with caplog.at_level("WARNING", logger="airbike.settings"):
            s = update_settings(Settings(), rounds=True)
        assert s.rounds == 4
        assert "rounds" in caplog.text

    def test_unknown_key_is_ignored(self):
        assert update_settings(Settings(), colour="blue") == Settings()

    def test_float_is_truncated(self):
        assert update_settings(Settings(), work_time=90.7).work_time == 90

    def test_original_is_untouched(self):
        s = Settings()
        update_settings(s, work_time=30)
        assert s.work_time == 120


# ═══════════════════════════════════════════════════════════════════════
#  MAX >= MIN
# ═══════════════════════════════════════════════════════════════════════


class TestAccelerationBounds:

    def test_raising_min_drags_max_up(self):
        s = Settings(min_acceleration_duration=2, max_acceleration_duration=4)
        s = with_min_acceleration_duration(s, 8)
        assert s.min_acceleration_duration == 8
        assert s.max_acceleration_duration == 8

    def test_max_below_min_clamps_to_min(self):
        s = Settings(min_acceleration_duration=6, max_acceleration_duration=12)
        s = with_max_acceleration_duration(s, 3)
        assert s.max_acceleration_duration == 6
        assert s.min_acceleration_duration == 6

    def test_bulk_update_uses_new_min(self):
        s = update_settings(Settings(), min_acceleration_duration=9, max_acceleration_duration=4)
        assert (s.min_acceleration_duration, s.max_acceleration_duration) == (9, 9)

    def test_random_update_sequences_keep_invariant(self):
        rng = random.Random(42)
        s = Settings()
        for _ in range(500):
            if rng.random() < 0.5:
                s = with_min_acceleration_duration(s, rng.randint(-5, 30))
            else:
                s = with_max_acceleration_duration(s, rng.randint(-5, 40))
            assert s.max_acceleration_duration >= s.min_acceleration_duration
            assert 2 <= s.min_acceleration_duration <= 10
            assert s.max_acceleration_duration <= 20


# ═══════════════════════════════════════════════════════════════════════
#  PERSISTENCE
# ═══════════════════════════════════════════════════════════════════════


class TestPersistence:

    def test_round_trip(self):
        original = Settings(work_time=90, rounds=8, accelerations_per_minute=5)
        save_settings(original)
        loaded = load_settings()
        assert loaded.work_time == 90
        assert loaded.rounds == 8
        assert loaded.accelerations_per_minute == 5

    def test_enable_flag_not_persisted(self):
        save_settings(Settings(accelerations_enabled=True))
        data = json.loads(settings_mod.SETTINGS_PATH.read_text(encoding="utf-8"))
        assert "accelerations_enabled" not in data
        assert load_settings().accelerations_enabled is False

    def test_missing_file_returns_defaults(self):
        assert load_settings() == Settings()

    def test_invalid_json_returns_defaults(self):
        settings_mod.SETTINGS_PATH.write_text("NOT VALID JSON", encoding="utf-8")
        assert load_settings() == Settings()

    def test_non_object_returns_defaults(self):
        settings_mod.SETTINGS_PATH.write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings() == Settings()

    def test_out_of_range_values_are_clamped(self):
        data = {
            "work_time": 1,
            "rounds": 500,
            "min_acceleration_duration": 9,
            "max_acceleration_duration": 3,
        }
        settings_mod.SETTINGS_PATH.write_text(json.dumps(data), encoding="utf-8")
        s = load_settings()
        assert s.work_time == 5
        assert s.rounds == 100
        assert s.max_acceleration_duration == 9

    def test_extra_keys_ignored(self):
        data = {"work_time": 300, "unknown_future_key": True}
        settings_mod.SETTINGS_PATH.write_text(json.dumps(data), encoding="utf-8")
        s = load_settings()
        assert s.work_time == 300
        assert not hasattr(s, "unknown_future_key")
