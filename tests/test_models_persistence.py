"""Tests for config models and JSON persistence."""

import json

import pytest
from pydantic import ValidationError

from midistatus.exceptions import ConfigFileInvalidError, ConfigValidationError
from midistatus.models import AppConfig, Color, DrawMode, Profile, ProfileItem, TrackerConfig, TrackerType
from midistatus.persistence import PydanticPersistence


@pytest.mark.unit
class TestModels:

    def test_app_config_defaults(self):
        config = AppConfig()
        assert config.timeout == 2000
        assert config.ping_timeout == 5000
        assert config.jellyfin_active_user_time == 5000
        assert config.truenas_interface == "enp2s0"
        assert not config.is_jellyfin_configured
        assert not config.is_truenas_configured

    def test_configured_flags(self, app_config):
        assert app_config.is_jellyfin_configured
        assert app_config.is_truenas_configured

    def test_profile_item_defaults(self):
        item = ProfileItem()
        assert item.mode is DrawMode.DEFAULT
        assert item.size == 1
        assert item.scale == 1.0
        assert item.colors == []

    @pytest.mark.parametrize("field,value", [
        ("colors", [128]),
        ("pos_x", 10),
        ("pos_y", -1),
    ])
    def test_profile_item_rejects_out_of_range(self, field, value):
        with pytest.raises(ValidationError):
            ProfileItem(**{field: value})

    def test_tracker_config_from_json(self):
        entry = TrackerConfig.model_validate_json(
            '{"tracker_type": "jellyfin", "items": [{"stat_key": "active_users", "mode": "bar_x"}]}'
        )
        assert entry.tracker_type is TrackerType.JELLYFIN
        assert entry.update_interval == 60000
        assert entry.items[0].mode is DrawMode.BAR_X

    def test_uses_tracker(self):
        profile = Profile(trackers=[TrackerConfig(tracker_type=TrackerType.PING)])
        assert profile.uses_tracker(TrackerType.PING)
        assert not profile.uses_tracker(TrackerType.TRUENAS)

    def test_color_clamped(self):
        assert Color(r=255, g=50, b=0).clamped(99) == (99, 50, 0)
        assert Color(r=1, g=2, b=3).to_rgb_tuple() == (1, 2, 3)


@pytest.mark.unit
class TestPersistence:

    def test_load_or_create_writes_defaults(self, temp_dir):
        path = temp_dir / "config.json"

        config = AppConfig.load_or_create(path)

        assert config == AppConfig()
        assert json.loads(path.read_text())["timeout"] == 2000

    def test_load_or_create_reads_existing(self, temp_dir):
        path = temp_dir / "profile.json"
        path.write_text(json.dumps({"device": "Launchpad", "trackers": [{"tracker_type": "ping"}]}))

        profile = Profile.load_or_create(path)

        assert profile.device == "Launchpad"
        assert profile.trackers[0].tracker_type is TrackerType.PING

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigFileInvalidError):
            AppConfig.load_or_create(path)
        assert path.read_text() == "{not json"

    def test_empty_file(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("  \n")

        with pytest.raises(ConfigFileInvalidError):
            PydanticPersistence.load_json(path, AppConfig)

    def test_schema_violation(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"timeout": 0}))

        with pytest.raises(ConfigValidationError) as exc_info:
            PydanticPersistence.load_json(path, AppConfig)
        assert exc_info.value.field == "timeout"

    def test_several_violations_listed(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"timeout": 0, "ping_timeout": 0}))

        with pytest.raises(ConfigValidationError) as exc_info:
            PydanticPersistence.load_json(path, AppConfig)
        assert exc_info.value.field == "multiple fields"
        assert "ping_timeout" in exc_info.value.user_message

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            PydanticPersistence.load_json(temp_dir / "missing.json", AppConfig)

    def test_save_keeps_backup(self, temp_dir):
        path = temp_dir / "config.json"
        PydanticPersistence.save_json(AppConfig(timeout=1000), path)
        PydanticPersistence.save_json(AppConfig(timeout=3000), path)

        assert json.loads(path.read_text())["timeout"] == 3000
        assert json.loads((temp_dir / "config.json.bak").read_text())["timeout"] == 1000
        assert not (temp_dir / "config.json.tmp").exists()
