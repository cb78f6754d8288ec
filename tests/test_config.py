"""Tests for config file management."""

from rdscodec import config
from rdscodec.config import load_config, save_config, set_value


class TestConfig:
    def test_default_config(self):
        cfg = load_config()
        assert cfg["station"]["program_identifier"] is None
        assert cfg["station"]["program_type"] == 0
        assert cfg["program_service"]["music"] is True
        assert cfg["output"]["format"] == "text"

    def test_save_and_load(self):
        cfg = load_config()
        cfg["station"]["program_identifier"] = 4660
        cfg["station"]["traffic_program"] = True
        cfg["program_service"]["alternative_frequencies"] = "104.5,98.0"
        cfg["output"]["format"] = "json"

        path = save_config(cfg)
        assert path.exists()
        assert path == config.CONFIG_FILE

        # Reload
        loaded = load_config()
        assert loaded["station"]["program_identifier"] == 4660
        assert loaded["station"]["traffic_program"] is True
        assert loaded["program_service"]["alternative_frequencies"] == "104.5,98.0"
        assert loaded["output"]["format"] == "json"

    def test_null_values_roundtrip(self):
        cfg = load_config()
        cfg["station"]["program_identifier"] = None
        save_config(cfg)

        loaded = load_config()
        assert loaded["station"]["program_identifier"] is None

    def test_numeric_string_stays_string(self):
        cfg = load_config()
        cfg["radio_text"]["label"] = "123"
        save_config(cfg)
        assert load_config()["radio_text"]["label"] == "123"

    def test_malformed_lines_ignored(self):
        config.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        config.CONFIG_FILE.write_text("station:\n  program_type: 7\n  garbage line\n")
        cfg = load_config()
        assert cfg["station"]["program_type"] == 7
        assert cfg["output"]["format"] == "text"


class TestSetValue:
    def test_dotted_key(self):
        cfg = set_value(load_config(), "station.program_type", "12")
        assert cfg["station"]["program_type"] == 12

    def test_new_section(self):
        cfg = set_value({}, "extra.flag", "true")
        assert cfg == {"extra": {"flag": True}}

    def test_top_level_key(self):
        cfg = set_value({}, "note", "hello")
        assert cfg == {"note": "hello"}
