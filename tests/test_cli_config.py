import json

from utils.cli_config import CLIConfig, DEFAULT_CONFIG, parse_value


def test_defaults_without_file(tmp_path):
    cfg = CLIConfig(tmp_path / "cfg")
    assert cfg.get("ui_settings.confirm_deletions") is True
    assert cfg.get("preferences.default_output") == "plain"
    # nothing is written until a value changes
    assert not cfg.config_file.exists()


def test_set_persists(tmp_path):
    cfg = CLIConfig(tmp_path / "cfg")
    cfg.set("preferences.seed_sample_data", False)

    with open(cfg.config_file, encoding="utf-8") as f:
        assert json.load(f)["preferences"]["seed_sample_data"] is False
    assert CLIConfig(tmp_path / "cfg").get("preferences.seed_sample_data") is False


def test_set_creates_nested_sections(tmp_path):
    cfg = CLIConfig(tmp_path)
    cfg.set("new_section.nested.value", 3)
    assert cfg.get("new_section.nested.value") == 3


def test_get_missing_returns_default(tmp_path):
    cfg = CLIConfig(tmp_path)
    assert cfg.get("ui_settings.missing", "fallback") == "fallback"
    assert cfg.get("preferences.default_output.deeper") is None


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    cfg = CLIConfig(tmp_path)
    assert cfg.config == DEFAULT_CONFIG


def test_reset_to_default(tmp_path):
    cfg = CLIConfig(tmp_path)
    cfg.set("ui_settings.confirm_deletions", False)
    cfg.reset_to_default()
    assert cfg.get("ui_settings.confirm_deletions") is True
    # defaults are copied, not shared
    assert DEFAULT_CONFIG["ui_settings"]["confirm_deletions"] is True


def test_parse_value():
    assert parse_value("true") is True
    assert parse_value("False") is False
    assert parse_value("42") == 42
    assert parse_value("1.5") == 1.5
    assert parse_value("rich") == "rich"
    assert parse_value("1.2.3") == "1.2.3"
