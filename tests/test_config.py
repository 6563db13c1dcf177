import pytest
import yaml

from expense_tracker.config import DEFAULT_CONFIG, load_config, save_config


def test_missing_file_returns_defaults(tmp_path):
    assert load_config(tmp_path / "nope.yaml") == DEFAULT_CONFIG


def test_partial_file_is_merged_with_defaults(tmp_path):
    path = tmp_path / "expenses.yaml"
    path.write_text(yaml.safe_dump({"week_start": "monday"}))

    cfg = load_config(path)
    assert cfg["week_start"] == "monday"
    assert cfg["db_path"] == DEFAULT_CONFIG["db_path"]
    assert cfg["log_level"] == DEFAULT_CONFIG["log_level"]


def test_save_then_load(tmp_path):
    path = tmp_path / "conf" / "expenses.yaml"
    save_config({"db_path": "/data/x.db", "week_start": 0, "log_level": "DEBUG"}, path)
    assert load_config(path) == {"db_path": "/data/x.db", "week_start": 0, "log_level": "DEBUG"}


def test_non_mapping_config_rejected(tmp_path):
    path = tmp_path / "expenses.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


def test_config_values_override_defaults(tmp_path):
    path = tmp_path / "expenses.yaml"
    path.write_text(yaml.safe_dump({"db_path": "other.db", "extra": {"a": 1}}))

    cfg = load_config(path)
    assert cfg["db_path"] == "other.db"
    assert cfg["extra"] == {"a": 1}
    assert cfg["week_start"] == "sunday"
