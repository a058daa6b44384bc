from datetime import datetime
from pathlib import Path

import pytest

from wordbook import LocalStoragePaths
from wordbook.config import DEFAULT_DATA_DIR, get_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("WORDBOOK_DATA_DIR", "WORDBOOK_SAVE_DELAY_MS", "WORDBOOK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_default_settings(clean_env):
    settings = get_settings()
    assert settings.data_dir == DEFAULT_DATA_DIR
    assert settings.save_delay_ms == 600
    assert settings.log_level == "WARNING"


def test_settings_from_environment(clean_env, tmp_path):
    clean_env.setenv("WORDBOOK_DATA_DIR", str(tmp_path))
    clean_env.setenv("WORDBOOK_SAVE_DELAY_MS", "250")
    clean_env.setenv("WORDBOOK_LOG_LEVEL", "debug")

    settings = get_settings()
    assert settings.data_dir == tmp_path
    assert settings.save_delay_ms == 250
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["soon", "-5"])
def test_invalid_delay(clean_env, value):
    clean_env.setenv("WORDBOOK_SAVE_DELAY_MS", value)
    with pytest.raises(ValueError, match="WORDBOOK_SAVE_DELAY_MS"):
        get_settings()


def test_local_paths_layout(tmp_path):
    paths = LocalStoragePaths(tmp_path)
    assert paths.words_json_path == tmp_path / "words.json"
    assert paths.words_json_temp_path == tmp_path / "words.json.tmp"
    assert paths.words_json_temp_path.parent == paths.words_json_path.parent
    assert paths.words_csv_path == tmp_path / "words.csv"


def test_backups_dir_created_on_demand(tmp_path):
    paths = LocalStoragePaths(tmp_path / "nested")
    assert not (tmp_path / "nested" / "backups").exists()
    assert paths.backups_dir.is_dir()


def test_timestamped_backup_path(tmp_path):
    paths = LocalStoragePaths(tmp_path)
    backup = paths.timestamped_backup_path(datetime(2024, 1, 31, 9, 5))
    assert backup == tmp_path / "backups" / "words-20240131-0905.json"


def test_paths_from_settings(clean_env, tmp_path):
    clean_env.setenv("WORDBOOK_DATA_DIR", str(tmp_path / "store"))
    assert LocalStoragePaths.from_settings().data_dir == Path(tmp_path / "store")
