from pathlib import Path

import pytest

from config import DEFAULT_DB_PATH, ConfigError, load_config


def test_load_minimal_config(tmp_path):
    path = tmp_path / "mothership.toml"
    path.write_text("port = 8000\n")
    config = load_config(path)
    assert config.port == 8000
    assert config.db_path == DEFAULT_DB_PATH
    assert config.log_level == "INFO"


def test_load_full_config(tmp_path):
    path = tmp_path / "mothership.toml"
    path.write_text('port = 9000\ndb_path = "data/db"\nlog_dir = "out"\nlog_level = "DEBUG"\n')
    config = load_config(path)
    assert config.db_path == Path("data/db")
    assert config.log_dir == Path("out")
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("body", ["", "port = 0\n", "port = 'eight'\n", "port = [\n"])
def test_bad_config(tmp_path, body):
    path = tmp_path / "mothership.toml"
    path.write_text(body)
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_config(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.toml")
