# ============================
# ⚙️ Mothership Configs
# ============================
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

WORK_DIR = Path("work_dir")

# Where the directory lives on disk
DEFAULT_DB_PATH = WORK_DIR / "mothership_db"

# 📜 Logs roll over daily in here
DEFAULT_LOG_DIR = Path("logs")
LOG_FILE_NAME = "mothership.log"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(Exception):
    """🧾 Config file is missing, unreadable, or nonsense."""


class MothershipConfig(BaseModel):
    """
    ⚙️ Everything the mothership reads from its TOML file.

    Attributes:
        port (int): Port the HTTP server listens on. The only required setting.
        db_path (Path): Directory store file.
        log_dir (Path): Folder for the daily log files.
        log_level (str): Minimum level that gets logged.
    """
    port: int = Field(ge=1, le=65535)
    db_path: Path = DEFAULT_DB_PATH
    log_dir: Path = DEFAULT_LOG_DIR
    log_level: str = DEFAULT_LOG_LEVEL


def load_config(path: str | Path) -> MothershipConfig:
    """
    📖 Reads and validates a TOML config file.

    Args:
        path (str | Path): Path to the TOML file.

    Returns:
        MothershipConfig: The parsed settings.

    Raises:
        ConfigError: If the file can't be read, parsed, or validated.
    """
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"unable to parse config {path}: {e}") from e

    try:
        return MothershipConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}: {e}") from e
