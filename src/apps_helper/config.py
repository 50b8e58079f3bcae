import os
from pathlib import Path

from .domain.errors import ConfigurationError

APP_DIR_NAME = ".apps-helper"
DATA_FILE_NAME = "apps.json"

# points the tool at a different data file, mostly useful for testing
DATA_FILE_ENV = "APPS_HELPER_DATA_FILE"


def get_data_file() -> Path:
    """get the location of apps.json."""
    override = os.environ.get(DATA_FILE_ENV)
    if override:
        return Path(override)

    home = os.environ.get("HOME")
    if not home:
        raise ConfigurationError("HOME environment variable not set")
    return Path(home) / APP_DIR_NAME / DATA_FILE_NAME
