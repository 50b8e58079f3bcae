import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from ..domain.errors import DeserializationError, StorageError
from ..domain.models import AppProfile, AppsData, ProfileType

logger = logging.getLogger(__name__)


def migrate_legacy_directories(data: AppsData) -> AppsData:
    """
    give apps that only have the old `directory` field a dev profile.

    runs on every load. apps that already have profiles are left alone,
    so applying it repeatedly is harmless. the legacy field is kept.
    """
    for app in data.apps.values():
        if not app.profiles and app.legacy_directory is not None:
            app.profiles.append(AppProfile(
                profile_type=ProfileType.DEV,
                location=app.legacy_directory,
                active=True,
            ))
            logger.debug(f"migrated legacy directory of '{app.name}' to a dev profile")
    return data


class AppStore:
    """handles app persistence to JSON."""

    def __init__(self, data_file: Path):
        self.data_file = Path(data_file)

    def load(self) -> AppsData:
        """
        load apps from the JSON file.

        a missing file is an empty store. a file that exists but cannot
        be parsed raises DeserializationError rather than being discarded.
        """
        if not self.data_file.exists():
            logger.debug(f"{self.data_file} does not exist, starting empty")
            return AppsData.empty()

        try:
            content = self.data_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DeserializationError(self.data_file, str(e)) from e
        except OSError as e:
            raise StorageError(self.data_file, str(e)) from e

        try:
            data = AppsData.model_validate_json(content)
        except ValidationError as e:
            raise DeserializationError(self.data_file, str(e)) from e

        logger.debug(f"loaded {len(data.apps)} apps from {self.data_file}")
        return migrate_legacy_directories(data)

    def save(self, data: AppsData) -> None:
        """
        write the whole store back to disk.

        the content goes to a temporary file next to apps.json first and
        is then moved over it, so an interrupted write leaves the old
        file in place.
        """
        payload = data.model_dump(mode="json", by_alias=True, exclude_none=True)
        temp_file = None
        try:
            # ensure parent directory exists
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=str(self.data_file.parent),
                prefix=f".{self.data_file.name}.",
                delete=False,
            ) as f:
                temp_file = f.name
                json.dump(payload, f, indent=2)
                f.write("\n")
            os.replace(temp_file, self.data_file)
            temp_file = None
        except OSError as e:
            raise StorageError(self.data_file, str(e)) from e
        finally:
            if temp_file and os.path.exists(temp_file):
                os.remove(temp_file)

        logger.debug(f"saved {len(data.apps)} apps to {self.data_file}")
