"""name and directory lookups over the app store."""
import logging
from pathlib import Path
from typing import Optional

from ..domain.models import App, AppsData
from ..utils.names import normalize

logger = logging.getLogger(__name__)


def resolve(data: AppsData, search_term: str) -> Optional[App]:
    """
    find the app a user most likely meant by search_term.

    tries, in order:
      1. case-insensitive exact name match
      2. equality after normalize() (ignores spaces, hyphens, underscores)
      3. substring containment of the normalized forms, in either direction

    the first hit wins. when several apps match within the same tier,
    which one is returned depends on store iteration order.
    """
    search_lower = search_term.lower()
    for name, app in data.apps.items():
        if name.lower() == search_lower:
            logger.debug(f"'{search_term}' matched '{name}' exactly")
            return app

    normalized_search = normalize(search_term)
    for name, app in data.apps.items():
        if normalize(name) == normalized_search:
            logger.debug(f"'{search_term}' matched '{name}' after normalizing")
            return app

    for name, app in data.apps.items():
        normalized_name = normalize(name)
        if normalized_search in normalized_name or normalized_name in normalized_search:
            logger.debug(f"'{search_term}' matched '{name}' by substring")
            return app

    return None


def resolve_by_directory(data: AppsData, directory: Path) -> Optional[App]:
    """find the first app with a profile (or legacy directory) at exactly directory."""
    directory = Path(directory)
    for app in data.apps.values():
        if any(profile.location == directory for profile in app.profiles):
            return app
        if app.legacy_directory is not None and app.legacy_directory == directory:
            return app
    return None
