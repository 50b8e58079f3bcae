"""the app registry: storage, lookup and commands."""
from .manager import (
    AppListing,
    AppManager,
    AppSummary,
    RemovalResult,
    RemovalStatus,
    add_app,
    is_confirmation,
    iter_apps,
    parse_tags,
    remove_app,
)
from .matcher import resolve, resolve_by_directory
from .store import AppStore, migrate_legacy_directories

__all__ = [
    "AppListing",
    "AppManager",
    "AppSummary",
    "AppStore",
    "RemovalResult",
    "RemovalStatus",
    "add_app",
    "is_confirmation",
    "iter_apps",
    "migrate_legacy_directories",
    "parse_tags",
    "remove_app",
    "resolve",
    "resolve_by_directory",
]
