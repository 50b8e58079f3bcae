import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple

from ..domain.errors import (
    DuplicateNameError,
    LocationRequiredError,
    NameRequiredError,
    SelectorRequiredError,
)
from ..domain.models import App, AppProfile, AppsData, ProfileType
from ..profiles import manager as profiles
from ..profiles.manager import ProfileListing
from ..utils.machine import get_machine_name
from ..utils.timestamps import now_timestamp
from .matcher import resolve, resolve_by_directory
from .store import AppStore

logger = logging.getLogger(__name__)

UNKNOWN_APP_NAME = "unknown"
CONFIRM_ANSWERS = ("y", "yes")


def parse_tags(raw: Optional[str]) -> List[str]:
    """split a comma-separated tag string, trimming each piece."""
    if raw is None:
        return []
    return [tag.strip() for tag in raw.split(",")]


def is_confirmation(answer: str) -> bool:
    return answer.strip().lower() in CONFIRM_ANSWERS


def name_from_directory(directory: Path) -> str:
    return Path(directory).name or UNKNOWN_APP_NAME


class AppSummary(NamedTuple):
    """one row of an app listing."""
    name: str
    active_profile: Optional[AppProfile]
    legacy_directory: Optional[Path]
    tags: List[str]
    source_repo: Optional[str]
    created_at: str


class AppListing:
    """lazy, restartable view over every app in a store."""

    def __init__(self, data: AppsData):
        self.data = data

    def __iter__(self) -> Iterator[AppSummary]:
        for app in self.data.apps.values():
            yield AppSummary(
                name=app.name,
                active_profile=app.active_profile,
                legacy_directory=app.legacy_directory,
                tags=list(app.tags),
                source_repo=app.source_repo,
                created_at=app.created_at,
            )

    def __len__(self) -> int:
        return len(self.data.apps)


def add_app(
    data: AppsData,
    name: Optional[str] = None,
    directory: Optional[Path] = None,
    tags: Optional[str] = None,
    use_current_dir: bool = False,
    cwd: Optional[Path] = None,
    machine_name: Optional[str] = None,
    clock: Callable[[], str] = now_timestamp,
) -> App:
    """
    add a new app to data.

    with use_current_dir, both the name and the directory come from cwd.
    a directory, when there is one, becomes the app's active dev profile.

    raises:
        NameRequiredError: no name and not use_current_dir
        DuplicateNameError: an app is already stored under exactly this name
    """
    if use_current_dir:
        if cwd is None:
            cwd = Path.cwd()
        if name is not None:
            logger.debug(f"ignoring name '{name}', deriving it from {cwd}")
        name = name_from_directory(cwd)
        directory = cwd
    elif name is None:
        raise NameRequiredError()

    # lookups are case-insensitive but this check is not
    if name in data.apps:
        raise DuplicateNameError(name)

    app_profiles = []
    if directory is not None:
        app_profiles.append(AppProfile(
            profile_type=ProfileType.DEV,
            location=Path(directory),
            machine_name=machine_name,
            active=True,
        ))

    now = clock()
    app = App(
        name=name,
        profiles=app_profiles,
        tags=parse_tags(tags),
        created_at=now,
        updated_at=now,
    )
    data.apps[name] = app
    logger.debug(f"added app '{name}' with {len(app_profiles)} profile(s)")
    return app


def iter_apps(data: AppsData) -> AppListing:
    return AppListing(data)


def remove_app(data: AppsData, app: App) -> None:
    del data.apps[app.name]


class RemovalStatus(Enum):
    EMPTY = "empty"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"
    REMOVED = "removed"


class RemovalResult(NamedTuple):
    status: RemovalStatus
    app: Optional[App] = None


class AppManager:
    """
    runs one load -> mutate -> save cycle per command against an AppStore.

    the working directory, machine name and clock are injectable so the
    whole flow can be exercised against a temporary data file.
    """

    def __init__(
        self,
        store: AppStore,
        cwd: Callable[[], Path] = Path.cwd,
        machine_name: Callable[[], Optional[str]] = get_machine_name,
        clock: Callable[[], str] = now_timestamp,
    ):
        self.store = store
        self.cwd = cwd
        self.machine_name = machine_name
        self.clock = clock

    def add_app(
        self,
        name: Optional[str] = None,
        directory: Optional[Path] = None,
        tags: Optional[str] = None,
        use_current_dir: bool = False,
    ) -> App:
        data = self.store.load()
        app = add_app(
            data,
            name=name,
            directory=directory,
            tags=tags,
            use_current_dir=use_current_dir,
            cwd=self.cwd() if use_current_dir else None,
            machine_name=self.machine_name(),
            clock=self.clock,
        )
        self.store.save(data)
        return app

    def list_apps(self) -> AppListing:
        return iter_apps(self.store.load())

    def get_app(self, search_term: str) -> Optional[App]:
        return resolve(self.store.load(), search_term)

    def _find_for_removal(
        self,
        data: AppsData,
        search_term: Optional[str],
        use_current_dir: bool,
    ) -> Optional[App]:
        if use_current_dir:
            return resolve_by_directory(data, self.cwd())
        return resolve(data, search_term)

    def remove_app(
        self,
        search_term: Optional[str] = None,
        use_current_dir: bool = False,
        confirm: Callable[[App], str] = lambda app: "",
    ) -> RemovalResult:
        """
        remove an app after the user confirms.

        args:
            search_term: fuzzy name of the app
            use_current_dir: select the app whose profile is at the cwd instead
            confirm: shown the resolved app, returns the user's answer

        raises:
            SelectorRequiredError: neither selector given
        """
        if not use_current_dir and search_term is None:
            raise SelectorRequiredError()

        data = self.store.load()
        if not data.apps:
            return RemovalResult(RemovalStatus.EMPTY)

        app = self._find_for_removal(data, search_term, use_current_dir)
        if app is None:
            return RemovalResult(RemovalStatus.NOT_FOUND)

        if not is_confirmation(confirm(app)):
            logger.debug(f"removal of '{app.name}' cancelled")
            return RemovalResult(RemovalStatus.CANCELLED, app)

        remove_app(data, app)
        self.store.save(data)
        return RemovalResult(RemovalStatus.REMOVED, app)

    def _update_app(self, search_term: str, mutate: Callable[[App], object]) -> Optional[App]:
        data = self.store.load()
        app = resolve(data, search_term)
        if app is None:
            return None
        mutate(app)
        self.store.save(data)
        return app

    def add_profile(
        self,
        search_term: str,
        profile_type: ProfileType,
        location: Optional[Path] = None,
        use_current_dir: bool = False,
        machine: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Optional[App]:
        """
        add a profile to the app matching search_term.

        returns None when no app matches.

        raises:
            LocationRequiredError: neither location nor use_current_dir
            DuplicateProfileTypeError: app already has this profile type
        """
        def mutate(app: App):
            # the app is resolved first so an unknown app is reported as not found
            if use_current_dir:
                profile_location = self.cwd()
            elif location is None:
                raise LocationRequiredError()
            else:
                profile_location = location

            profile_machine = machine if machine is not None else self.machine_name()
            profiles.add_profile(
                app, profile_type, profile_location, profile_machine, notes, clock=self.clock
            )

        return self._update_app(search_term, mutate)

    def list_profiles(self, search_term: str) -> Optional[Tuple[App, ProfileListing]]:
        app = self.get_app(search_term)
        if app is None:
            return None
        return app, profiles.iter_profiles(app)

    def activate_profile(self, search_term: str, profile_type: ProfileType) -> Optional[App]:
        return self._update_app(
            search_term,
            lambda app: profiles.activate_profile(app, profile_type, clock=self.clock),
        )

    def remove_profile(self, search_term: str, profile_type: ProfileType) -> Optional[App]:
        return self._update_app(
            search_term,
            lambda app: profiles.remove_profile(app, profile_type, clock=self.clock),
        )
