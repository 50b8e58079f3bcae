import logging
from pathlib import Path
from typing import Callable, Iterator, NamedTuple, Optional

from ..domain.errors import DuplicateProfileTypeError, ProfileTypeNotFoundError
from ..domain.models import App, AppProfile, ProfileType
from ..utils.timestamps import now_timestamp

logger = logging.getLogger(__name__)


class ProfileSummary(NamedTuple):
    """one row of a profile listing."""
    profile_type: Optional[ProfileType]  # None for the legacy directory row
    location: Path
    active: bool
    machine_name: Optional[str] = None
    notes: Optional[str] = None
    legacy: bool = False


class ProfileListing:
    """
    lazy view over an app's profiles.

    each iteration walks the profiles afresh, so the listing can be
    iterated more than once. when the app has no profiles, the legacy
    directory (if any) is reported instead.
    """

    def __init__(self, app: App):
        self.app = app

    def __iter__(self) -> Iterator[ProfileSummary]:
        if not self.app.profiles:
            if self.app.legacy_directory is not None:
                yield ProfileSummary(
                    profile_type=None,
                    location=self.app.legacy_directory,
                    active=False,
                    legacy=True,
                )
            return

        for profile in self.app.profiles:
            yield ProfileSummary(
                profile_type=profile.profile_type,
                location=profile.location,
                active=profile.active,
                machine_name=profile.machine_name,
                notes=profile.notes,
            )


def add_profile(
    app: App,
    profile_type: ProfileType,
    location: Path,
    machine_name: Optional[str] = None,
    notes: Optional[str] = None,
    clock: Callable[[], str] = now_timestamp,
) -> AppProfile:
    """
    append a profile to app.

    the first profile an app gets is made active; later ones are added
    inactive and leave the existing active flag alone.

    raises:
        DuplicateProfileTypeError: if app already has a profile of this type
    """
    if app.find_profile(profile_type) is not None:
        raise DuplicateProfileTypeError(profile_type)

    profile = AppProfile(
        profile_type=profile_type,
        location=Path(location),
        machine_name=machine_name,
        notes=notes,
        active=not app.profiles,
    )
    app.profiles.append(profile)
    app.updated_at = clock()
    logger.debug(f"added {profile_type.value} profile to '{app.name}' (active={profile.active})")
    return profile


def iter_profiles(app: App) -> ProfileListing:
    return ProfileListing(app)


def activate_profile(
    app: App,
    profile_type: ProfileType,
    clock: Callable[[], str] = now_timestamp,
) -> AppProfile:
    """
    make the profile of profile_type the only active one.

    raises:
        ProfileTypeNotFoundError: if app has no such profile; nothing changes
    """
    target = app.find_profile(profile_type)
    if target is None:
        raise ProfileTypeNotFoundError(profile_type)

    for profile in app.profiles:
        profile.active = profile is target
    app.updated_at = clock()
    logger.debug(f"activated {profile_type.value} profile of '{app.name}'")
    return target


def remove_profile(
    app: App,
    profile_type: ProfileType,
    clock: Callable[[], str] = now_timestamp,
) -> AppProfile:
    """
    delete the profile of profile_type.

    if that leaves profiles behind but none of them active, the first
    remaining one becomes active.

    raises:
        ProfileTypeNotFoundError: if app has no such profile; nothing changes
    """
    target = app.find_profile(profile_type)
    if target is None:
        raise ProfileTypeNotFoundError(profile_type)

    app.profiles = [p for p in app.profiles if p is not target]

    if app.profiles and app.active_profile is None:
        app.profiles[0].active = True
        logger.debug(
            f"'{app.name}' lost its active profile, "
            f"switched to {app.profiles[0].profile_type.value}"
        )

    app.updated_at = clock()
    return target
