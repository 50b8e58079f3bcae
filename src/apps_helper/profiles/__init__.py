"""profile management for tracked apps."""
from .manager import (
    ProfileListing,
    ProfileSummary,
    activate_profile,
    add_profile,
    iter_profiles,
    remove_profile,
)

__all__ = [
    "ProfileListing",
    "ProfileSummary",
    "activate_profile",
    "add_profile",
    "iter_profiles",
    "remove_profile",
]
