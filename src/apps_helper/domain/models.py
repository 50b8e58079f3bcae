from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfileType(str, Enum):
    DEV = "dev"
    INSTALLED = "installed"
    BINARY = "binary"
    CONFIG = "config"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class AppProfile(BaseModel):
    """a typed location for an app, optionally tied to a machine."""
    profile_type: ProfileType
    location: Path
    machine_name: Optional[str] = None
    notes: Optional[str] = None
    active: bool = False


class App(BaseModel):
    """a tracked application and its profiles."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    profiles: List[AppProfile] = Field(default_factory=list)
    # superseded by profiles, only read for migration
    legacy_directory: Optional[Path] = Field(default=None, alias="directory")
    tags: List[str] = Field(default_factory=list)
    source_repo: Optional[str] = Field(default=None, alias="github_repo")
    created_at: str  # RFC3339
    updated_at: str  # RFC3339

    @property
    def active_profile(self) -> Optional[AppProfile]:
        return next((p for p in self.profiles if p.active), None)

    def find_profile(self, profile_type: ProfileType) -> Optional[AppProfile]:
        return next((p for p in self.profiles if p.profile_type == profile_type), None)


class AppsData(BaseModel):
    """everything stored in apps.json, keyed by app name."""
    apps: Dict[str, App] = Field(default_factory=dict)

    @classmethod
    def empty(cls) -> "AppsData":
        return cls(apps={})
