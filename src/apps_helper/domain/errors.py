from pathlib import Path


class AppsHelperError(Exception):
    """base class for exceptions in apps-helper."""
    pass


class ConfigurationError(AppsHelperError):
    """raised when the data file location cannot be determined."""
    pass


class NameRequiredError(AppsHelperError):
    """raised when an app is added without a name and without --current-dir."""
    def __init__(self):
        super().__init__("App name is required when not using --current-dir")


class DuplicateNameError(AppsHelperError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"App '{name}' already exists. "
            "Use a different name or remove the existing app first."
        )


class SelectorRequiredError(AppsHelperError):
    """raised when a command needs an app selector and none was given."""
    def __init__(self, message: str = "Either --get or --current-dir must be specified"):
        super().__init__(message)


class LocationRequiredError(AppsHelperError):
    def __init__(self):
        super().__init__("Either --location or --current-dir must be specified")


class DuplicateProfileTypeError(AppsHelperError):
    def __init__(self, profile_type):
        self.profile_type = profile_type
        super().__init__(f"Profile type {profile_type.label} already exists for this app")


class ProfileTypeNotFoundError(AppsHelperError):
    def __init__(self, profile_type):
        self.profile_type = profile_type
        super().__init__(f"Profile type {profile_type.label} not found for this app")


class DeserializationError(AppsHelperError):
    """raised when the data file exists but cannot be parsed."""
    def __init__(self, path: Path, detail: str):
        self.path = path
        super().__init__(f"Could not read apps data from {path}: {detail}")


class StorageError(AppsHelperError):
    """raised when the data file or its directory cannot be accessed."""
    def __init__(self, path: Path, detail: str):
        self.path = path
        super().__init__(f"Could not access {path}: {detail}")
