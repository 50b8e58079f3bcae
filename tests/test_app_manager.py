"""test suite for app registry operations."""
import json
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from apps_helper.apps import (
    AppManager,
    AppStore,
    RemovalStatus,
    add_app,
    is_confirmation,
    iter_apps,
    parse_tags,
)
from apps_helper.domain.errors import (
    DuplicateNameError,
    DuplicateProfileTypeError,
    LocationRequiredError,
    NameRequiredError,
    ProfileTypeNotFoundError,
    SelectorRequiredError,
)
from apps_helper.domain.models import AppsData, ProfileType

NOW = "2026-05-06T07:08:09Z"
LATER = "2026-06-01T00:00:00Z"


def clock():
    return NOW


class TestParseTags:
    def test_none(self):
        assert parse_tags(None) == []

    def test_splits_and_trims(self):
        assert parse_tags(" cli, rust ,tools") == ["cli", "rust", "tools"]

    def test_single(self):
        assert parse_tags("cli") == ["cli"]


class TestIsConfirmation:
    @pytest.mark.parametrize("answer", ["y", "Y", "yes", "YES", " Yes \n"])
    def test_accepts(self, answer):
        assert is_confirmation(answer)

    @pytest.mark.parametrize("answer", ["", "n", "no", "yep", "sure", "y es"])
    def test_rejects(self, answer):
        assert not is_confirmation(answer)


class TestAddApp:
    @pytest.fixture
    def data(self):
        return AppsData.empty()

    def test_with_name_only(self, data):
        app = add_app(data, name="blender", clock=clock)
        assert data.apps["blender"] is app
        assert app.profiles == []
        assert app.tags == []
        assert app.legacy_directory is None
        assert app.created_at == app.updated_at == NOW

    def test_with_directory_creates_active_dev_profile(self, data):
        app = add_app(data, name="blender", directory=Path("/src/blender"), tags="3d, art",
                      machine_name="desk", clock=clock)
        assert len(app.profiles) == 1
        profile = app.profiles[0]
        assert profile.profile_type == ProfileType.DEV
        assert profile.location == Path("/src/blender")
        assert profile.machine_name == "desk"
        assert profile.active
        assert app.tags == ["3d", "art"]

    def test_name_from_current_dir(self, data):
        app = add_app(data, name="My Project", use_current_dir=True, cwd=Path("/home/u/proj"), clock=clock)
        assert app.name == "proj"
        assert list(data.apps) == ["proj"]
        assert app.profiles[0].location == Path("/home/u/proj")
        assert app.profiles[0].active

    def test_current_dir_at_root_is_unknown(self, data):
        app = add_app(data, use_current_dir=True, cwd=Path("/"), clock=clock)
        assert app.name == "unknown"

    def test_name_required(self, data):
        with pytest.raises(NameRequiredError):
            add_app(data, directory=Path("/src/x"), clock=clock)
        assert data.apps == {}

    def test_duplicate_name(self, data):
        add_app(data, name="blender", clock=clock)
        with pytest.raises(DuplicateNameError, match="already exists"):
            add_app(data, name="blender", directory=Path("/elsewhere"), clock=clock)
        assert data.apps["blender"].profiles == []

    def test_duplicate_check_is_case_sensitive(self, data):
        add_app(data, name="blender", clock=clock)
        add_app(data, name="Blender", clock=clock)
        assert sorted(data.apps) == ["Blender", "blender"]


class TestIterApps:
    def test_summaries(self):
        data = AppsData.empty()
        add_app(data, name="blender", directory=Path("/src/blender"), tags="3d", clock=clock)
        add_app(data, name="notes", clock=clock)

        summaries = {s.name: s for s in iter_apps(data)}

        assert summaries["blender"].active_profile.location == Path("/src/blender")
        assert summaries["blender"].tags == ["3d"]
        assert summaries["notes"].active_profile is None
        assert summaries["notes"].created_at == NOW

    def test_len_and_restart(self):
        data = AppsData.empty()
        add_app(data, name="a", clock=clock)
        add_app(data, name="b", clock=clock)
        listing = iter_apps(data)
        assert len(listing) == 2
        assert list(listing) == list(listing)


class TestAppManager:
    @pytest.fixture
    def data_file(self, tmp_path):
        return tmp_path / ".apps-helper" / "apps.json"

    @pytest.fixture
    def cwd(self):
        return {"path": Path("/home/u/proj")}

    @pytest.fixture
    def manager(self, data_file, cwd):
        return AppManager(
            AppStore(data_file),
            cwd=lambda: cwd["path"],
            machine_name=lambda: "desk",
            clock=clock,
        )

    def test_add_persists(self, manager, data_file):
        manager.add_app(name="blender", directory=Path("/src/blender"))
        raw = json.loads(data_file.read_text())
        assert raw["apps"]["blender"]["profiles"][0]["machine_name"] == "desk"

    def test_add_from_current_dir(self, manager):
        app = manager.add_app(use_current_dir=True)
        assert app.name == "proj"
        assert manager.get_app("PROJ").profiles[0].location == Path("/home/u/proj")

    def test_get_uses_fuzzy_matching(self, manager):
        manager.add_app(name="My-Project")
        assert manager.get_app("MyProj").name == "My-Project"
        assert manager.get_app("photoshop") is None

    def test_list(self, manager):
        assert len(manager.list_apps()) == 0
        manager.add_app(name="blender")
        assert [s.name for s in manager.list_apps()] == ["blender"]

    def test_remove_requires_selector(self, manager):
        with pytest.raises(SelectorRequiredError):
            manager.remove_app()

    def test_remove_on_empty_store(self, manager):
        result = manager.remove_app("blender", confirm=lambda app: "y")
        assert result.status is RemovalStatus.EMPTY

    def test_remove_not_found(self, manager):
        manager.add_app(name="blender")
        result = manager.remove_app("photoshop", confirm=lambda app: "y")
        assert result.status is RemovalStatus.NOT_FOUND

    def test_remove_confirmed(self, manager):
        manager.add_app(name="blender")
        asked = []
        result = manager.remove_app("BLEND", confirm=lambda app: asked.append(app.name) or "yes")
        assert asked == ["blender"]
        assert result.status is RemovalStatus.REMOVED
        assert len(manager.list_apps()) == 0

    @pytest.mark.parametrize("answer", ["", "n", "nope"])
    def test_remove_cancelled(self, manager, answer):
        manager.add_app(name="blender")
        result = manager.remove_app("blender", confirm=lambda app: answer)
        assert result.status is RemovalStatus.CANCELLED
        assert manager.get_app("blender") is not None

    def test_remove_by_current_dir(self, manager, cwd):
        manager.add_app(name="blender", directory=Path("/src/blender"))
        manager.add_app(name="proj", directory=Path("/home/u/proj"))
        result = manager.remove_app(use_current_dir=True, confirm=lambda app: "y")
        assert result.app.name == "proj"
        assert [s.name for s in manager.list_apps()] == ["blender"]

    def test_remove_by_current_dir_wins_over_name(self, manager):
        manager.add_app(name="blender", directory=Path("/src/blender"))
        manager.add_app(name="proj", directory=Path("/home/u/proj"))
        result = manager.remove_app("blender", use_current_dir=True, confirm=lambda app: "y")
        assert result.app.name == "proj"

    def test_remove_by_current_dir_not_found(self, manager, cwd):
        manager.add_app(name="blender", directory=Path("/src/blender"))
        cwd["path"] = Path("/tmp")
        result = manager.remove_app(use_current_dir=True, confirm=lambda app: "y")
        assert result.status is RemovalStatus.NOT_FOUND

    def test_add_profile(self, manager):
        manager.add_app(name="blender", directory=Path("/src/blender"))
        manager.clock = lambda: LATER
        app = manager.add_profile("blender", ProfileType.BINARY, location=Path("/usr/bin/blender"), notes="apt")

        stored = manager.get_app("blender")
        assert stored == app
        assert stored.profiles[1].machine_name == "desk"
        assert stored.profiles[1].notes == "apt"
        assert stored.updated_at == LATER
        assert stored.created_at == NOW

    def test_add_profile_explicit_machine(self, manager):
        manager.add_app(name="blender")
        manager.add_profile("blender", ProfileType.CONFIG, location=Path("/etc/b"), machine="laptop")
        assert manager.get_app("blender").profiles[0].machine_name == "laptop"

    def test_add_profile_from_current_dir(self, manager):
        manager.add_app(name="blender")
        manager.add_profile("blender", ProfileType.DEV, use_current_dir=True)
        assert manager.get_app("blender").profiles[0].location == Path("/home/u/proj")

    def test_add_profile_requires_location(self, manager):
        manager.add_app(name="blender")
        with pytest.raises(LocationRequiredError):
            manager.add_profile("blender", ProfileType.DEV)

    def test_add_profile_unknown_app(self, manager):
        manager.add_app(name="blender")
        assert manager.add_profile("photoshop", ProfileType.DEV, location=Path("/x")) is None

    def test_add_profile_unknown_app_without_location(self, manager):
        manager.add_app(name="blender")
        assert manager.add_profile("photoshop", ProfileType.DEV) is None

    def test_duplicate_profile_leaves_file_untouched(self, manager, data_file):
        manager.add_app(name="blender", directory=Path("/src/blender"))
        before = data_file.read_bytes()

        with pytest.raises(DuplicateProfileTypeError):
            manager.add_profile("blender", ProfileType.DEV, location=Path("/other"))

        assert data_file.read_bytes() == before

    def test_activate_and_remove_profile(self, manager):
        manager.add_app(name="blender", directory=Path("/src/blender"))
        manager.add_profile("blender", ProfileType.INSTALLED, location=Path("/opt/blender"))

        manager.activate_profile("blender", ProfileType.INSTALLED)
        assert manager.get_app("blender").active_profile.profile_type == ProfileType.INSTALLED

        manager.remove_profile("blender", ProfileType.INSTALLED)
        assert manager.get_app("blender").active_profile.profile_type == ProfileType.DEV

    def test_activate_missing_profile_leaves_file_untouched(self, manager, data_file):
        manager.add_app(name="blender", directory=Path("/src/blender"))
        before = data_file.read_bytes()

        with pytest.raises(ProfileTypeNotFoundError):
            manager.activate_profile("blender", ProfileType.CONFIG)

        assert data_file.read_bytes() == before

    def test_list_profiles(self, manager):
        manager.add_app(name="blender", directory=Path("/src/blender"))
        app, listing = manager.list_profiles("blender")
        assert app.name == "blender"
        assert [s.profile_type for s in listing] == [ProfileType.DEV]
        assert manager.list_profiles("photoshop") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
