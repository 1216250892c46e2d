"""
Tests for the Module Manager.

This test suite covers:
1. Module discovery
2. Enable/disable
3. Fail-soft loading
4. Module lookup and autoloading
5. Merged permission listings
"""

import pytest
from structlog.testing import capture_logs

from modkit.module.manager import ModuleManager, ModuleState, ProgrammingError
from modkit.module.module import ModuleError

from .conftest import make_module

CONFIGURATION = """\
    module.provide_permission("{name}/view", "View {name}")
    module.provide_restriction("{name}/filter", "Filter {name}")
"""


class TestDiscovery:
    """Test module discovery."""

    def test_list_installed_modules(self, make_app, modules_dir):
        make_module(modules_dir, "monitoring")
        make_module(modules_dir, "graphs")
        make_module(modules_dir, "not-valid")
        (modules_dir / "README").write_text("not a module")

        manager = make_app().get_module_manager()

        assert manager.list_installed_modules() == ["graphs", "monitoring"]
        assert manager.has_installed("graphs")
        assert not manager.has_installed("not-valid")

    def test_first_path_wins(self, make_app, tmp_path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        make_module(first, "monitoring")
        make_module(second, "monitoring")
        make_module(second, "graphs")

        manager = ModuleManager(make_app(), [first, tmp_path / "missing", second])

        assert manager.list_installed_modules() == ["graphs", "monitoring"]
        assert manager.get_module_dir("monitoring") == first / "monitoring"

    def test_rescan(self, make_app, modules_dir):
        manager = make_app().get_module_manager()
        assert manager.list_installed_modules() == []

        make_module(modules_dir, "graphs")

        assert manager.list_installed_modules() == []
        assert manager.rescan() == ["graphs"]

    def test_module_dir_not_installed(self, make_app):
        with pytest.raises(ModuleError, match="not installed"):
            make_app().get_module_manager().get_module_dir("missing")


class TestEnable:
    """Test enabling and disabling modules."""

    def test_enable_and_disable(self, make_app, modules_dir):
        make_module(modules_dir, "graphs")
        manager = make_app().get_module_manager()

        manager.enable_module("graphs")
        manager.enable_module("graphs")
        assert manager.list_enabled_modules() == ["graphs"]
        assert manager.has_enabled("graphs")

        manager.disable_module("graphs")
        assert not manager.has_enabled("graphs")

    def test_enable_not_installed(self, make_app):
        with pytest.raises(ModuleError, match="not installed"):
            make_app().get_module_manager().enable_module("missing")


class TestLoading:
    """Test module loading."""

    def test_load_enabled_modules_is_fail_soft(self, make_app, modules_dir):
        """A failing or missing module should not stop the others."""
        make_module(modules_dir, "broken", {"run.py": "raise RuntimeError('boom')\n"})
        make_module(modules_dir, "graphs")
        app = make_app(enabled=["broken", "missing", "graphs"])
        manager = app.get_module_manager()

        loaded = manager.load_enabled_modules()

        assert loaded == ["graphs"]
        assert manager.has_loaded("graphs")
        assert not manager.has_loaded("broken")
        assert manager.failed_modules == ["broken"]
        assert manager.get_state("broken") is ModuleState.FAILED
        assert manager.get_state("graphs") is ModuleState.LOADED

    def test_load_module_once(self, make_app, modules_dir):
        make_module(modules_dir, "graphs")
        manager = make_app().get_module_manager()

        assert manager.load_module("graphs") is manager.load_module("graphs")

    def test_get_module_not_loaded(self, make_app, modules_dir):
        make_module(modules_dir, "graphs")
        manager = make_app().get_module_manager()

        assert manager.get_state("graphs") is ModuleState.INSTALLED
        with pytest.raises(ProgrammingError, match="not loaded"):
            manager.get_module("graphs")

    def test_get_module_autoload(self, make_app, modules_dir):
        """autoload should only load enabled modules."""
        make_module(modules_dir, "graphs")
        make_module(modules_dir, "monitoring")
        manager = make_app(enabled=["graphs"]).get_module_manager()

        module = manager.get_module("graphs", autoload=True)
        assert module.name == "graphs"
        assert manager.has_loaded("graphs")

        with pytest.raises(ProgrammingError):
            manager.get_module("monitoring", autoload=True)

    def test_get_descriptor_does_not_register(self, make_app, modules_dir):
        make_module(modules_dir, "graphs", {"module.info": "Version: 3.0.0\n"})
        app = make_app()
        manager = app.get_module_manager()

        module = manager.get_descriptor("graphs")

        assert module.version == "3.0.0"
        assert not manager.has_loaded("graphs")
        assert not app.get_front_controller().get_router().has_route("graphs_img")


class TestPermissions:
    """Test merged capability listings."""

    def test_get_permissions_and_restrictions(self, make_app, modules_dir):
        for name in ("graphs", "monitoring"):
            make_module(
                modules_dir, name, {"configuration.py": CONFIGURATION.format(name=name)}
            )
        make_module(modules_dir, "idle", {"configuration.py": CONFIGURATION.format(name="idle")})
        manager = make_app(enabled=["graphs", "monitoring"]).get_module_manager()
        manager.load_enabled_modules()

        assert sorted(manager.get_permissions()) == ["graphs/view", "monitoring/view"]
        assert sorted(manager.get_restrictions()) == ["graphs/filter", "monitoring/filter"]
        assert manager.get_permissions()["graphs/view"].description == "View graphs"

    def test_failing_configuration_is_skipped(self, make_app, modules_dir):
        """A broken configuration script should not hide other modules."""
        make_module(modules_dir, "broken", {"configuration.py": "raise RuntimeError('bad config')\n"})
        make_module(modules_dir, "graphs", {"configuration.py": CONFIGURATION.format(name="graphs")})
        manager = make_app(enabled=["broken", "graphs"]).get_module_manager()
        assert manager.load_enabled_modules() == ["broken", "graphs"]

        with capture_logs() as logs:
            permissions = manager.get_permissions()

        assert list(permissions) == ["graphs/view"]
        assert list(manager.get_restrictions()) == ["graphs/filter"]
        failure = next(e for e in logs if e["event"] == "config_script_failed")
        assert failure["module"] == "broken"
        assert failure["error"] == "bad config"
        assert failure["script"].endswith("configuration.py")
