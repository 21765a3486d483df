import pytest

from src.config.settings import get_settings
from src.services.container import (
    ServiceContainer,
    ServiceCreationError,
    ServiceNotFoundError,
    get_container,
    reset_container,
)
from src.services.dashboard_service import DashboardService
from src.services.factory import initialize_services, load_snapshot_file
from src.services.store_import_service import StoreImportService


class TestServiceContainer:
    """Test the ServiceContainer class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.container = ServiceContainer()

    def test_register_and_get_singleton(self):
        """Test singleton service registration and retrieval."""

        def mock_factory():
            return object()

        self.container.register_singleton("test_service", mock_factory)
        result1 = self.container.get("test_service")
        result2 = self.container.get("test_service")

        assert result1 is result2

    def test_register_instance(self):
        instance = {"name": "repo"}
        self.container.register_instance("repo", instance)
        assert self.container.get("repo") is instance
        assert self.container.list_services() == {"repo": "instance"}

    def test_service_not_found(self):
        """Test ServiceNotFoundError for unregistered services."""
        with pytest.raises(ServiceNotFoundError):
            self.container.get("nonexistent_service")

    def test_factory_failure(self):
        def broken():
            raise RuntimeError("boom")

        self.container.register_singleton("broken", broken)
        with pytest.raises(ServiceCreationError, match="boom"):
            self.container.get("broken")

    def test_config_management(self):
        """Test configuration setting and retrieval."""
        self.container.set_config({"STORE_CAPACITY": 96})
        assert self.container.get_config("STORE_CAPACITY") == 96
        assert self.container.get_config("MISSING", "default") == "default"

    def test_clear_singletons(self):
        self.container.register_singleton("svc", object)
        first = self.container.get("svc")
        self.container.clear_singletons()
        assert self.container.get("svc") is not first
        assert self.container.has_service("svc")


class TestGlobalContainer:

    def setup_method(self):
        reset_container()

    def teardown_method(self):
        reset_container()

    def test_get_container_is_shared(self):
        assert get_container() is get_container()

    def test_reset_container(self):
        first = get_container()
        reset_container()
        assert get_container() is not first


class TestInitializeServices:

    def test_registers_services_sharing_one_repository(self, snapshot):
        container = initialize_services(get_settings("test"), snapshot, ServiceContainer())

        repository = container.get("snapshot_repository")
        dashboard = container.get("dashboard_service")
        importer = container.get("store_import_service")

        assert isinstance(dashboard, DashboardService)
        assert isinstance(importer, StoreImportService)
        assert dashboard.repository is repository
        assert importer.repository is repository
        assert repository.version == snapshot.version
        assert container.get_config("ENVIRONMENT") == "test"

    def test_settings_flow_into_dashboard(self, monkeypatch):
        monkeypatch.setenv("STORE_CAPACITY", "120")
        monkeypatch.setenv("DEADLINE_WARNING_DAYS", "3")
        container = initialize_services(get_settings("test"), None, ServiceContainer())
        dashboard = container.get("dashboard_service")
        assert dashboard.store_capacity == 120
        assert dashboard.deadline_warning_days == 3

    def test_snapshot_path_is_loaded(self, monkeypatch, tmp_path, snapshot):
        import json

        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(snapshot.to_dict()), encoding="utf-8")
        monkeypatch.setenv("SNAPSHOT_PATH", str(path))

        container = initialize_services(get_settings("test"), None, ServiceContainer())
        assert len(container.get("snapshot_repository").snapshot().stores) == 3

    def test_missing_snapshot_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SNAPSHOT_PATH", str(tmp_path / "missing.json"))
        container = initialize_services(get_settings("test"), None, ServiceContainer())
        with pytest.raises(ServiceCreationError):
            container.get("snapshot_repository")

    def test_load_snapshot_file(self, tmp_path, snapshot):
        import json

        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(snapshot.to_dict()), encoding="utf-8")
        loaded = load_snapshot_file(str(path))
        assert loaded.sales == snapshot.sales
