"""
Service factory: wires the snapshot repository and the services that read
from it into the global container.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from src.config.settings import Settings, get_settings
from src.models.entities import Snapshot, create_snapshot_from_dict
from src.repositories.memory_repository import InMemorySnapshotRepository
from src.services.container import ServiceContainer, get_container
from src.services.dashboard_service import DashboardService
from src.services.store_import_service import StoreImportService

logger = logging.getLogger(__name__)


def load_snapshot_file(path: str) -> Snapshot:
    """Read a snapshot JSON document (as written by Snapshot.to_dict())."""
    with open(Path(path).expanduser(), "r", encoding="utf-8") as f:
        data = json.load(f)
    snapshot = create_snapshot_from_dict(data)
    logger.info(f"Loaded snapshot from {path}: {len(snapshot.stores)} stores, "
                f"{len(snapshot.products)} products, {len(snapshot.sales)} sales")
    return snapshot


def create_repository(settings: Settings, snapshot: Optional[Snapshot] = None) -> InMemorySnapshotRepository:
    if snapshot is None and settings.monitor.snapshot_path:
        snapshot = load_snapshot_file(settings.monitor.snapshot_path)
    return InMemorySnapshotRepository(snapshot)


def initialize_services(settings: Optional[Settings] = None,
                        snapshot: Optional[Snapshot] = None,
                        container: Optional[ServiceContainer] = None) -> ServiceContainer:
    """
    Register snapshot_repository, dashboard_service and store_import_service.

    Args:
        settings: Application settings (default: get_settings())
        snapshot: Initial state; falls back to SNAPSHOT_PATH, then to an empty snapshot
        container: Container to populate (default: the global one)
    """
    settings = settings or get_settings()
    container = container or get_container()
    container.set_config({
        "ENVIRONMENT": settings.environment,
        "DEADLINE_WARNING_DAYS": settings.monitor.deadline_warning_days,
        "STORE_CAPACITY": settings.monitor.store_capacity,
    })

    container.register_singleton("snapshot_repository", lambda: create_repository(settings, snapshot))
    container.register_singleton(
        "dashboard_service",
        lambda: DashboardService(
            container.get("snapshot_repository"),
            deadline_warning_days=settings.monitor.deadline_warning_days,
            store_capacity=settings.monitor.store_capacity,
        ),
    )
    container.register_singleton(
        "store_import_service",
        lambda: StoreImportService(container.get("snapshot_repository")),
    )

    logger.info(f"Services registered: {sorted(container.list_services())}")
    return container
