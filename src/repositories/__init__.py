from src.repositories.interfaces import SnapshotRepository
from src.repositories.memory_repository import InMemorySnapshotRepository

__all__ = ['SnapshotRepository', 'InMemorySnapshotRepository']
