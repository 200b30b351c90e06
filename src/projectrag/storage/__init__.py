"""Persistence for project indexes."""

from projectrag.storage.schema import INDEX_FILENAME, INDEX_VERSION
from projectrag.storage.store import ProjectIndexStore, sanitize_component

__all__ = ["INDEX_FILENAME", "INDEX_VERSION", "ProjectIndexStore", "sanitize_component"]
