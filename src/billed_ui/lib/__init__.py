"""
Local library modules shared across the Billed UI.

Modules:
    logs: Logging utilities
    objects: JSON serialization
    paths: Path utilities
    caches: Disk-backed key-value storage
"""

from billed_ui.lib import caches, logs, objects, paths

__all__ = ["caches", "logs", "objects", "paths"]
