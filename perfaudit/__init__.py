"""Static performance auditing for JavaScript front-end projects."""

from .orchestrator import AuditOptions, AuditRunner

__version__ = "0.1.0"

__all__ = ["AuditOptions", "AuditRunner", "__version__"]
