"""diagout: leveled diagnostic output with sanitized fatal exits."""

from ._version import __version__
from .models import ReporterConfig, Severity, SystemErrorContext
from .reporter import Reporter

__all__ = ["Reporter", "ReporterConfig", "Severity", "SystemErrorContext", "__version__"]
