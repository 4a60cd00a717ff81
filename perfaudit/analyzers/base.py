"""Base classes for analyzer plugins."""

from abc import ABC, abstractmethod
from typing import Any

from ..models import AnalysisContext

PERFORMANCE = "performance"
BUNDLE = "bundle"


class Analyzer(ABC):
    """Contract for analyzers that add one keyed section to the analysis context."""

    #: Section key the analyzer writes into the context.
    name: str = ""
    #: Pipeline phase; the CLI can switch whole phases off.
    phase: str = PERFORMANCE

    def supports(self, context: AnalysisContext) -> bool:
        """Return True when this analyzer should run for the project."""
        return True

    @abstractmethod
    def analyze(self, context: AnalysisContext) -> Any:
        """Produce the section value recorded under `name`."""
