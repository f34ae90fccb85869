"""Document source port - interface for reading document descriptions."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain import Invoice, WorkDocument


class DocumentSourcePort(ABC):
    """Interface for building documents from an external description."""

    @abstractmethod
    def load(self, path: Path) -> "Invoice | WorkDocument":
        """Read a description and build the document it describes.

        Raises DocumentSourceError for unreadable or malformed descriptions,
        ValidationError when the described document breaks a domain rule.
        """
        pass
