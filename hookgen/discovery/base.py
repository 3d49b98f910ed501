"""Base classes for component discovery sources."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..models import ComponentRecord


class ComponentSource(ABC):
    """Contract for collaborators that enumerate compiled components."""

    @abstractmethod
    def list_components(self) -> Sequence[ComponentRecord]:
        """Return one record per known component, without duplicate identifiers."""
