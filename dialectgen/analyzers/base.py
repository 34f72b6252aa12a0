"""Base classes for TableGen content recognizers."""

from abc import ABC, abstractmethod

from ..models import Capability


class Recognizer(ABC):
    """Contract for recognizers that decide whether a text defines one capability."""

    capability: Capability

    @abstractmethod
    def matches(self, text: str) -> bool:
        """Return True when the text defines an entity of this recognizer's capability."""
