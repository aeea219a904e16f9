# mtrview/destination.py
from abc import ABC, abstractmethod
from typing import Optional

class DestinationSource(ABC):
    @abstractmethod
    def get_destination_identity(self) -> Optional[str]:
        """Return the resolved destination address, or None if not known yet."""
        raise NotImplementedError

class StaticDestination(DestinationSource):
    """
    Holds a destination identity that can be filled in or replaced later,
    e.g. once DNS resolution of the target completes.
    """
    def __init__(self, value: Optional[str] = None):
        self.value = value

    def set(self, value: Optional[str]) -> None:
        self.value = value

    def get_destination_identity(self) -> Optional[str]:
        return self.value
