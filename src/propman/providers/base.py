from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..entry import PropertyEntry


class BaseProvider(ABC):
    """Abstract source of property entries."""

    suffixes: tuple[str, ...] = ()
    # keyword options accepted by the constructor, see ``provider_for_path``
    options: tuple[str, ...] = ()

    @abstractmethod
    def load(self) -> list[PropertyEntry]:
        """Return a fresh list of entries in store order."""


class EditableProvider(BaseProvider):
    """Provider that can also write entries back to its store."""

    @abstractmethod
    def save(self, entries: Sequence[PropertyEntry]) -> None:
        pass
