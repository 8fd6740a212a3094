from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidModeError, PropertyFormatError
from .resolver import apply_path
from .values import Scalar, ValueKind, check_kind


def check_path(path: str) -> tuple[str, ...]:
    """Return the segments of *path* or raise :class:`PropertyFormatError`."""
    segments = tuple(path.split("."))
    if not path or not all(seg.isidentifier() for seg in segments):
        raise PropertyFormatError(f"Malformed property path {path!r}")
    return segments


@dataclass
class PropertyEntry:
    """A single configuration binding.

    ``path`` is a chain of member names separated by ``.``.  When
    ``is_static`` is set the chain starts from a class rather than an
    instance; when ``is_field`` is set the last member must be a plain field
    rather than a property.
    """

    path: str = ""
    kind: ValueKind = ValueKind.STRING
    value: Scalar = ""
    is_field: bool = False
    is_static: bool = False

    def __post_init__(self) -> None:
        check_kind(self.kind, self.value)

    @property
    def segments(self) -> tuple[str, ...]:
        return check_path(self.path)

    @property
    def is_passthrough(self) -> bool:
        """True for entries that only exist to keep a store's layout."""
        return False

    def apply_to_type(self, context: type) -> None:
        """Apply this entry to the class *context*.

        Only static entries can be applied to a class.
        """
        if not self.is_static:
            raise InvalidModeError(
                f"Entry {self.path} is not static and cannot be applied to a class"
            )
        if not isinstance(context, type):
            raise TypeError(f"Context must be a class, got {type(context).__name__}")
        check_path(self.path)
        apply_path(
            self.path,
            self.value,
            is_field=self.is_field,
            is_static=True,
            context_type=context,
        )

    def apply_to_instance(self, context: Any) -> None:
        """Apply this entry to the object *context*."""
        if context is None:
            raise ValueError("Context cannot be empty")
        if self.is_static:
            raise InvalidModeError(
                f"Entry {self.path} is static and must be applied to a class"
            )
        check_path(self.path)
        apply_path(
            self.path,
            self.value,
            is_field=self.is_field,
            is_static=False,
            context_type=type(context),
            target=context,
        )


@dataclass
class PropertyLine(PropertyEntry):
    """Entry read from an editable line-format file.

    Comment and blank lines are kept as passthrough entries so the file can
    be written back unchanged.  ``source`` holds the physical line and is
    reused on save while the binding is unmodified.
    """

    is_comment_or_blank: bool = False
    source: str = ""
    _loaded: tuple[Any, ...] | None = field(default=None, repr=False, compare=False)

    @classmethod
    def passthrough(cls, source: str) -> PropertyLine:
        return cls(is_comment_or_blank=True, source=source)

    @property
    def is_passthrough(self) -> bool:
        return self.is_comment_or_blank

    def _binding(self) -> tuple[Any, ...]:
        return (self.path, self.kind, self.value, self.is_field, self.is_static)

    def mark_clean(self) -> None:
        """Record the current binding as the one ``source`` describes."""
        self._loaded = self._binding()

    def is_modified(self) -> bool:
        return self._loaded != self._binding()
