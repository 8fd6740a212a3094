class PropertyManagerError(Exception):
    """Base class for propman errors."""


class MissingElementError(PropertyManagerError):
    """Raised when a path segment does not exist on the current target."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(
            message
            or f"Element {path} does not appear to exist in the supplied context"
        )


class InaccessibleMemberError(PropertyManagerError):
    """Raised when the final path segment cannot be written."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Entry {path} cannot be accessed")


class InvalidModeError(PropertyManagerError):
    """Raised when a static entry is applied to an instance or vice versa."""


class TypeMismatchError(PropertyManagerError):
    """Raised when a requested value kind differs from the stored one."""


class UnknownKeyError(PropertyManagerError):
    """Raised when no entry exists under a key."""


class DuplicateKeyError(PropertyManagerError):
    """Raised when several entries share a key."""


class NotEditableError(PropertyManagerError):
    """Raised when mutating or saving through a read-only provider."""


class PropertyFormatError(PropertyManagerError):
    """Raised when a stored line or document cannot be turned into an entry."""


class StoreInconsistencyError(PropertyManagerError):
    """Raised when a property name matches more than one stored document."""


class PersistenceError(PropertyManagerError):
    """Raised when the store does not acknowledge an update or insert."""


class StoreUnavailableError(PropertyManagerError):
    """Raised when the backing file or database cannot be opened."""
