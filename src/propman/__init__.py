from .entry import PropertyEntry, PropertyLine
from .errors import PropertyManagerError
from .manager import PropertyManager
from .providers import (
    BaseProvider,
    DuckDbEditablePropertyProvider,
    DuckDbPropertyProvider,
    EditableProvider,
    FileEditablePropertyProvider,
    FilePropertyProvider,
    YamlEditablePropertyProvider,
    YamlPropertyProvider,
    provider_for_path,
)
from .values import ValueKind, format_value, parse_value


__all__ = [
    "BaseProvider",
    "DuckDbEditablePropertyProvider",
    "DuckDbPropertyProvider",
    "EditableProvider",
    "FileEditablePropertyProvider",
    "FilePropertyProvider",
    "PropertyEntry",
    "PropertyLine",
    "PropertyManager",
    "PropertyManagerError",
    "ValueKind",
    "YamlEditablePropertyProvider",
    "YamlPropertyProvider",
    "format_value",
    "parse_value",
    "provider_for_path",
]
