"""Provider registry and factory."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from .base import BaseProvider, EditableProvider

_REGISTRY: dict[tuple[str, bool], type[BaseProvider]] = {}


def register_provider(provider: type[BaseProvider]) -> type[BaseProvider]:
    """Register a provider class and return it for decorator use."""
    editable = issubclass(provider, EditableProvider)
    for suf in provider.suffixes:
        _REGISTRY[(suf, editable)] = provider
    return provider


def provider_for_path(path: Path | str, *, editable: bool = False, **options: Any) -> BaseProvider:
    """Build the provider registered for the suffix of *path*.

    Options left as ``None`` are dropped so callers can pass every option
    they know about.
    """
    path = Path(path)
    provider_cls = _REGISTRY.get((path.suffix.lower(), editable))
    if provider_cls is None:
        raise ValueError(f"No provider for {path.suffix!r}")
    kwargs = {k: v for k, v in options.items() if v is not None}
    unknown = sorted(set(kwargs) - set(provider_cls.options))
    if unknown:
        raise ValueError(
            f"{provider_cls.__name__} does not accept option(s): {', '.join(unknown)}"
        )
    return provider_cls(path, **kwargs)


# register default providers
from . import duckdb_provider, file_provider, yaml_provider  # noqa: F401,E402
from .duckdb_provider import DuckDbEditablePropertyProvider, DuckDbPropertyProvider  # noqa: E402
from .file_provider import FileEditablePropertyProvider, FilePropertyProvider  # noqa: E402
from .yaml_provider import YamlEditablePropertyProvider, YamlPropertyProvider  # noqa: E402

__all__ = [
    "BaseProvider",
    "DuckDbEditablePropertyProvider",
    "DuckDbPropertyProvider",
    "EditableProvider",
    "FileEditablePropertyProvider",
    "FilePropertyProvider",
    "YamlEditablePropertyProvider",
    "YamlPropertyProvider",
    "provider_for_path",
    "register_provider",
]
