from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..entry import PropertyEntry, PropertyLine
from ..errors import PropertyFormatError, StoreUnavailableError
from . import register_provider
from .base import BaseProvider, EditableProvider
from .line_format import (
    DEFAULT_COMMENT_SIGN,
    format_binding,
    is_comment_or_blank,
    parse_binding,
)

logger = logging.getLogger(__name__)


@register_provider
class FilePropertyProvider(BaseProvider):
    """Read bindings from a line-format property file.

    Blank lines, comments and lines that do not parse as a binding are
    skipped; only bindable entries are returned, in file order.
    """

    suffixes = (".properties", ".cfg", ".conf", ".txt")
    options = ("comment_sign", "encoding")

    def __init__(
        self,
        path: Path | str,
        *,
        comment_sign: str = DEFAULT_COMMENT_SIGN,
        encoding: str = "utf-8",
    ) -> None:
        self.path = Path(path)
        if not self.path.is_file():
            raise StoreUnavailableError(f"File not found or inaccessible: {self.path}")
        if not comment_sign:
            raise ValueError("comment_sign cannot be empty")
        self.comment_sign = comment_sign
        self.encoding = encoding

    def _read_lines(self) -> list[str]:
        try:
            with self.path.open(encoding=self.encoding) as fh:
                text = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise StoreUnavailableError(f"Cannot read {self.path}: {exc}") from exc
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def load(self) -> list[PropertyEntry]:
        entries: list[PropertyEntry] = []
        for lineno, line in enumerate(self._read_lines(), start=1):
            trimmed = line.strip()
            if is_comment_or_blank(trimmed, self.comment_sign) or "=" not in trimmed:
                continue
            try:
                entries.append(parse_binding(trimmed, lineno=lineno))
            except PropertyFormatError as exc:
                logger.debug("%s: skipping %s", self.path, exc)
        logger.debug("loaded %d entries from %s", len(entries), self.path)
        return entries


@register_provider
class FileEditablePropertyProvider(FilePropertyProvider, EditableProvider):
    """Line-format property file that can be written back.

    Every physical line becomes an entry so that :meth:`save` reproduces
    comments, blank lines and untouched bindings exactly as they were read.
    """

    def load(self) -> list[PropertyEntry]:
        entries: list[PropertyEntry] = []
        for lineno, line in enumerate(self._read_lines(), start=1):
            source = line.rstrip()
            trimmed = source.strip()
            if is_comment_or_blank(trimmed, self.comment_sign):
                entries.append(PropertyLine.passthrough(source))
                continue
            if "=" not in trimmed:
                raise PropertyFormatError(
                    f"{self.path}: line {lineno}: expected '<path> = <value>', got {trimmed!r}"
                )
            entry = parse_binding(
                trimmed, lineno=lineno, entry_cls=PropertyLine, source=source
            )
            entry.mark_clean()
            entries.append(entry)
        logger.debug("loaded %d lines from %s", len(entries), self.path)
        return entries

    def _render(self, entry: PropertyEntry) -> str:
        if isinstance(entry, PropertyLine) and (
            entry.is_comment_or_blank or not entry.is_modified()
        ):
            return entry.source
        return format_binding(entry)

    def save(self, entries: Sequence[PropertyEntry]) -> None:
        lines = [self._render(entry) for entry in entries]
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with tmp.open("w", encoding=self.encoding) as fh:
                for line in lines:
                    fh.write(line + "\n")
            tmp.replace(self.path)
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot write {self.path}: {exc}") from exc
        for entry, line in zip(entries, lines):
            if isinstance(entry, PropertyLine) and not entry.is_comment_or_blank:
                entry.source = line
                entry.mark_clean()
        logger.debug("saved %d lines to %s", len(lines), self.path)
