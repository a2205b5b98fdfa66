"""Diagnostics roll-up: one summary annotation per listing line.

Annotation sources report per-file diagnostics. The aggregator resolves each
listing line to a path, gathers the diagnostics of that file (or of every
tracked file below a directory line), and emits one summary per line whose
severity is the most severe child. Results are recomputed in full on every
refresh; nothing is patched incrementally.

Sources are polled: the host compares ``version()`` between idle ticks and
calls ``refresh`` when it changes.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol

from . import pathutil
from .listing import is_parent_sentinel, line_to_path

_LOGGER = logging.getLogger(__name__)


class Severity(IntEnum):
    """Lower values are more severe."""

    ERROR = 0
    WARNING = 1
    INFORMATION = 2
    HINT = 3


_SEVERITY_NAMES = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
    "information": Severity.INFORMATION,
    "info": Severity.INFORMATION,
    "hint": Severity.HINT,
}


def parse_severity(value: object) -> Severity | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return Severity(value)
        except ValueError:
            return None
    if isinstance(value, str):
        return _SEVERITY_NAMES.get(value.strip().lower())
    return None


@dataclass(frozen=True, order=True)
class TextRange:
    start_line: int
    start_col: int
    end_line: int
    end_col: int


@dataclass(frozen=True)
class Diagnostic:
    path: str
    range: TextRange
    message: str
    severity: Severity = Severity.ERROR


@dataclass(frozen=True)
class RelatedInformation:
    path: str
    range: TextRange
    message: str


@dataclass(frozen=True)
class AggregatedDiagnostic:
    line: int
    range: TextRange
    severity: Severity
    count: int
    message: str
    children: tuple[RelatedInformation, ...]


class AnnotationSource(Protocol):
    def diagnostics_for(self, path: str) -> Sequence[Diagnostic]: ...

    def tracked_paths(self) -> Iterable[str]: ...

    def version(self) -> object: ...


class StaticAnnotationSource:
    """In-memory annotation source keyed by absolute path."""

    def __init__(self, diagnostics: Mapping[str, Sequence[Diagnostic]] | None = None) -> None:
        self._diagnostics: dict[str, tuple[Diagnostic, ...]] = {}
        self._version = 0
        for path, items in (diagnostics or {}).items():
            self.set(path, items)

    def set(self, path: str, diagnostics: Sequence[Diagnostic]) -> None:
        path = os.path.normpath(path)
        if diagnostics:
            self._diagnostics[path] = tuple(diagnostics)
        else:
            self._diagnostics.pop(path, None)
        self._version += 1

    def clear(self) -> None:
        self._diagnostics.clear()
        self._version += 1

    def diagnostics_for(self, path: str) -> Sequence[Diagnostic]:
        return self._diagnostics.get(os.path.normpath(path), ())

    def tracked_paths(self) -> Iterable[str]:
        return tuple(self._diagnostics)

    def version(self) -> object:
        return self._version


def _int_field(raw: Mapping[str, object], key: str, default: int) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return max(0, value)


def parse_diagnostics_document(data: object, base_dir: str) -> dict[str, list[Diagnostic]]:
    """Parse a problems document into ``{path: [Diagnostic, ...]}``.

    Accepts a list of records or ``{"diagnostics": [...]}``. Records missing a
    path or message are skipped; relative paths resolve against ``base_dir``.
    """
    records = data.get("diagnostics") if isinstance(data, dict) else data
    if not isinstance(records, list):
        return {}

    grouped: dict[str, list[Diagnostic]] = {}
    for raw in records:
        if not isinstance(raw, dict):
            continue
        raw_path = raw.get("path")
        message = raw.get("message")
        if not isinstance(raw_path, str) or not raw_path or not isinstance(message, str):
            continue
        path = pathutil.join(base_dir, os.path.expanduser(raw_path))
        start_line = _int_field(raw, "line", 0)
        start_col = _int_field(raw, "column", 0)
        text_range = TextRange(
            start_line=start_line,
            start_col=start_col,
            end_line=_int_field(raw, "end_line", start_line),
            end_col=_int_field(raw, "end_column", start_col),
        )
        severity = parse_severity(raw.get("severity", "error"))
        if severity is None:
            severity = Severity.ERROR
        grouped.setdefault(path, []).append(Diagnostic(path, text_range, message, severity))
    return grouped


class JsonAnnotationSource:
    """Annotation source backed by a JSON problems file, reloaded on mtime change."""

    def __init__(self, file_path: str) -> None:
        self.file_path = pathutil.normalize(file_path)
        self._mtime_ns: int | None = None
        self._diagnostics: dict[str, list[Diagnostic]] = {}

    def _current_mtime(self) -> int | None:
        try:
            return os.stat(self.file_path).st_mtime_ns
        except OSError:
            return None

    def _maybe_reload(self) -> None:
        mtime_ns = self._current_mtime()
        if mtime_ns == self._mtime_ns:
            return
        self._mtime_ns = mtime_ns
        if mtime_ns is None:
            self._diagnostics = {}
            return
        try:
            with open(self.file_path, encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as exc:
            _LOGGER.warning("could not read problems file %s: %s", self.file_path, exc)
            self._diagnostics = {}
            return
        self._diagnostics = parse_diagnostics_document(data, pathutil.dirname(self.file_path))
        _LOGGER.debug("loaded diagnostics for %d paths from %s", len(self._diagnostics), self.file_path)

    def diagnostics_for(self, path: str) -> Sequence[Diagnostic]:
        self._maybe_reload()
        return self._diagnostics.get(os.path.normpath(path), ())

    def tracked_paths(self) -> Iterable[str]:
        self._maybe_reload()
        return tuple(self._diagnostics)

    def version(self) -> object:
        return self._current_mtime()


def _summary_message(count: int) -> str:
    return f"{count} problem" if count == 1 else f"{count} problems"


class DiagnosticsAggregator:
    """Computes per-line summaries from an ``AnnotationSource``."""

    def __init__(self, source: AnnotationSource) -> None:
        self.source = source
        self.current: tuple[AggregatedDiagnostic, ...] = ()
        self._seen_version: object = None

    def _collect(self, path: str, is_directory: bool) -> list[Diagnostic]:
        collected = list(self.source.diagnostics_for(path))
        if is_directory:
            for tracked in self.source.tracked_paths():
                if pathutil.is_within(tracked, path):
                    collected.extend(self.source.diagnostics_for(tracked))
        return collected

    def refresh(self, directory: str, lines: Sequence[str]) -> tuple[AggregatedDiagnostic, ...]:
        aggregated: list[AggregatedDiagnostic] = []
        for index, line in enumerate(lines):
            if not line or is_parent_sentinel(line):
                continue
            path = line_to_path(directory, line)
            children = self._collect(path, pathutil.has_trailing_slash(line))
            if not children:
                continue
            children.sort(key=lambda item: (item.path, item.range))
            name = pathutil.strip_trailing_slash(line)
            aggregated.append(
                AggregatedDiagnostic(
                    line=index,
                    range=TextRange(index, 0, index, len(name)),
                    severity=min(child.severity for child in children),
                    count=len(children),
                    message=_summary_message(len(children)),
                    children=tuple(
                        RelatedInformation(child.path, child.range, child.message) for child in children
                    ),
                )
            )
        self.current = tuple(aggregated)
        self._seen_version = self.source.version()
        return self.current

    def is_stale(self) -> bool:
        """Return whether the source changed since the last ``refresh``."""
        return self.source.version() != self._seen_version


__all__ = [
    "Severity",
    "TextRange",
    "Diagnostic",
    "RelatedInformation",
    "AggregatedDiagnostic",
    "AnnotationSource",
    "StaticAnnotationSource",
    "JsonAnnotationSource",
    "DiagnosticsAggregator",
    "parse_severity",
    "parse_diagnostics_document",
]
