"""
Value types shared by the Mobiledoc renderers.

Every unit-level render (marker stream, card, section) returns a `Rendered`
value carrying its text and any `Diagnostic` records collected on the way.
The section dispatcher decides what to substitute for failed units; the
diagnostics are also logged, but callers never need to scrape logs to learn
what went wrong.

`RenderContext` is the only mutable state in a render: the stack of open
markup tags and the current link target for one marker stream.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    unit: str  # "section" | "marker" | "card" | "list" | "markup"
    message: str
    section_index: Optional[int] = None


@dataclass(frozen=True)
class Rendered:
    text: str
    diagnostics: Tuple[Diagnostic, ...] = ()

    @classmethod
    def failed(cls, diagnostic: Diagnostic) -> "Rendered":
        return cls("", (diagnostic,))

    @property
    def ok(self) -> bool:
        return not any(d.severity is Severity.ERROR for d in self.diagnostics)


@dataclass
class RenderContext:
    """Open-span stack and current link for a single marker stream."""

    stack: List[str] = field(default_factory=list)
    current_link: Optional[str] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def warn(self, unit: str, message: str) -> None:
        self.diagnostics.append(Diagnostic(Severity.WARNING, unit, message))

    def error(self, unit: str, message: str) -> None:
        self.diagnostics.append(Diagnostic(Severity.ERROR, unit, message))


@dataclass(frozen=True)
class RenderReport:
    """Result of rendering a whole document."""

    markdown: str
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def errors(self) -> Tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity is Severity.ERROR)

    @property
    def warnings(self) -> Tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity is Severity.WARNING)
