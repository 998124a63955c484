r"""Convert kramdown callout annotations into paired Hugo shortcodes.

Legacy pages mark callouts with a block attribute line such as ``{: .note}``.
The attribute is attached either to the *first* line of a paragraph, in which
case the callout runs until the paragraph ends::

    {: .note}
    **Note:** the first line
    and the second line.

or to the *last* line of a paragraph, in which case it wraps everything
written since the paragraph started::

    **Note:** a single paragraph.
    {: .note}

Both forms become ``{{< note >}} ... {{< /note >}}``. The converter is a
small state machine over lines; :data:`TRANSITIONS` is the full table, and a
callout starting while another one is still open raises :class:`CalloutError`
instead of guessing at the intended nesting.

Example
-------
>>> from pathlib import Path
>>> from docs_migrate.callouts import callouts_to_shortcodes
>>> callouts_to_shortcodes(Path("a.md"), "Careful here.\n{: .caution}\n")
'{{< caution >}}\nCareful here.\n{{< /caution >}}\n'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import re
import typing as typ

from .fixers import FormatError

if typ.TYPE_CHECKING:
    from pathlib import Path

ANNOTATION_MARKER = "{:"
ANNOTATION_PATTERN = re.compile(r"^(\s*)\{:\s*\.([A-Za-z][\w-]*)[^}]*\}\s*$")
CALLOUT_KINDS = frozenset({"note", "caution", "warning"})
DEFAULT_EXCLUSIONS = ("style-guide",)
_BOUNDARY_LINES = frozenset({"", "---"})


class CalloutError(FormatError):
    """Raised when callouts overlap, which the converter does not support."""


class SpanState(enum.Enum):
    """Where the converter is relative to paragraphs and open callouts."""

    IDLE = "idle"
    IN_PARAGRAPH = "in_paragraph"
    SPAN_OPEN = "span_open"


class LineKind(enum.Enum):
    """Classification of a single input line."""

    BOUNDARY = "boundary"
    ANNOTATION = "annotation"
    TEXT = "text"


TRANSITIONS: dict[tuple[SpanState, LineKind], SpanState] = {
    (SpanState.IDLE, LineKind.TEXT): SpanState.IN_PARAGRAPH,
    (SpanState.IDLE, LineKind.BOUNDARY): SpanState.IDLE,
    (SpanState.IDLE, LineKind.ANNOTATION): SpanState.SPAN_OPEN,
    (SpanState.IN_PARAGRAPH, LineKind.TEXT): SpanState.IN_PARAGRAPH,
    (SpanState.IN_PARAGRAPH, LineKind.BOUNDARY): SpanState.IDLE,
    (SpanState.IN_PARAGRAPH, LineKind.ANNOTATION): SpanState.IN_PARAGRAPH,
    (SpanState.SPAN_OPEN, LineKind.TEXT): SpanState.SPAN_OPEN,
    (SpanState.SPAN_OPEN, LineKind.BOUNDARY): SpanState.IDLE,
}
"""Next state for every supported ``(state, line kind)`` pair.

``(SPAN_OPEN, ANNOTATION)`` is absent: it is an overlapping
callout and :func:`next_state` rejects it.
"""


@dc.dataclass(slots=True, frozen=True)
class Annotation:
    """A recognised callout annotation line."""

    indent: str
    kind: str

    @property
    def open_marker(self) -> str:
        return f"{self.indent}{{{{< {self.kind} >}}}}\n"

    @property
    def close_marker(self) -> str:
        return f"{self.indent}{{{{< /{self.kind} >}}}}\n"


def parse_annotation(line: str) -> Annotation | None:
    """Return the callout annotation on ``line``, or ``None``.

    Annotations naming a class outside :data:`CALLOUT_KINDS` are not callouts
    and are treated as ordinary text.
    """
    match = ANNOTATION_PATTERN.match(line)
    if match is None:
        return None
    indent, kind = match.group(1), match.group(2)
    if kind not in CALLOUT_KINDS:
        return None
    return Annotation(indent=indent, kind=kind)


def classify_line(line: str) -> tuple[LineKind, Annotation | None]:
    """Classify ``line`` (without its line ending) for the state machine."""
    if line.strip() in _BOUNDARY_LINES:
        return LineKind.BOUNDARY, None
    annotation = parse_annotation(line)
    if annotation is not None:
        return LineKind.ANNOTATION, annotation
    return LineKind.TEXT, None


def next_state(state: SpanState, kind: LineKind) -> SpanState | None:
    """Look up the transition table; ``None`` means the input is unsupported."""
    return TRANSITIONS.get((state, kind))


class CalloutConverter:
    """Line-by-line rewriter tracking paragraphs and the open callout span.

    Feed lines (including their line endings) with :meth:`feed` and collect the
    rewritten text with :meth:`finish`. Every line except consumed annotation
    lines is emitted unchanged and in order; open and close markers always
    balance.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.state = SpanState.IDLE
        self.open_span: Annotation | None = None
        self.line_number = 0
        self._paragraph: list[str] = []
        self._output: list[str] = []

    def feed(self, raw_line: str) -> None:
        """Consume one line, ``raw_line`` keeping its original line ending."""
        self.line_number += 1
        kind, annotation = classify_line(raw_line.rstrip("\r\n"))
        target = next_state(self.state, kind)
        if target is None:
            self._reject(typ.cast("Annotation", annotation))

        match kind:
            case LineKind.BOUNDARY:
                self._close_span()
                self._paragraph.append(raw_line)
                self._flush()
            case LineKind.ANNOTATION if self.state is SpanState.IDLE:
                # First line of the paragraph: the span runs to its end.
                self.open_span = typ.cast("Annotation", annotation)
                self._paragraph.append(self.open_span.open_marker)
            case LineKind.ANNOTATION:
                # Trailing annotation: wrap what the paragraph holds so far.
                annotation = typ.cast("Annotation", annotation)
                self._output.append(annotation.open_marker)
                self._output.extend(self._terminated(self._paragraph))
                self._output.append(annotation.close_marker)
                self._paragraph = []
            case LineKind.TEXT:
                self._paragraph.append(raw_line)
        self.state = typ.cast("SpanState", target)

    def finish(self) -> str:
        """Close any open span, flush the last paragraph and return the text."""
        self._close_span()
        self._flush()
        self.state = SpanState.IDLE
        return "".join(self._output)

    def _reject(self, annotation: Annotation) -> typ.NoReturn:
        open_kind = self.open_span.kind if self.open_span else "unknown"
        msg = (
            f"line {self.line_number}: '{annotation.kind}' starts while"
            f" '{open_kind}' is still open"
        )
        raise CalloutError("callout", msg)

    def _close_span(self) -> None:
        if self.open_span is None:
            return
        if self._paragraph and not self._paragraph[-1].endswith("\n"):
            self._paragraph[-1] += "\n"
        self._paragraph.append(self.open_span.close_marker)
        self.open_span = None

    def _flush(self) -> None:
        self._output.extend(self._paragraph)
        self._paragraph = []

    @staticmethod
    def _terminated(lines: list[str]) -> list[str]:
        if lines and not lines[-1].endswith("\n"):
            return [*lines[:-1], f"{lines[-1]}\n"]
        return lines


def iter_lines(text: str) -> cabc.Iterator[str]:
    """Yield the lines of ``text`` split on ``\\n`` only, keeping line endings."""
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        if end == -1:
            yield text[start:]
            return
        yield text[start : end + 1]
        start = end + 1


def convert_callouts(path: Path, text: str) -> str:
    """Run the state machine over ``text`` unconditionally."""
    converter = CalloutConverter(path)
    for line in iter_lines(text):
        converter.feed(line)
    return converter.finish()


def callouts_to_shortcodes(
    path: Path,
    text: str,
    *,
    exclusions: cabc.Sequence[str] = DEFAULT_EXCLUSIONS,
) -> str:
    """Fixer converting callout annotations in ``text`` into shortcodes.

    Files whose path contains one of ``exclusions`` (the style guide documents
    the legacy syntax itself) and files without any annotation marker are
    returned unchanged.

    Raises
    ------
    CalloutError
        If the file contains overlapping callouts.
    """
    if any(fragment in str(path) for fragment in exclusions):
        return text
    if ANNOTATION_MARKER not in text:
        return text
    return convert_callouts(path, text)


__all__ = [
    "ANNOTATION_MARKER",
    "ANNOTATION_PATTERN",
    "CALLOUT_KINDS",
    "TRANSITIONS",
    "Annotation",
    "CalloutConverter",
    "CalloutError",
    "LineKind",
    "SpanState",
    "callouts_to_shortcodes",
    "classify_line",
    "convert_callouts",
    "iter_lines",
    "next_state",
    "parse_annotation",
]
