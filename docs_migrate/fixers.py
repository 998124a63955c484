r"""Composable text fixers that rewrite legacy Liquid syntax into Hugo syntax.

A fixer is any callable taking the file path and its current text and
returning the new text. Fixers that cannot handle their input raise
:class:`FormatError`; :class:`FixerChain` records the failure, discards that
fixer's output, and hands the unchanged text to the next fixer so one bad date
never blocks the shortcode rewrites of the same file.

Example
-------
>>> from pathlib import Path
>>> from docs_migrate.fixers import FixerChain, glossary_tooltip_to_shortcode
>>> chain = FixerChain([glossary_tooltip_to_shortcode])
>>> chain.apply(Path("a.md"), '{% glossary_tooltip term_id="pod" %}')
('{{< glossary_tooltip term_id="pod" >}}', [])
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import re
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

Fixer = typ.Callable[["Path", str], str]

BROKEN_GLOSSARY_TOOLTIP = (
    '{{ "{% glossary_tooltip text=" }}"cluster" term_id="cluster" %}'
)
FIXED_GLOSSARY_TOOLTIP = '{% glossary_tooltip text=" term_id="cluster" %}'

GLOSSARY_TOOLTIP_PATTERN = re.compile(r"\{% glossary_tooltip(.*?)%\}")
GLOSSARY_DEFINITION_PATTERN = re.compile(r"\{% glossary_definition(.*?)%\}")
CODE_INCLUDE_PATTERN = re.compile(r"\{% include code\.html(.*?)%\}")
CAPTURE_PATTERN = re.compile(
    r"\{% capture (.*?) %\}(.*?)\{% endcapture %\}", re.DOTALL
)
DATE_FIELD_PATTERN = re.compile(r"^(date):[ \t]*(.*?)[ \t]*(\r?)$", re.MULTILINE)
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")
LEGACY_DATE_PATTERN = re.compile(
    r"^(?P<weekday>[A-Za-z]+),[ \t]+(?P<month>[A-Za-z]+)[ \t]+"
    r"(?P<day>\d{1,2}),[ \t]+(?P<year>\d{4})$"
)

# Legacy dates are always English, whatever LC_TIME says.
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
MONTH_NUMBERS = {
    name: number
    for number, name in enumerate(
        (
            "January",
            "February",
            "March",
            "April",
            "May",
            "June",
            "July",
            "August",
            "September",
            "October",
            "November",
            "December",
        ),
        start=1,
    )
}


class FormatError(ValueError):
    """Raised by a fixer when a file does not have the shape it expects.

    Attributes
    ----------
    field : str
        Name of the field or construct that could not be handled.
    cause : str
        Human-readable description of the underlying problem.
    """

    def __init__(self, field: str, cause: str) -> None:
        super().__init__(f"{field}: {cause}")
        self.field = field
        self.cause = cause


@dc.dataclass(slots=True, frozen=True)
class FixerFailure:
    """A fixer that failed for one file; the file kept its previous text."""

    path: Path
    fixer: str
    error: FormatError

    def __str__(self) -> str:
        return f"{self.path}\t{self.error}"


def fixer_name(fixer: Fixer) -> str:
    """Return a readable name for ``fixer`` (functions, partials, callables)."""
    name = getattr(fixer, "__name__", None)
    if name is None:
        wrapped = getattr(fixer, "func", None)
        name = getattr(wrapped, "__name__", None)
    return name or type(fixer).__name__


class FixerChain:
    """Apply fixers in order, isolating :class:`FormatError` failures."""

    def __init__(self, fixers: cabc.Iterable[Fixer]) -> None:
        self.fixers: list[Fixer] = list(fixers)

    def __len__(self) -> int:
        return len(self.fixers)

    def apply(self, path: Path, text: str) -> tuple[str, list[FixerFailure]]:
        """Run every fixer over ``text``.

        Parameters
        ----------
        path : Path
            File the text was read from; passed through to every fixer.
        text : str
            Current file content.

        Returns
        -------
        tuple[str, list[FixerFailure]]
            The final text and one failure record per fixer that raised
            :class:`FormatError`. A failing fixer leaves the text as it stood
            before it ran.
        """
        failures: list[FixerFailure] = []
        for fixer in self.fixers:
            try:
                text = fixer(path, text)
            except FormatError as exc:
                failures.append(FixerFailure(path, fixer_name(fixer), exc))
        return text, failures


def fix_broken_glossary_tooltip(path: Path, text: str) -> str:
    """Repair the one malformed tooltip the general tooltip rule cannot match.

    Must run before :func:`glossary_tooltip_to_shortcode`.
    """
    return text.replace(BROKEN_GLOSSARY_TOOLTIP, FIXED_GLOSSARY_TOOLTIP, 1)


def glossary_tooltip_to_shortcode(path: Path, text: str) -> str:
    """Rewrite ``{% glossary_tooltip ... %}`` into the Hugo shortcode."""
    return GLOSSARY_TOOLTIP_PATTERN.sub(r"{{< glossary_tooltip\1>}}", text)


def glossary_definition_to_shortcode(path: Path, text: str) -> str:
    """Rewrite ``{% glossary_definition ... %}`` into the Hugo shortcode."""
    return GLOSSARY_DEFINITION_PATTERN.sub(r"{{< glossary_definition\1>}}", text)


def code_include_to_shortcode(path: Path, text: str) -> str:
    """Rewrite ``{% include code.html ... %}`` into the ``code`` shortcode."""
    return CODE_INCLUDE_PATTERN.sub(r"{{< code\1>}}", text)


def captures_to_shortcode(path: Path, text: str) -> str:
    """Rewrite Liquid capture blocks into paired ``capture`` shortcodes."""
    return CAPTURE_PATTERN.sub(r"{{% capture \1 %}}\2{{% /capture %}}", text)


def parse_legacy_date(value: str) -> dt.date:
    """Parse ``Friday, July 02, 2015`` using English day and month names.

    Raises
    ------
    ValueError
        If ``value`` is not in that form or names a day that does not exist.
    """
    match = LEGACY_DATE_PATTERN.match(value)
    if match is None:
        msg = f"{value!r} does not look like 'Monday, January 2, 2006'"
        raise ValueError(msg)
    weekday = match.group("weekday").capitalize()
    if weekday not in WEEKDAY_NAMES:
        msg = f"unknown day name {match.group('weekday')!r}"
        raise ValueError(msg)
    month = MONTH_NUMBERS.get(match.group("month").capitalize())
    if month is None:
        msg = f"unknown month name {match.group('month')!r}"
        raise ValueError(msg)
    return dt.date(int(match.group("year")), month, int(match.group("day")))


def fix_dates(path: Path, text: str) -> str:
    """Normalise ``date: Friday, July 02, 2015`` fields to ``date: 2015-07-02``.

    A trailing carriage return on the ``date`` line is kept.

    Raises
    ------
    FormatError
        If a ``date`` value is neither ISO formatted nor in the long legacy
        format. The caller keeps the original text.
    """
    problems: list[FormatError] = []

    def _replace(match: re.Match[str]) -> str:
        key, value, eol = match.group(1), match.group(2), match.group(3)
        if ISO_DATE_PATTERN.match(value):
            return match.group(0)
        try:
            parsed = parse_legacy_date(value.strip("\"'"))
        except ValueError as exc:
            problems.append(FormatError(key, str(exc)))
            return match.group(0)
        return f"{key}: {parsed:%Y-%m-%d}{eol}"

    fixed = DATE_FIELD_PATTERN.sub(_replace, text)
    if problems:
        raise problems[0]
    return fixed


def replace_string(old: str, new: str) -> Fixer:
    """Return a fixer replacing every literal ``old`` with ``new``."""

    def replace_string_fixer(path: Path, text: str) -> str:
        return text.replace(old, new)

    return replace_string_fixer


def remove_pattern(pattern: str | re.Pattern[str]) -> Fixer:
    """Return a fixer deleting every match of ``pattern``."""
    compiled = re.compile(pattern)

    def remove_pattern_fixer(path: Path, text: str) -> str:
        return compiled.sub("", text)

    return remove_pattern_fixer


__all__ = [
    "BROKEN_GLOSSARY_TOOLTIP",
    "FIXED_GLOSSARY_TOOLTIP",
    "Fixer",
    "FixerChain",
    "FixerFailure",
    "FormatError",
    "captures_to_shortcode",
    "code_include_to_shortcode",
    "fix_broken_glossary_tooltip",
    "fix_dates",
    "fixer_name",
    "glossary_definition_to_shortcode",
    "glossary_tooltip_to_shortcode",
    "parse_legacy_date",
    "remove_pattern",
    "replace_string",
]
