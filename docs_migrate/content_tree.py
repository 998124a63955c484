"""Filesystem driver for the migration: walk, rewrite, copy, move and rename.

:class:`ContentTree` wraps every filesystem mutation the migration performs.
Each operation returns a :class:`StepResult` listing what it changed (and, for
fixer runs, which files need manual follow-up) so the caller aggregates the
run's change log explicitly. In dry-run mode the same walks happen and the same
records are produced, but nothing on disk is touched.

Example
-------
>>> from pathlib import Path
>>> from docs_migrate.content_tree import ContentTree
>>> from docs_migrate.fixers import FixerChain, fix_dates
>>> tree = ContentTree(Path("/srv/website"), dry_run=True)  # doctest: +SKIP
>>> result = tree.apply_fixers(FixerChain([fix_dates]), r".*blog/.*md$")  # doctest: +SKIP
>>> [str(failure) for failure in result.failures]  # doctest: +SKIP
[]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re
import shutil
from pathlib import Path

from .fixers import Fixer, FixerChain, FixerFailure

logger = logging.getLogger(__name__)

FILE_ERRORS = "surrogateescape"


class MigrationError(RuntimeError):
    """Raised when a precondition of the run is unmet; the run must stop."""


@dc.dataclass(slots=True, frozen=True)
class ChangeRecord:
    """One filesystem change, performed or (in dry run) intended.

    Attributes
    ----------
    origin : Path
        Source of the change (the file itself for in-place rewrites).
    destination : Path
        Target of the change.
    action : str
        One of ``copy``, ``move``, ``rename``, ``rewrite``, ``write`` or
        ``remove``.
    """

    origin: Path
    destination: Path
    action: str


@dc.dataclass(slots=True)
class StepResult:
    """Changes and per-file failures produced by one or more operations."""

    changes: list[ChangeRecord] = dc.field(default_factory=list)
    failures: list[FixerFailure] = dc.field(default_factory=list)

    def extend(self, other: StepResult) -> StepResult:
        """Append ``other``'s records to this result and return ``self``."""
        self.changes.extend(other.changes)
        self.failures.extend(other.failures)
        return self

    def record(self, origin: Path, destination: Path, action: str) -> None:
        self.changes.append(ChangeRecord(origin, destination, action))


class ContentTree:
    """Perform filesystem operations rooted at a website checkout."""

    def __init__(
        self,
        project_root: Path,
        *,
        content_dir: str = "content",
        dry_run: bool = False,
    ) -> None:
        """Initialize the driver.

        Parameters
        ----------
        project_root : Path
            Root of the website checkout. Every relative path is resolved
            against it and no operation may leave it.
        content_dir : str, optional
            Directory, relative to ``project_root``, holding the Hugo content
            tree. Defaults to ``"content"``.
        dry_run : bool, optional
            When ``True`` mutating operations only log and record the intended
            change. Defaults to ``False``.
        """
        self.project_root = project_root.resolve()
        self.content_dir = content_dir
        self.dry_run = dry_run

    @property
    def content_root(self) -> Path:
        """Return the absolute content directory."""
        return self.resolve(self.content_dir)

    def resolve(self, rel: str | Path) -> Path:
        """Return ``rel`` as an absolute path inside the project root.

        Raises
        ------
        MigrationError
            If the path escapes the project root.
        """
        candidate = (self.project_root / rel).resolve()
        if not candidate.is_relative_to(self.project_root):
            msg = f"Path '{rel}' resolves outside the project root {self.project_root}."
            raise MigrationError(msg)
        return candidate

    def exists(self, rel: str | Path) -> bool:
        return self.resolve(rel).exists()

    def walk(self, subfolder: str = "") -> cabc.Iterator[Path]:
        """Yield regular files below the content root (or a subfolder of it)."""
        root = self.content_root / subfolder if subfolder else self.content_root
        if not root.is_dir():
            return
        for path in sorted(root.rglob("*")):
            if path.is_file():
                yield path

    def walk_matching(self, pattern: str, subfolder: str = "") -> cabc.Iterator[Path]:
        """Yield walked files whose path relative to the content root matches.

        Matching never sees the directories above the content root, so a
        checkout living under ``/home/me/blog/`` does not make ``blog/``
        patterns match every file.
        """
        matcher = re.compile(pattern)
        content_root = self.content_root
        for path in self.walk(subfolder):
            if matcher.search(path.relative_to(content_root).as_posix()):
                yield path

    def apply_fixers(
        self, chain: FixerChain, pattern: str, *, subfolder: str = ""
    ) -> StepResult:
        """Run ``chain`` over every content file whose relative path matches.

        Parameters
        ----------
        chain : FixerChain
            Ordered fixers applied to each file.
        pattern : str
            Regular expression searched in each file's POSIX path relative to
            the content root, e.g. ``en/blog/2015-07-02-post.md``.
        subfolder : str, optional
            Restrict the walk to this folder of the content root.

        Returns
        -------
        StepResult
            A ``rewrite`` record per changed file and every fixer failure.
        """
        result = StepResult()
        for path in self.walk_matching(pattern, subfolder):
            result.extend(self._rewrite(path, chain))
        return result

    def replace_in_file(self, path: Path, fixer: Fixer | FixerChain) -> StepResult:
        """Apply a single fixer (or chain) to one file.

        Raises
        ------
        MigrationError
            If the file does not exist outside dry-run mode.
        """
        chain = fixer if isinstance(fixer, FixerChain) else FixerChain([fixer])
        if not path.is_file():
            if self.dry_run:
                logger.info("would rewrite %s (not present yet)", self._display(path))
                return StepResult(changes=[ChangeRecord(path, path, "rewrite")])
            msg = f"Cannot rewrite '{path}': file not found."
            raise MigrationError(msg)
        return self._rewrite(path, chain)

    def replace_in_file_rel(self, rel: str, fixer: Fixer | FixerChain) -> StepResult:
        return self.replace_in_file(self.resolve(rel), fixer)

    def rename_content_files(self, pattern: str, rename_to: str) -> StepResult:
        """Rename content files matching ``pattern`` to ``rename_to``.

        ``pattern`` is searched in the POSIX path relative to the content root,
        so ``(^|/)index\\.md$`` matches ``docs/foo/index.md`` but not
        ``docs/foo/notindex.md``. The renamed file stays in its directory.
        """
        result = StepResult()
        for path in list(self.walk_matching(pattern)):
            target = path.with_name(rename_to)
            if target == path:
                continue
            result.record(path, target, "rename")
            logger.debug("rename %s -> %s", self._display(path), self._display(target))
            if not self.dry_run:
                path.rename(target)
        return result

    def rename_file(self, source: str, destination: str) -> StepResult:
        src, dst = self.resolve(source), self.resolve(destination)
        result = StepResult()
        result.record(src, dst, "rename")
        if self.dry_run:
            return result
        if not src.exists():
            msg = f"Cannot rename '{source}': file not found."
            raise MigrationError(msg)
        dst.parent.mkdir(parents=True, exist_ok=True)
        src.rename(dst)
        return result

    def copy_dir(self, source: str, destination: str) -> StepResult:
        """Copy a directory tree, merging into an existing destination."""
        src, dst = self.resolve(source), self.resolve(destination)
        result = StepResult()
        result.record(src, dst, "copy")
        logger.info("copy %s -> %s", self._display(src), self._display(dst))
        if self.dry_run:
            return result
        if not src.is_dir():
            msg = f"Cannot copy '{source}': directory not found."
            raise MigrationError(msg)
        shutil.copytree(src, dst, dirs_exist_ok=True)
        return result

    def move_dir(self, source: str, destination: str) -> StepResult:
        """Move a directory tree, replacing whatever is at the destination."""
        src, dst = self.resolve(source), self.resolve(destination)
        result = StepResult()
        result.record(src, dst, "move")
        logger.info("move %s -> %s", self._display(src), self._display(dst))
        if self.dry_run:
            return result
        if not src.is_dir():
            msg = f"Cannot move '{source}': directory not found."
            raise MigrationError(msg)
        if dst.exists():
            shutil.rmtree(dst)
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(src, dst)
        return result

    def remove_file(self, rel: str) -> StepResult:
        path = self.resolve(rel)
        result = StepResult()
        result.record(path, path, "remove")
        if self.dry_run:
            return result
        if not path.is_file():
            msg = f"Cannot remove '{rel}': file not found."
            raise MigrationError(msg)
        path.unlink()
        return result

    def remove_tree(self, rel: str) -> StepResult:
        """Delete a directory tree below (never equal to) the project root."""
        path = self.resolve(rel)
        if path == self.project_root:
            msg = "Refusing to remove the project root."
            raise MigrationError(msg)
        result = StepResult()
        if not path.exists():
            return result
        result.record(path, path, "remove")
        logger.info("remove %s", self._display(path))
        if not self.dry_run:
            shutil.rmtree(path)
        return result

    def write_file(
        self, rel: str | Path, content: str, *, source: Path | None = None
    ) -> StepResult:
        """Write a generated file, creating parent directories as needed."""
        path = self.resolve(rel)
        result = StepResult()
        result.record(source or path, path, "write")
        if self.dry_run:
            return result
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return result

    def relative(self, path: Path) -> Path:
        """Return ``path`` relative to the project root when it lies inside it."""
        try:
            return path.relative_to(self.project_root)
        except ValueError:
            return path

    def _display(self, path: Path) -> str:
        return str(self.relative(path))

    def _rewrite(self, path: Path, chain: FixerChain) -> StepResult:
        # Undecodable bytes round-trip as surrogates.
        with path.open(
            "r", encoding="utf-8", errors=FILE_ERRORS, newline=""
        ) as handle:
            original = handle.read()
        fixed, failures = chain.apply(path, original)
        for failure in failures:
            logger.warning("%s\t%s", self._display(failure.path), failure.error)
        result = StepResult(failures=failures)
        if fixed == original:
            return result
        result.record(path, path, "rewrite")
        if not self.dry_run:
            path.write_text(fixed, encoding="utf-8", errors=FILE_ERRORS, newline="")
        return result


__all__ = ["ChangeRecord", "ContentTree", "MigrationError", "StepResult"]
