"""Exclusion Staging - Decide which status entries get staged."""

import re
from dataclasses import dataclass, field

import pathspec

from commitkit.git.status import FileChangeRecord, deletions_to_stage, stageable_paths

_GLOB_SPECIALS = '[]*?\\'


def _literal_lines(pattern: str) -> list[str]:
    """Pattern lines matching `pattern` as plain text at the same anchoring."""
    escaped = ''.join('\\' + c if c in _GLOB_SPECIALS else c for c in pattern)
    prefix = '/' if '/' in pattern.rstrip('/') else '**/'
    return [prefix + escaped.lstrip('/')]


class ExclusionPattern:
    """A user-supplied glob naming files or directories to leave unstaged.

    Gitignore (gitwildmatch) semantics:
    - no `/`: matched at any depth (`*.log`, `node_modules`)
    - with `/`: anchored at the repository root (`src/*.py`, `docs/**/*.md`)
    - trailing `/`: directories only (`target/`)

    A path is excluded when it or any parent directory matches.
    """

    def __init__(self, raw: str):
        self.raw = raw
        pattern = raw.strip()
        if not pattern.strip('/'):
            self._spec = None
            return
        try:
            self._spec = pathspec.PathSpec.from_lines("gitwildmatch", [pattern])
        except (re.error, ValueError):
            # Bad class such as [z-a]: match the text literally
            self._spec = pathspec.PathSpec.from_lines("gitwildmatch", _literal_lines(pattern))

    def __repr__(self) -> str:
        return f"ExclusionPattern({self.raw!r})"

    def matches(self, path: str) -> bool:
        if self._spec is None:
            return False
        return self._spec.match_file(path)


def matches(path: str, pattern: str) -> bool:
    """True if `path` is excluded by the glob `pattern`."""
    return ExclusionPattern(pattern).matches(path)


def _compile(patterns) -> list[ExclusionPattern]:
    return [p if isinstance(p, ExclusionPattern) else ExclusionPattern(p) for p in patterns]


def filter_paths(paths: list[str], exclude_patterns) -> list[str]:
    """Keep paths matching none of the patterns. Order kept, duplicates kept."""
    compiled = _compile(exclude_patterns)
    return [path for path in paths if not any(p.matches(path) for p in compiled)]


def select_files_to_stage(records: list[FileChangeRecord], exclude_patterns) -> list[str]:
    """Paths of records that match none of the exclusion patterns."""
    return filter_paths([r.path for r in records], exclude_patterns)


def unused_patterns(records: list[FileChangeRecord], exclude_patterns) -> list[str]:
    """Patterns that exclude nothing, for callers that want to warn."""
    compiled = _compile(exclude_patterns)
    return [
        p.raw for p in compiled
        if not any(p.matches(r.path) for r in records)
    ]


@dataclass
class StagingPlan:
    """What `ck add-with-exclude` is about to do."""
    to_add: list[str] = field(default_factory=list)
    to_remove: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove

    @property
    def paths(self) -> list[str]:
        """Everything to hand to a single `git add` call."""
        return self.to_add + self.to_remove


def plan_staging(records: list[FileChangeRecord], exclude_patterns) -> StagingPlan:
    compiled = _compile(exclude_patterns)
    candidates = stageable_paths(records)
    deleted = deletions_to_stage(records)

    to_add = filter_paths(candidates, compiled)
    to_remove = filter_paths(deleted, compiled)
    kept = set(to_add) | set(to_remove)
    excluded = [path for path in candidates + deleted if path not in kept]

    return StagingPlan(to_add=to_add, to_remove=to_remove, excluded=excluded)
