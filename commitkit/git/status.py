"""Status Parser - Turn `git status --porcelain` output into file records."""

import re
from dataclasses import dataclass
from typing import Optional

# Porcelain v1 codes: ' ' unmodified, M modified, T type change, A added,
# D deleted, R renamed, C copied, U unmerged, ? untracked, ! ignored
STATUS_CODES = " MTADRCU?!"

RENAME_SEPARATOR = " -> "

_STATUS_LINE = re.compile(
    rf'^(?P<index>[{re.escape(STATUS_CODES)}])'
    rf'(?P<worktree>[{re.escape(STATUS_CODES)}])'
    r'\s+(?P<path>\S.*)$'
)


@dataclass(frozen=True)
class FileChangeRecord:
    """One line of working tree status."""
    path: str
    index_status: str
    worktree_status: str
    renamed_from: Optional[str] = None

    @property
    def is_untracked(self) -> bool:
        return self.index_status == '?' and self.worktree_status == '?'

    @property
    def is_renamed(self) -> bool:
        return self.index_status == 'R'

    @property
    def is_staged(self) -> bool:
        """Change recorded in the index (new path for renames)."""
        return self.index_status in 'MARCT'

    @property
    def deleted_in_index(self) -> bool:
        return self.index_status == 'D'

    @property
    def deleted_in_worktree(self) -> bool:
        return self.worktree_status == 'D'


# Escapes git uses when it wraps a path in double quotes
_QUOTE_ESCAPES = {
    'a': '\a', 'b': '\b', 'f': '\f', 'n': '\n', 'r': '\r',
    't': '\t', 'v': '\v', '"': '"', '\\': '\\',
}


def _read_quoted(text: str) -> Optional[tuple[str, str]]:
    """Decode a C-quoted path at the start of `text`.

    Returns (path, remaining text), or None if the quoting is broken.
    Octal escapes are UTF-8 bytes.
    """
    buf = bytearray()
    i = 1
    while i < len(text):
        c = text[i]
        if c == '"':
            return buf.decode('utf-8', errors='replace'), text[i + 1:]
        if c != '\\':
            buf += c.encode('utf-8')
            i += 1
            continue
        escape = text[i + 1:i + 2]
        octal = text[i + 1:i + 4]
        if escape in _QUOTE_ESCAPES:
            buf += _QUOTE_ESCAPES[escape].encode('utf-8')
            i += 2
        elif len(octal) == 3 and all(ch in '01234567' for ch in octal):
            buf.append(int(octal, 8) & 0xFF)
            i += 4
        else:
            return None
    return None


def _split_paths(segment: str) -> Optional[tuple[Optional[str], str]]:
    """Split the path part of a status line into (renamed_from, path)."""
    if segment.startswith('"'):
        first = _read_quoted(segment)
        if first is None:
            return None
        path, rest = first
        if not rest:
            return (None, path) if path else None
        if not rest.startswith(RENAME_SEPARATOR):
            return None
        renamed_from, target = path, rest[len(RENAME_SEPARATOR):]
    elif RENAME_SEPARATOR in segment:
        renamed_from, target = segment.split(RENAME_SEPARATOR, 1)
    else:
        return None, segment

    if target.startswith('"'):
        second = _read_quoted(target)
        if second is None or second[1]:
            return None
        target = second[0]
    if not renamed_from or not target:
        return None
    return renamed_from, target


def parse_status_line(line: str) -> Optional[FileChangeRecord]:
    """Parse a single porcelain line. Returns None for lines of the wrong shape."""
    match = _STATUS_LINE.match(line)
    if not match:
        return None

    paths = _split_paths(match.group('path'))
    if paths is None:
        return None
    renamed_from, path = paths

    return FileChangeRecord(
        path=path,
        index_status=match.group('index'),
        worktree_status=match.group('worktree'),
        renamed_from=renamed_from,
    )


def parse_status(raw_text: str) -> list[FileChangeRecord]:
    """Parse porcelain status text, skipping malformed lines, in input order."""
    records = []
    for line in raw_text.splitlines():
        if not line.strip():
            continue
        record = parse_status_line(line)
        if record is not None:
            records.append(record)
    return records


def stageable_paths(records: list[FileChangeRecord]) -> list[str]:
    """Paths that `git add` should pick up: everything not deleted."""
    return [
        r.path for r in records
        if not r.deleted_in_index and not r.deleted_in_worktree
    ]


def deletions_to_stage(records: list[FileChangeRecord]) -> list[str]:
    """Files deleted in the working tree whose deletion is not staged yet."""
    return [r.path for r in records if r.deleted_in_worktree and not r.deleted_in_index]


def staged_paths(records: list[FileChangeRecord]) -> list[str]:
    return [r.path for r in records if r.is_staged]


def staged_deletions(records: list[FileChangeRecord]) -> list[str]:
    return [r.path for r in records if r.deleted_in_index]


def count_renamed(records: list[FileChangeRecord]) -> int:
    return sum(1 for r in records if r.is_renamed)
