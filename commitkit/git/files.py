"""Commit message and ignore files kept at the repository root."""

from pathlib import Path

from commitkit import COMMIT_MESSAGE_FILE, COMMITIGNORE_FILE
from commitkit.git.repository import GitError, GitRepository
from commitkit.git.staging import filter_paths

EXCLUDE_MARKER = "# Added by commitkit"


def read_pattern_file(path: Path) -> list[str]:
    """Non-empty, non-comment lines of a gitignore-style file."""
    if not path.exists():
        return []
    lines = path.read_text(encoding='utf-8').splitlines()
    return [line.strip() for line in lines if line.strip() and not line.lstrip().startswith('#')]


def add_to_git_exclude(repo: GitRepository, entries: list[str]) -> list[str]:
    """Append entries to .git/info/exclude unless already listed.

    Returns the entries actually written.
    """
    exclude_file = repo.git_dir / "info" / "exclude"
    exclude_file.parent.mkdir(parents=True, exist_ok=True)

    content = exclude_file.read_text(encoding='utf-8') if exclude_file.exists() else ""
    existing = set(read_pattern_file(exclude_file))
    to_add = [entry for entry in entries if entry not in existing]
    if not to_add:
        return []

    with open(exclude_file, 'a', encoding='utf-8') as f:
        if EXCLUDE_MARKER not in content:
            if content and not content.endswith('\n'):
                f.write('\n')
            if content:
                f.write('\n')
            f.write(f"{EXCLUDE_MARKER}\n")
        for entry in to_add:
            f.write(f"{entry}\n")
    return to_add


def create_needed_files(repo: GitRepository) -> None:
    """Create the message and .commitignore files and hide them from git."""
    for name in (COMMIT_MESSAGE_FILE, COMMITIGNORE_FILE):
        path = repo.root / name
        if not path.exists():
            path.touch()
    add_to_git_exclude(repo, [COMMIT_MESSAGE_FILE, COMMITIGNORE_FILE])


def commit_message_path(repo: GitRepository) -> Path:
    return repo.root / COMMIT_MESSAGE_FILE


def get_ignore_patterns(repo: GitRepository) -> list[str]:
    """Patterns of files left out of generated messages."""
    return read_pattern_file(repo.root / COMMITIGNORE_FILE)


def build_message_body(header: str, staged: list[str], deleted: list[str],
                       ignore_patterns: list[str] | None = None) -> str:
    """Header followed by one bullet per staged file, ready for editing."""
    parts = [f"{header}\n\n\n"]
    for path in filter_paths(staged, ignore_patterns or []):
        parts.append(f"- `{path}`:\n\n\t\n\n")
    for path in deleted:
        parts.append(f"- `{path}`: deleted\n\n")
    return ''.join(parts)


def write_commit_message(repo: GitRepository, content: str) -> Path:
    path = commit_message_path(repo)
    text = content if content.endswith('\n') else content + '\n'
    path.write_text(text, encoding='utf-8')
    return path


def read_commit_message(repo: GitRepository) -> str:
    path = commit_message_path(repo)
    if not path.exists():
        raise GitError(f"Commit message file '{COMMIT_MESSAGE_FILE}' not found - run 'ck generate' first")
    return path.read_text(encoding='utf-8')
