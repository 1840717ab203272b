"""Template Engine - Render commit messages from `{placeholder}` templates."""

import re
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Mapping, Optional, Union

from commitkit import COMMIT_TYPE_NAMES

DEFAULT_TEMPLATE = "[{commit_number}] ({commit_type} on {branch_name}) {message}"

TEMPLATE_KEYS = (
    "commit_number",
    "commit_type",
    "branch_name",
    "message",
    "date",
    "time",
    "author",
    "email",
)

PLACEHOLDER = re.compile(r'\{([A-Za-z_][A-Za-z0-9_]*)\}')

# Decorations removed together with {commit_number} when it is omitted.
# Bracketed forms come before the bare `#?` form in the alternation, so
# "(#{commit_number})" goes as a whole instead of leaving "()" behind
_DECORATIONS = [('[', ']'), ('(', ')'), ('<', '>')]
_NUMBER_TOKEN = r'\{commit_number\}'
_DECORATED_NUMBER = re.compile(
    r'(?P<lead>[ \t]*)(?:'
    + '|'.join(
        re.escape(opener) + '#?' + _NUMBER_TOKEN + re.escape(closer)
        for opener, closer in _DECORATIONS
    )
    + r'|#?' + _NUMBER_TOKEN
    + r')(?P<trail>[ \t]*)'
)


@dataclass
class TemplateVariables:
    """Values available to a template. None renders as an empty string."""
    commit_number: Optional[int] = None
    commit_type: Optional[str] = None
    branch_name: Optional[str] = None
    message: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    author: Optional[str] = None
    email: Optional[str] = None

    def to_map(self) -> dict[str, str]:
        return {k: "" if v is None else str(v) for k, v in asdict(self).items()}

    @classmethod
    def collect(cls, repo, commit_type: str, message: str = "",
                commit_number: Optional[int] = None, commit_types=None,
                now: Optional[datetime] = None) -> 'TemplateVariables':
        """Fill branch, identity and timestamp from the repository and clock."""
        now = now or datetime.now()
        author, email = repo.author()
        return cls(
            commit_number=commit_number,
            commit_type=commit_type,
            branch_name=format_branch_name(repo.current_branch(), commit_types),
            message=message,
            date=now.strftime("%Y-%m-%d"),
            time=now.strftime("%H:%M:%S"),
            author=author,
            email=email,
        )


Variables = Union[TemplateVariables, Mapping[str, object]]


def _as_map(variables: Variables) -> dict[str, str]:
    if isinstance(variables, TemplateVariables):
        return variables.to_map()
    return {
        key: "" if variables.get(key) is None else str(variables.get(key))
        for key in TEMPLATE_KEYS
    }


def _has_commit_number(variables: Variables) -> bool:
    if isinstance(variables, TemplateVariables):
        value = variables.commit_number
    else:
        value = variables.get("commit_number")
    return value is not None and str(value) != ""


def strip_commit_number(template: str) -> str:
    """Remove `{commit_number}` with its brackets and one adjacent run of spaces."""
    def _replace(match: re.Match) -> str:
        text = match.string
        before = text[:match.start()]
        after = text[match.end():]
        has_before = bool(before) and not before.endswith('\n')
        has_after = bool(after) and not after.startswith('\n')
        if has_before and has_after:
            return match.group('lead') or match.group('trail')
        return ""

    return _DECORATED_NUMBER.sub(_replace, template)


def render(template: str, variables: Variables, omit_commit_number: bool = False) -> str:
    """Substitute known placeholders in a single left-to-right pass.

    Unknown placeholders are kept verbatim, known ones without a value become
    empty strings. Inserted values are never re-scanned. When the commit number
    is omitted (explicitly or because it has no value) its decoration goes too.
    """
    if omit_commit_number or not _has_commit_number(variables):
        template = strip_commit_number(template)

    values = _as_map(variables)

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        if name in values:
            return values[name]
        return match.group(0)

    return PLACEHOLDER.sub(_substitute, template)


def unknown_placeholders(template: str) -> list[str]:
    """Placeholder names outside the supported set, first appearance order."""
    unknown = []
    for name in PLACEHOLDER.findall(template):
        if name not in TEMPLATE_KEYS and name not in unknown:
            unknown.append(name)
    return unknown


def format_branch_name(branch: str, commit_types=None) -> str:
    """Drop `<type>/` prefixes such as `feat/` from a branch name."""
    formatted = branch
    for commit_type in commit_types or COMMIT_TYPE_NAMES:
        formatted = formatted.replace(f"{commit_type}/", "")
    return formatted
