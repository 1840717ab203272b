"""Commit Message Template Package"""

from commitkit.template.engine import (
    DEFAULT_TEMPLATE,
    TEMPLATE_KEYS,
    TemplateVariables,
    render,
    strip_commit_number,
    unknown_placeholders,
    format_branch_name,
)

__all__ = [
    "DEFAULT_TEMPLATE",
    "TEMPLATE_KEYS",
    "TemplateVariables",
    "render",
    "strip_commit_number",
    "unknown_placeholders",
    "format_branch_name",
]
