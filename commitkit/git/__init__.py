"""Git Operations Package"""

from commitkit.git.repository import GitRepository, GitError
from commitkit.git.status import (
    FileChangeRecord,
    parse_status,
    stageable_paths,
    deletions_to_stage,
    staged_paths,
    staged_deletions,
    count_renamed,
)
from commitkit.git.staging import (
    ExclusionPattern,
    StagingPlan,
    matches,
    select_files_to_stage,
    unused_patterns,
    plan_staging,
)

__all__ = [
    "GitRepository",
    "GitError",
    "FileChangeRecord",
    "parse_status",
    "stageable_paths",
    "deletions_to_stage",
    "staged_paths",
    "staged_deletions",
    "count_renamed",
    "ExclusionPattern",
    "StagingPlan",
    "matches",
    "select_files_to_stage",
    "unused_patterns",
    "plan_staging",
]
