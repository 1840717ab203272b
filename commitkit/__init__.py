"""
commitkit

Stage with exclusions, generate templated commit messages and commit from the
command line.
"""

__version__ = "1.0.0"

# Default commit types - used when the config does not define its own list
# Used by: config (defaults), template (branch formatting), cli (type prompt)
COMMIT_TYPES = {
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
    'docs': 'Documentation only changes',
    'test': 'Adding or updating tests',
    'chore': 'Maintenance tasks, dependencies, tooling',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())

# Files written at the repository root by `ck generate`
COMMIT_MESSAGE_FILE = "commit_message.md"
COMMITIGNORE_FILE = ".commitignore"
