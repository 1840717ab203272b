"""CLI Argument Parsing"""

import argparse
import sys

import argcomplete

from commitkit import __version__
from commitkit.git import GitRepository, GitError, stageable_paths

SHELLS = ['bash', 'zsh', 'fish', 'tcsh', 'powershell']

# Flags `commit` and `push` understand themselves; anything after the first
# other token goes to git untouched
PASSTHROUGH_FLAGS = {
    'commit': {'-p', '--push', '-u', '--unsigned', '--dry-run', '-h', '--help'},
    'push': {'--dry-run', '-h', '--help'},
}
PASSTHROUGH_FLAGS['c'] = PASSTHROUGH_FLAGS['commit']
PASSTHROUGH_FLAGS['p'] = PASSTHROUGH_FLAGS['push']

GLOBAL_OPTIONS_WITH_VALUE = {'--config'}


def _is_own_flag(token: str, own_flags: set[str]) -> bool:
    """Exact flag, or a cluster like `-pu` made only of our short flags."""
    if token in own_flags:
        return True
    if len(token) < 3 or token[0] != '-' or token[1] == '-':
        return False
    short = {flag[1] for flag in own_flags if len(flag) == 2 and flag[1] != '-'}
    return all(letter in short for letter in token[1:])


def mark_passthrough(argv: list[str]) -> list[str]:
    """Insert `--` where git passthrough arguments start.

    `ck commit --push --amend` keeps --push for us, while
    `ck commit --amend --push` hands both flags to git.
    """
    argv = list(argv)
    i = 0
    while i < len(argv):
        token = argv[i]
        if token == '--':
            return argv
        if token in GLOBAL_OPTIONS_WITH_VALUE:
            i += 2
            continue
        if token.startswith('-'):
            i += 1
            continue
        break

    if i >= len(argv) or argv[i] not in PASSTHROUGH_FLAGS:
        return argv

    own_flags = PASSTHROUGH_FLAGS[argv[i]]
    j = i + 1
    while j < len(argv) and _is_own_flag(argv[j], own_flags):
        j += 1
    if j >= len(argv) or argv[j] == '--':
        return argv
    return argv[:j] + ['--'] + argv[j:]


def _status_completer(prefix, **kwargs):
    """Complete exclusion patterns with paths from git status."""
    try:
        repo = GitRepository()
        return [path for path in stageable_paths(repo.status()) if path.startswith(prefix)]
    except GitError:
        return []


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ck',
        description='Stage with exclusions, generate templated commit messages, commit and push',
        epilog='All commands that change something support --dry-run to preview.'
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show detailed information about operations')
    parser.add_argument('--config', type=str, metavar='PATH', help='Use this config file instead of ./.ckrc')

    subparsers = parser.add_subparsers(dest='command_name', metavar='COMMAND', required=True)

    # Staging
    add = subparsers.add_parser('add-with-exclude', aliases=['a'], help='Stage all changes except the given patterns')
    patterns = add.add_argument('patterns', nargs='*', metavar='PATTERNS', help='Glob patterns to exclude (e.g. "*.log" "target/")')
    patterns.completer = _status_completer
    add.add_argument('--dry-run', action='store_true', help='Show what would be staged without staging')
    add.set_defaults(command='add-with-exclude')

    # Commit / push
    commit = subparsers.add_parser('commit', aliases=['c'], help='Commit with the text of commit_message.md')
    commit.add_argument('-p', '--push', action='store_true', help='Push after committing')
    commit.add_argument('-u', '--unsigned', action='store_true', help='Create an unsigned commit (default: sign when GPG is available)')
    commit.add_argument('--dry-run', action='store_true', help='Show what would be committed without committing')
    commit.add_argument('git_args', nargs='*', metavar='ARGS', help='Extra arguments for git commit')
    commit.set_defaults(command='commit')

    push = subparsers.add_parser('push', aliases=['p'], help='Push to the remote repository')
    push.add_argument('--dry-run', action='store_true', help='Show what would be pushed without pushing')
    push.add_argument('git_args', nargs='*', metavar='ARGS', help='Extra arguments for git push')
    push.set_defaults(command='push')

    # Message generation
    generate = subparsers.add_parser('generate', aliases=['g'], help='Generate commit_message.md')
    generate.add_argument('-i', '--interactive', action='store_true', help='Type the message in the terminal instead of the editor')
    generate.add_argument('-n', '--no-commit-number', action='store_true', help='Leave the commit number out of the message')
    generate.add_argument('--dry-run', action='store_true', help='Show what would be generated without writing files')
    generate.set_defaults(command='generate')

    listing = subparsers.add_parser('list-status', aliases=['l'], help='List files from git status (for completion)')
    listing.set_defaults(command='list-status')

    # Setup/config
    init = subparsers.add_parser('init', aliases=['i'], help='Create a configuration file')
    init.add_argument('editor', nargs='?', default='nano', metavar='EDITOR', help='Editor for commit messages (default: nano)')
    init.add_argument('--dry-run', action='store_true', help='Show what would be created without writing')
    scope = init.add_mutually_exclusive_group()
    scope.add_argument('--global', dest='global_config', action='store_true', default=None, help='Write ~/.ckrc')
    scope.add_argument('--project', dest='global_config', action='store_false', default=None, help='Write ./.ckrc')
    init.set_defaults(command='init')

    set_editor = subparsers.add_parser('set-editor', aliases=['s'], help='Set the editor used for commit messages')
    set_editor.add_argument('editor', metavar='EDITOR', help='Editor command, e.g. vim or "code --wait"')
    set_editor.add_argument('--dry-run', action='store_true', help='Show what would change without writing')
    scope = set_editor.add_mutually_exclusive_group()
    scope.add_argument('--global', dest='global_config', action='store_true', default=None, help='Update ~/.ckrc')
    scope.add_argument('--project', dest='global_config', action='store_false', default=None, help='Update ./.ckrc')
    set_editor.set_defaults(command='set-editor')

    completion = subparsers.add_parser('completion', help='Print the shell completion script')
    completion.add_argument('shell', choices=SHELLS, help='Shell to generate completions for')
    completion.set_defaults(command='completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(mark_passthrough(sys.argv[1:] if argv is None else argv))
