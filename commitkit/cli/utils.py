"""CLI Utility Functions"""

import shlex
import subprocess
import sys
from pathlib import Path

from commitkit.output import bold, dim, info, colorize_commit_type


def filter_commit_args(args: list[str]) -> list[str]:
    """Drop arguments that would fight with our own commit message."""
    return [arg for arg in args if not arg.startswith('-c') and not arg.startswith('--commit')]


def display_options(options: list[str], prompt: str) -> int | None:
    """Show numbered options and return the chosen index (None on quit)."""
    print()
    print(bold(prompt))
    for i, opt in enumerate(options, 1):
        print(f"  {info(f'[{i}]')} {colorize_commit_type(opt)}")

    print()
    while True:
        try:
            choice = input(f"Select [1-{len(options)}] or (q)uit: ").strip().lower()
        except (KeyboardInterrupt, EOFError):
            print()
            return None
        if choice == 'q':
            return None
        if choice == '' and options:
            return 0
        try:
            idx = int(choice) - 1
            if 0 <= idx < len(options):
                return idx
        except ValueError:
            pass
        print(f"Enter 1-{len(options)} or q")


def select_commit_type(commit_types: list[str]) -> str | None:
    idx = display_options(commit_types, "Select commit type")
    return None if idx is None else commit_types[idx]


def choose_config_scope(action: str) -> bool | None:
    """Ask whether to write the project or the global config.

    Returns True for global, False for project, None when cancelled.
    Without a terminal the project config is used.
    """
    if not sys.stdin.isatty():
        return False
    options = ["Project (./.ckrc)", "Global (~/.ckrc)"]
    idx = display_options(options, f"Where do you want to {action}?")
    if idx is None:
        return None
    return idx == 1


def prompt_message() -> str | None:
    """Read a one-line commit message. None when cancelled."""
    try:
        return input(f"{bold('Message')}: ").strip()
    except (KeyboardInterrupt, EOFError):
        print()
        return None


def open_in_editor(editor: str, path: Path) -> bool:
    """Open a file in the user's editor and wait. Returns False if it could not run."""
    command = shlex.split(editor) or [editor]
    try:
        result = subprocess.run([*command, str(path)])
    except OSError as e:
        print(dim(f"  Could not launch editor '{editor}': {e}"), file=sys.stderr)
        return False
    return result.returncode == 0
