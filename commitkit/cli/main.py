# PYTHON_ARGCOMPLETE_OK
"""CLI Main Entry Point"""

from pathlib import Path

from commitkit.config import ConfigError, configure, get_config_paths, load_config
from commitkit.git import GitError
from commitkit.output import dim, print_error

from commitkit.cli.args import parse_args
from commitkit.cli.commands import (
    display_config,
    run_add_with_exclude,
    run_commit,
    run_completion,
    run_generate,
    run_init,
    run_list_status,
    run_push,
    run_set_editor,
)

COMMANDS = {
    'add-with-exclude': run_add_with_exclude,
    'commit': run_commit,
    'generate': run_generate,
    'init': run_init,
    'list-status': run_list_status,
    'push': run_push,
    'set-editor': run_set_editor,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    # Completion scripts need neither git nor config
    if args.command == 'completion':
        return run_completion(args)

    if args.config:
        configure(Path(args.config))
    config = load_config()

    if args.verbose and args.command != 'list-status':
        print(display_config(config, get_config_paths()))
        print()

    handler = COMMANDS[args.command]
    try:
        return handler(args, config)
    except (GitError, ConfigError) as e:
        print_error(str(e))
        return 1
    except (KeyboardInterrupt, EOFError):
        print()
        print(dim("Cancelled."))
        return 0
