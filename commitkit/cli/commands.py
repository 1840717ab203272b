"""CLI Commands"""

import argcomplete

from commitkit import COMMIT_MESSAGE_FILE, COMMITIGNORE_FILE
from commitkit.config import Config, get_manager
from commitkit.git import (
    GitRepository,
    count_renamed,
    plan_staging,
    stageable_paths,
    staged_deletions,
    staged_paths,
    unused_patterns,
)
from commitkit.git.files import (
    build_message_body,
    create_needed_files,
    get_ignore_patterns,
    read_commit_message,
    write_commit_message,
)
from commitkit.output import (
    CHECK, bold, dim, format_list, print_error, print_success, print_warning, success, warning,
)
from commitkit.template import TemplateVariables, render, unknown_placeholders

from commitkit.cli.utils import (
    choose_config_scope,
    filter_commit_args,
    open_in_editor,
    prompt_message,
    select_commit_type,
)


def _repo(args) -> GitRepository:
    return GitRepository(verbose=args.verbose)


# ---------------------------------------------------------------------------
# add-with-exclude
# ---------------------------------------------------------------------------

def _print_dry_run_summary(plan) -> None:
    print(f"Would add {len(plan.to_add)} files:")
    for path in plan.to_add:
        print(f"  + {path}")
    print(f"Would delete {len(plan.to_remove)} files:")
    for path in plan.to_remove:
        print(f"  - {path}")
    print(f"Would exclude {len(plan.excluded)} files")


def run_add_with_exclude(args, config: Config) -> int:
    """Stage every change except paths matching the exclusion patterns."""
    repo = _repo(args)
    if args.verbose:
        print("Adding files...")

    records = repo.status()
    plan = plan_staging(records, args.patterns)

    for pattern in unused_patterns(records, args.patterns):
        print_warning(f"Pattern '{pattern}' did not match any file")

    if plan.is_empty:
        print("No files to add or delete")
        return 0

    if args.dry_run:
        _print_dry_run_summary(plan)
        return 0

    repo.stage(plan.paths)

    renamed = count_renamed(repo.status())
    print(
        f"Added {len(plan.to_add)} files, deleted {len(plan.to_remove)}, "
        f"renamed {renamed} while excluding {len(plan.excluded)} files for commit."
    )
    return 0


# ---------------------------------------------------------------------------
# commit / push
# ---------------------------------------------------------------------------

def _signing_decision(repo: GitRepository, unsigned: bool) -> tuple[bool, bool]:
    """Returns (sign, gpg_available)."""
    if unsigned:
        return False, False
    available = repo.gpg_signing_available()
    return available, available


def _print_commit_dry_run(content: str, unsigned: bool, sign: bool, extra_args: list[str]) -> None:
    print("Would commit with message:")
    print("---")
    print(content.strip())
    print("---")

    if unsigned:
        print("Would create unsigned commit")
    elif sign:
        print("Would sign commit with -S flag")
    else:
        print("Would create unsigned commit (GPG signing not available)")
        print(warning("  GPG signing not available or not configured."))
        print(dim("  To suppress this warning, use the --unsigned (-u) flag."))

    if extra_args:
        print(f"With additional args: {extra_args}")


def _print_push_dry_run(extra_args: list[str]) -> None:
    print("Would push to remote repository")
    if extra_args:
        print(f"With args: {extra_args}")


def run_commit(args, config: Config) -> int:
    """Commit with commit_message.md, signing when possible, then optionally push."""
    repo = _repo(args)
    if args.verbose:
        print("Committing files...")

    content = read_commit_message(repo)
    extra_args = filter_commit_args(args.git_args)
    sign, gpg_available = _signing_decision(repo, args.unsigned)

    if args.dry_run:
        _print_commit_dry_run(content, args.unsigned, sign, extra_args)
        if args.push:
            _print_push_dry_run([])
        return 0

    if not args.unsigned and not gpg_available:
        print_warning("GPG signing not available or not configured. Creating unsigned commit.")
        print(dim("  To suppress this warning, use the --unsigned (-u) flag."))

    repo.commit(repo.root / COMMIT_MESSAGE_FILE, sign=sign, extra_args=extra_args)

    if args.push:
        if args.verbose:
            print("\nPushing...")
        repo.push()
    return 0


def run_push(args, config: Config) -> int:
    if args.dry_run:
        _print_push_dry_run(args.git_args)
        return 0

    repo = _repo(args)
    if args.verbose:
        print("\nPushing...")
    repo.push(args.git_args)
    return 0


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------

def _warn_unknown_placeholders(template: str) -> None:
    unknown = unknown_placeholders(template)
    if unknown:
        names = ', '.join(f"{{{name}}}" for name in unknown)
        print_warning(f"Unknown template variables left as-is: {names}")


def _generate_interactive(repo: GitRepository, config: Config, commit_type: str,
                          commit_number: int | None, omit_number: bool) -> int:
    print("Interactive mode: enter your commit message.")
    print(dim("Tip: keep it concise and descriptive."))

    message = prompt_message()
    if message is None:
        print(dim("Cancelled."))
        return 0
    if not message:
        print_warning("Empty message provided. Exiting.")
        return 0

    variables = TemplateVariables.collect(
        repo, commit_type, message=message,
        commit_number=commit_number, commit_types=config.commit_types,
    )
    formatted = render(config.template, variables, omit_commit_number=omit_number)
    write_commit_message(repo, formatted)

    print()
    print_success("Commit message created!")
    print(f"  {dim('Message:')} {bold(formatted)}")
    return 0


def _generate_for_editor(args, repo: GitRepository, config: Config, commit_type: str,
                         commit_number: int | None) -> int:
    variables = TemplateVariables.collect(
        repo, commit_type, message="",
        commit_number=commit_number, commit_types=config.commit_types,
    )
    header = render(config.template, variables, omit_commit_number=args.no_commit_number).rstrip()

    records = repo.status()
    body = build_message_body(
        header,
        staged_paths(records),
        staged_deletions(records),
        get_ignore_patterns(repo),
    )
    path = write_commit_message(repo, body)
    if args.verbose:
        print(f"{path} created {success(CHECK)}")

    editor = config.resolve_editor()
    if not open_in_editor(editor, path):
        print_error(f"Editor '{editor}' exited with an error - {COMMIT_MESSAGE_FILE} was kept")
        return 1
    return 0


def run_generate(args, config: Config) -> int:
    """Pick a commit type and write commit_message.md from the template."""
    if args.dry_run:
        print(f"Would create files: {COMMIT_MESSAGE_FILE}, {COMMITIGNORE_FILE}")
        print("Would add files to .git/info/exclude")
        return 0

    repo = _repo(args)
    create_needed_files(repo)

    commit_type = select_commit_type(config.commit_types)
    if commit_type is None:
        print(dim("Cancelled."))
        return 0

    _warn_unknown_placeholders(config.template)
    commit_number = None if args.no_commit_number else repo.commit_count() + 1

    if args.interactive:
        return _generate_interactive(repo, config, commit_type, commit_number, args.no_commit_number)
    return _generate_for_editor(args, repo, config, commit_type, commit_number)


# ---------------------------------------------------------------------------
# list-status
# ---------------------------------------------------------------------------

def run_list_status(args, config: Config) -> int:
    """Print stageable files, one per line, for shell completion."""
    repo = _repo(args)
    for path in stageable_paths(repo.status()):
        print(path)
    return 0


# ---------------------------------------------------------------------------
# init / set-editor
# ---------------------------------------------------------------------------

def _resolve_scope(args, action: str) -> bool | None:
    if args.global_config is not None:
        return args.global_config
    return choose_config_scope(action)


def run_init(args, config: Config) -> int:
    """Create a config file holding the editor and the default settings."""
    if args.dry_run:
        print(f"Would create config file with editor: {args.editor}")
        return 0

    global_config = _resolve_scope(args, "initialize the config")
    if global_config is None:
        print(dim("Cancelled."))
        return 0

    path = get_manager().create(args.editor, global_config=global_config)
    print_success(f"Config created at {path}")
    return 0


def run_set_editor(args, config: Config) -> int:
    if args.dry_run:
        print(f"Would set editor to: {args.editor}")
        return 0

    global_config = _resolve_scope(args, "set the editor")
    if global_config is None:
        print(dim("Cancelled."))
        return 0

    path = get_manager().set_editor(args.editor, global_config=global_config)
    print_success(f"Editor set in: {path}")
    return 0


# ---------------------------------------------------------------------------
# completion
# ---------------------------------------------------------------------------

def run_completion(args) -> int:
    """Print the argcomplete registration script for the given shell."""
    print(argcomplete.shellcode(['ck'], shell=args.shell))
    return 0


def display_config(config: Config, paths) -> str:
    """Summary of the effective configuration, used by --verbose."""
    loaded = ', '.join(str(p) for p in paths) if paths else "defaults (no .ckrc found)"
    lines = [
        f"{dim('Loaded from:')} {loaded}",
        f"{dim('editor:')}       {config.resolve_editor()}",
        f"{dim('template:')}     {config.template}",
        f"{dim('commit types:')}",
        format_list(config.commit_types),
    ]
    return '\n'.join(lines)
