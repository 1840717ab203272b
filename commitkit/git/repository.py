"""Git Repository - Thin wrapper around the git binary."""

import subprocess
from pathlib import Path
from typing import Optional

from commitkit.git.status import FileChangeRecord, parse_status
from commitkit.output import dim


class GitError(Exception):
    """Raised when git operations fail."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.stderr = stderr


def format_git_output(text: str) -> str:
    """Frame command output between dashed rules, dropping blank lines."""
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    body = '\n'.join(lines) if lines else "No additional information provided."
    rule = '-' * 19
    return f"{rule}\n{body}\n{rule}"


class GitRepository:
    """The git work tree the current directory belongs to."""

    def __init__(self, cwd: Optional[Path] = None, verbose: bool = False):
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self.verbose = verbose
        self._verify_git_available()
        self.root = self._find_root()

    def _run_git(self, *args: str, cwd: Optional[Path] = None, check: bool = True) -> subprocess.CompletedProcess:
        """Run a git command and return the completed process."""
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                cwd=cwd or self.cwd,
                encoding='utf-8',
                errors='replace'
            )
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

        if check and result.returncode != 0:
            command = f"git {' '.join(args)}"
            raise GitError(f"Git command failed: {command}\n{result.stderr.strip()}",
                           command=command, stderr=result.stderr)
        return result

    def _git(self, *args: str) -> str:
        """Run a git command and return stripped stdout."""
        return self._run_git(*args).stdout.strip()

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _find_root(self) -> Path:
        """Fail fast if we're not in a git work tree."""
        try:
            return Path(self._git('rev-parse', '--show-toplevel'))
        except GitError:
            raise GitError("Not inside a git repository - run this command from within a git work tree")

    @property
    def git_dir(self) -> Path:
        return Path(self._git('rev-parse', '--absolute-git-dir'))

    # ----- read-only queries ---------------------------------------------

    def status_text(self) -> str:
        """Short-format status of the whole work tree."""
        result = self._run_git(
            '-c', 'core.quotePath=false',
            'status', '--porcelain', '--untracked-files=all',
            cwd=self.root,
        )
        return result.stdout

    def status(self) -> list[FileChangeRecord]:
        return parse_status(self.status_text())

    def config_value(self, key: str) -> Optional[str]:
        """`git config --get`, None when the key is unset."""
        result = self._run_git('config', '--get', key, check=False)
        value = result.stdout.strip()
        return value if result.returncode == 0 and value else None

    def author(self) -> tuple[str, str]:
        """Configured (name, email); empty strings when missing."""
        return self.config_value('user.name') or "", self.config_value('user.email') or ""

    def has_commits(self) -> bool:
        return self._run_git('rev-parse', '--verify', '--quiet', 'HEAD', check=False).returncode == 0

    def commit_count(self) -> int:
        """Number of commits reachable from HEAD (0 in a fresh repository)."""
        if not self.has_commits():
            return 0
        return int(self._git('rev-list', '--count', 'HEAD'))

    def current_branch(self) -> str:
        """Short branch name, `HEAD` when detached."""
        result = self._run_git('symbolic-ref', '--quiet', '--short', 'HEAD', check=False)
        branch = result.stdout.strip()
        if result.returncode == 0 and branch:
            return branch
        if self.has_commits():
            return "HEAD"
        return self.config_value('init.defaultBranch') or "main"

    def gpg_signing_available(self) -> bool:
        """Signing key configured and a working gpg to use it."""
        signing_key = self.config_value('user.signingkey')
        if not signing_key:
            return False

        if _command_succeeds(['gpg', '--list-secret-keys', signing_key]):
            return True

        gpg_program = self.config_value('gpg.program')
        if gpg_program and _command_succeeds([gpg_program, '--version']):
            return True

        return _command_succeeds(['gpg', '--version'])

    # ----- commands with side effects ------------------------------------

    def run_command(self, name: str, *args: str) -> str:
        """Run a user-facing git command, echoing its output.

        Raises GitError after printing git's stderr if the command fails.
        """
        result = self._run_git(*args, cwd=self.root, check=False)
        if result.returncode != 0:
            print(f"\nGit {name} failed:")
            print(dim(format_git_output(result.stderr)))
            raise GitError(f"Git {name} failed", command=f"git {' '.join(args)}", stderr=result.stderr)

        if self.verbose:
            print(f"{name} successful!")
        output = result.stdout.strip()
        if output:
            print(output)
        return output

    def stage(self, paths: list[str]) -> None:
        """Stage all paths (additions and deletions) with a single `git add`."""
        if not paths:
            return
        self.run_command("add", 'add', '--', *paths)

    def commit(self, message_file: Path, sign: bool = False, extra_args: Optional[list[str]] = None) -> None:
        args = ['commit']
        if sign:
            args.append('-S')
        args += ['-F', str(message_file)]
        args += extra_args or []
        self.run_command("commit", *args)

    def push(self, extra_args: Optional[list[str]] = None) -> None:
        self.run_command("push", 'push', *(extra_args or []))


def _command_succeeds(command: list[str]) -> bool:
    try:
        return subprocess.run(command, capture_output=True).returncode == 0
    except OSError:
        return False
