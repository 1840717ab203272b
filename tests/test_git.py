"""
Integration tests against a real git binary in a throwaway repository.

Run with:
    pytest tests/test_git.py -v
"""

import shutil
import subprocess

import pytest

from commitkit.cli.main import main
from commitkit.config import ConfigManager
from commitkit.git import GitError, GitRepository, plan_staging
from commitkit.git.files import add_to_git_exclude, EXCLUDE_MARKER

pytestmark = pytest.mark.skipif(shutil.which('git') is None, reason="git is not installed")


def _git(cwd, *args):
    subprocess.run(['git', *args], cwd=cwd, check=True, capture_output=True)


@pytest.fixture
def repo_dir(tmp_path, monkeypatch):
    """Fresh repository on branch main, isolated from the user's git config."""
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.setenv('GIT_CONFIG_NOSYSTEM', '1')
    work = tmp_path / "work"
    work.mkdir()
    _git(work, 'init')
    _git(work, 'symbolic-ref', 'HEAD', 'refs/heads/main')
    _git(work, 'config', 'user.name', 'Test Author')
    _git(work, 'config', 'user.email', 'test@example.com')
    _git(work, 'config', 'commit.gpgsign', 'false')
    return work


class TestGitRepository:

    def test_outside_repository(self, tmp_path, monkeypatch):
        monkeypatch.setenv('GIT_CEILING_DIRECTORIES', str(tmp_path))
        outside = tmp_path / "plain"
        outside.mkdir()
        with pytest.raises(GitError, match="Not inside a git repository"):
            GitRepository(cwd=outside)

    def test_fresh_repository(self, repo_dir):
        repo = GitRepository(cwd=repo_dir)
        assert repo.commit_count() == 0
        assert repo.current_branch() == "main"
        assert repo.author() == ("Test Author", "test@example.com")
        assert repo.status() == []

    def test_status_from_subdirectory(self, repo_dir):
        (repo_dir / "sub").mkdir()
        (repo_dir / "sub" / "a.txt").write_text("a\n")
        (repo_dir / "top.txt").write_text("t\n")

        repo = GitRepository(cwd=repo_dir / "sub")
        paths = sorted(r.path for r in repo.status())
        assert paths == ["sub/a.txt", "top.txt"]

    def test_stage_with_exclusions_and_commit(self, repo_dir, capsys):
        (repo_dir / "app.py").write_text("print('hi')\n")
        (repo_dir / "build").mkdir()
        (repo_dir / "build" / "out.o").write_text("bin\n")
        (repo_dir / "debug.log").write_text("log\n")

        repo = GitRepository(cwd=repo_dir)
        plan = plan_staging(repo.status(), ["build/", "*.log"])
        assert plan.to_add == ["app.py"]

        repo.stage(plan.paths)
        by_path = {r.path: r for r in repo.status()}
        assert by_path["app.py"].index_status == 'A'
        assert by_path["debug.log"].is_untracked

        message = repo_dir / "commit_message.md"
        message.write_text("[1] (feat on main) Add app\n")
        repo.commit(message, sign=False)

        assert repo.commit_count() == 1
        log = subprocess.run(['git', 'log', '-1', '--format=%s'], cwd=repo_dir,
                             capture_output=True, text=True).stdout.strip()
        assert log == "[1] (feat on main) Add app"

    def test_paths_with_spaces(self, repo_dir):
        (repo_dir / "my notes.txt").write_text("n\n")
        (repo_dir / "app.py").write_text("a\n")

        repo = GitRepository(cwd=repo_dir)
        assert sorted(r.path for r in repo.status()) == ["app.py", "my notes.txt"]

        plan = plan_staging(repo.status(), ["*.py"])
        assert plan.to_add == ["my notes.txt"]

        repo.stage(plan.paths)
        by_path = {r.path: r for r in repo.status()}
        assert by_path["my notes.txt"].index_status == 'A'
        assert by_path["app.py"].is_untracked

    def test_add_with_exclude_command_with_spaces(self, repo_dir, monkeypatch, capsys):
        monkeypatch.chdir(repo_dir)
        monkeypatch.setattr('commitkit.config._manager', ConfigManager())
        (repo_dir / "my notes.txt").write_text("n\n")
        (repo_dir / "debug.log").write_text("l\n")

        assert main(["a", "*.log"]) == 0
        assert "Added 1 files" in capsys.readouterr().out

    def test_staging_deletions_and_renames(self, repo_dir):
        (repo_dir / "keep.txt").write_text("k\n")
        (repo_dir / "gone.txt").write_text("g\n")
        _git(repo_dir, 'add', '.')
        _git(repo_dir, 'commit', '-m', 'init')
        _git(repo_dir, 'mv', 'keep.txt', 'kept.txt')
        (repo_dir / "gone.txt").unlink()

        repo = GitRepository(cwd=repo_dir)
        plan = plan_staging(repo.status(), [])
        assert plan.to_remove == ["gone.txt"]

        repo.stage(plan.paths)
        records = repo.status()
        assert any(r.is_renamed and r.renamed_from == "keep.txt" for r in records)
        assert any(r.deleted_in_index and r.path == "gone.txt" for r in records)

    def test_failed_command_raises(self, repo_dir, capsys):
        repo = GitRepository(cwd=repo_dir)
        with pytest.raises(GitError, match="Git push failed"):
            repo.push()
        assert "Git push failed:" in capsys.readouterr().out

    def test_exclude_file(self, repo_dir):
        repo = GitRepository(cwd=repo_dir)
        assert add_to_git_exclude(repo, ["commit_message.md"]) == ["commit_message.md"]
        assert add_to_git_exclude(repo, ["commit_message.md"]) == []

        content = (repo_dir / ".git" / "info" / "exclude").read_text()
        assert EXCLUDE_MARKER in content

        (repo_dir / "commit_message.md").write_text("x\n")
        assert repo.status() == []
