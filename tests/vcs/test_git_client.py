import subprocess
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

from commit_body.grouping.group_model import ChangeKind
from commit_body.vcs.git_client import FileChange, GitClient, GitError, status_to_kind


class DummyProc(SimpleNamespace):
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


class TestGetChanges(unittest.TestCase):
    def test_get_changes_parses_porcelain_z(self) -> None:
        output = "\0".join(
            [
                "M  modified_file.py",
                " M unstaged_only.py",
                "A  added_file.py",
                "D  deleted_file.py",
                "R  renamed_new.py",
                "renamed_old.py",
                "C  copy.py",
                "original.py",
                "UU conflicted.py",
                "?? untracked.txt",
                "",
            ]
        )

        def fake_run(self, args, check=True):
            if args[0] == "status":
                return DummyProc(returncode=0, stdout=output, stderr="")
            raise AssertionError(f"Unexpected git command: {args}")

        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            changes = GitClient(Path("/repo")).get_changes()

        self.assertEqual(
            changes,
            [
                FileChange("modified_file.py", ChangeKind.MODIFIED),
                FileChange("unstaged_only.py", ChangeKind.OTHER),
                FileChange("added_file.py", ChangeKind.ADDED),
                FileChange("deleted_file.py", ChangeKind.DELETED),
                FileChange("renamed_new.py", ChangeKind.RENAMED),
                FileChange("copy.py", ChangeKind.COPIED),
                FileChange("conflicted.py", ChangeKind.OTHER),
                FileChange("untracked.txt", ChangeKind.UNTRACKED),
            ],
        )

    def test_get_changes_empty_status(self) -> None:
        with patch.object(GitClient, "_run", return_value=DummyProc(stdout="")):
            self.assertEqual(GitClient(Path("/repo")).get_changes(), [])

    def test_get_changes_propagates_git_error(self) -> None:
        with patch.object(GitClient, "_run", side_effect=GitError("fatal: not a git repository")):
            with self.assertRaises(GitError):
                GitClient(Path("/repo")).get_changes()

    def test_status_to_kind(self) -> None:
        self.assertEqual(status_to_kind("M"), ChangeKind.MODIFIED)
        self.assertEqual(status_to_kind("?"), ChangeKind.UNTRACKED)
        self.assertEqual(status_to_kind(" "), ChangeKind.OTHER)
        self.assertEqual(status_to_kind("T"), ChangeKind.OTHER)


class TestCurrentBranch(unittest.TestCase):
    def test_branch_from_rev_parse(self) -> None:
        calls = []

        def fake_run(self, args, check=True):
            calls.append(args)
            return DummyProc(returncode=0, stdout="feature/login\n")

        with patch.object(GitClient, "_run", autospec=True, side_effect=fake_run):
            self.assertEqual(GitClient(Path("/repo")).get_current_branch(), "feature/login")
        self.assertEqual(calls, [["rev-parse", "--abbrev-ref", "HEAD"]])

    def test_unborn_branch_falls_back_to_symbolic_ref(self) -> None:
        def fake_run(self, args, check=True):
            if args[0] == "rev-parse":
                return DummyProc(returncode=128, stdout="HEAD\n", stderr="ambiguous argument 'HEAD'")
            return DummyProc(returncode=0, stdout="main\n")

        with patch.object(GitClient, "_run", autospec=True, side_effect=fake_run):
            self.assertEqual(GitClient(Path("/repo")).get_current_branch(), "main")

    def test_unresolvable_branch_raises(self) -> None:
        def fake_run(self, args, check=True):
            if args[0] == "rev-parse":
                return DummyProc(returncode=128, stdout="", stderr="bad")
            raise GitError("fatal: ref HEAD is not a symbolic ref")

        with patch.object(GitClient, "_run", autospec=True, side_effect=fake_run):
            with self.assertRaises(GitError):
                GitClient(Path("/repo")).get_current_branch()


class TestRun(unittest.TestCase):
    def test_run_raises_on_failure(self) -> None:
        proc = subprocess.CompletedProcess(["git", "status"], 128, stdout="", stderr="fatal: not a git repository")
        with patch("commit_body.vcs.git_client.subprocess.run", return_value=proc):
            with self.assertRaises(GitError) as ctx:
                GitClient(Path("/repo"))._run(["status"])
        self.assertIn("not a git repository", str(ctx.exception))

    def test_run_unchecked_returns_result(self) -> None:
        proc = subprocess.CompletedProcess(["git", "x"], 1, stdout="out", stderr="")
        with patch("commit_body.vcs.git_client.subprocess.run", return_value=proc):
            self.assertIs(GitClient(Path("/repo"))._run(["x"], check=False), proc)

    def test_missing_git_executable(self) -> None:
        with patch("commit_body.vcs.git_client.subprocess.run", side_effect=FileNotFoundError("git")):
            with self.assertRaises(GitError):
                GitClient(Path("/repo"))._run(["status"])


class TestFindRepoRoot(unittest.TestCase):
    def test_finds_root_from_nested_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".git").mkdir()
            nested = root / "a" / "b"
            nested.mkdir(parents=True)
            self.assertEqual(GitClient.find_repo_root(nested), root)
            self.assertTrue(GitClient.is_repo(root))
            self.assertFalse(GitClient.is_repo(nested))

    def test_returns_none_outside_repository(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with patch("pathlib.Path.exists", return_value=False):
                self.assertIsNone(GitClient.find_repo_root(Path(tmp)))


if __name__ == "__main__":
    unittest.main()
