# test_data_sources.py
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

from github import GithubException

from data_sources.factory import get_data_source, is_remote_url
from data_sources.github_api import GitHubAPIDataSource
from data_sources.local_git import LocalGitDataSource
from config import GlobalConfig
from errors import LogFetchError, UsageError
from test_git_utils import make_context


def fake_commit(when: datetime, message: str) -> MagicMock:
    commit = MagicMock()
    commit.commit.author.date = when
    commit.commit.message = message
    return commit


class TestFactory(unittest.TestCase):

    def test_remote_url_detection(self):
        self.assertTrue(is_remote_url("https://github.com/owner/repo"))
        self.assertTrue(is_remote_url("git@github.com:owner/repo.git"))
        self.assertFalse(is_remote_url("/home/me/repo"))

    def test_local_path_uses_git(self):
        source = get_data_source(make_context(repo_path="/tmp/repo"))
        self.assertIsInstance(source, LocalGitDataSource)

    def test_url_uses_github(self):
        source = get_data_source(make_context(repo_path="https://github.com/o/r"))
        self.assertIsInstance(source, GitHubAPIDataSource)


class TestLocalGitDataSource(unittest.TestCase):

    @patch("data_sources.local_git.git_utils.get_git_log")
    def test_daily_logs_are_grouped(self, mock_log):
        mock_log.return_value = "2024-06-03 - fix bug\n2024-06-03 - add test\n"
        source = LocalGitDataSource(make_context())
        self.assertEqual(source.get_daily_logs(), {"2024-06-03": ["fix bug", "add test"]})

    def test_missing_path_is_invalid(self):
        source = LocalGitDataSource(make_context(repo_path="/nonexistent/repo/path"))
        self.assertFalse(source.validate())


class TestGitHubAPIDataSource(unittest.TestCase):

    def setUp(self):
        self.source = GitHubAPIDataSource(
            make_context(repo_path="https://github.com/owner/repo.git")
        )
        self.source.client = MagicMock()
        self.source.tz = timezone.utc

    def test_parse_repo_name(self):
        self.assertEqual(
            self.source._parse_repo_name("https://github.com/owner/repo.git"),
            "owner/repo",
        )
        self.assertEqual(
            self.source._parse_repo_name("git@github.com:owner/repo.git"), "owner/repo"
        )

    def test_validate_connects_to_repo(self):
        self.assertTrue(self.source.validate())
        self.source.client.get_repo.assert_called_once_with("owner/repo")

    def test_validate_failure(self):
        self.source.client.get_repo.side_effect = GithubException(
            404, {"message": "Not Found"}, None
        )
        self.assertFalse(self.source.validate())

    def test_commits_are_rendered_oldest_first(self):
        repo = MagicMock()
        repo.get_commits.return_value = [
            fake_commit(datetime(2024, 6, 4, 9, tzinfo=timezone.utc), "refactor"),
            fake_commit(
                datetime(2024, 6, 3, 15, tzinfo=timezone.utc), "add test\n\nmore detail"
            ),
            fake_commit(datetime(2024, 6, 3, 10, tzinfo=timezone.utc), "fix bug"),
        ]
        self.source.repo = repo

        self.assertEqual(
            self.source.get_daily_logs(),
            {"2024-06-03": ["fix bug", "add test"], "2024-06-04": ["refactor"]},
        )
        kwargs = repo.get_commits.call_args[1]
        self.assertEqual(kwargs["author"], "Jane Doe")
        self.assertEqual(kwargs["since"], datetime(2024, 6, 1, tzinfo=timezone.utc))

    def test_commit_dates_use_configured_timezone(self):
        self.source.tz = timezone(timedelta(hours=10))
        repo = MagicMock()
        # 周一 08:00 (UTC+10) 的提交，UTC 时间仍是周日
        repo.get_commits.return_value = [
            fake_commit(datetime(2024, 6, 2, 22, tzinfo=timezone.utc), "early fix")
        ]
        self.source.repo = repo

        self.assertEqual(self.source.get_daily_logs(), {"2024-06-03": ["early fix"]})
        self.assertEqual(
            repo.get_commits.call_args[1]["since"],
            datetime(2024, 5, 31, 14, tzinfo=timezone.utc),
        )

    def test_invalid_timezone_is_usage_error(self):
        global_config = GlobalConfig()
        global_config.GITHUB_TIMEZONE = "Not/A_Zone"
        with self.assertRaises(UsageError):
            GitHubAPIDataSource(
                make_context(
                    repo_path="https://github.com/o/r", global_config=global_config
                )
            )

    def test_api_error_is_log_fetch_error(self):
        repo = MagicMock()
        repo.get_commits.side_effect = GithubException(500, {"message": "boom"}, None)
        self.source.repo = repo
        with self.assertRaises(LogFetchError):
            self.source.get_raw_log()

    def test_unvalidated_source_raises(self):
        with self.assertRaises(LogFetchError):
            self.source.get_raw_log()


if __name__ == "__main__":
    unittest.main()
