# data_sources/github_api.py
import logging
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from urllib.parse import urlparse
from typing import List, Optional

# 第三方库
try:
    from github import Github, GithubException
    from github.Repository import Repository
except ImportError:
    Github = None

from .base import DataSource
from models import DailyLogGroup
from context import RunContext
from errors import LogFetchError, UsageError
import git_utils

logger = logging.getLogger(__name__)


class GitHubAPIDataSource(DataSource):
    """
    [V1.1] GitHub 远程数据源实现
    使用 PyGithub 直接读取远程仓库的提交，无需本地 git clone。
    输出与本地 git log 相同的行格式，复用同一个解析器。
    GitHub API 只返回 UTC 时间，提交作者当时的时区已丢失，
    这里按 GITHUB_TIMEZONE (缺省为本机时区) 换算日期，跨时区团队可能与本地 git log 相差一天。
    """

    def __init__(self, context: RunContext):
        self.context = context
        self.global_config = context.global_config
        self.repo: Optional["Repository"] = None
        self.tz = self._resolve_timezone(self.global_config.GITHUB_TIMEZONE)

        if not Github:
            raise ImportError(
                "请安装 PyGithub 库以使用远程仓库功能: pip install PyGithub"
            )

        token = self.global_config.GITHUB_TOKEN
        if not token:
            logger.warning(
                "⚠️ 未配置 GITHUB_TOKEN，API 请求可能会受到严格限制 (60次/小时)。建议在 .env 中配置。"
            )
            self.client = Github()  # 匿名访问
        else:
            self.client = Github(token)

    def _resolve_timezone(self, name: str) -> Optional[tzinfo]:
        """None 表示使用本机时区"""
        if not name:
            return None
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise UsageError(f"无效的 GITHUB_TIMEZONE: {name}") from e

    def _parse_repo_name(self, url: str) -> Optional[str]:
        """从 URL 中解析 owner/repo"""
        # 支持 https://github.com/owner/repo 和 git@github.com:owner/repo.git
        if url.startswith("git@"):
            if ":" not in url:
                return None
            path = url.split(":", 1)[1]
        else:
            path = urlparse(url).path
        path = path.strip("/")
        if path.endswith(".git"):
            path = path[:-4]
        return path or None

    def validate(self) -> bool:
        repo_name = self._parse_repo_name(self.context.repo_path)
        if not repo_name:
            logger.error(f"❌ 无法从 URL 解析仓库名称: {self.context.repo_path}")
            return False

        try:
            logger.info(f"🌐 正在连接 GitHub API: {repo_name} ...")
            self.repo = self.client.get_repo(repo_name)
            logger.info(f"✅ 成功连接远程仓库: {self.repo.full_name}")
            return True
        except GithubException as e:
            logger.error(
                f"❌ 无法访问 GitHub 仓库: {e.status} {(e.data or {}).get('message', '')}"
            )
            return False

    def get_raw_log(self) -> str:
        if not self.repo:
            raise LogFetchError("GitHub 仓库尚未验证，无法获取提交记录")

        # 月初按换算时区的零点计算，再转成 UTC 交给 API
        month_start = datetime(self.context.year, self.context.month, 1)
        if self.tz:
            month_start = month_start.replace(tzinfo=self.tz)
        since = month_start.astimezone(timezone.utc)
        logger.info(
            f"📅 获取提交记录 (Since: {since.strftime('%Y-%m-%d')}, Author: {self.context.author})..."
        )

        max_limit = self.global_config.GITHUB_MAX_COMMITS
        lines: List[str] = []
        try:
            # GitHub API 是分页的，迭代会自动翻页；返回顺序为最新在前
            for c in self.repo.get_commits(since=since, author=self.context.author):
                if len(lines) >= max_limit:
                    logger.warning(f"⚠️ 达到 API 单次获取上限 ({max_limit})，停止获取。")
                    break
                # tz 为 None 时 astimezone 使用本机时区
                date_str = c.commit.author.date.astimezone(self.tz).strftime("%Y-%m-%d")
                subject = c.commit.message.split("\n")[0]  # 只取首行
                lines.append(f"{date_str}{git_utils.LOG_SEPARATOR}{subject}")
        except GithubException as e:
            logger.error(f"❌ 获取提交列表失败: {e}")
            raise LogFetchError(f"GitHub API 获取提交失败: {e.status}") from e

        # 与本地 git log --reverse 保持一致：按时间先后排列
        lines.reverse()
        logger.info(f"获取Git提交历史成功，共 {len(lines)} 条")
        return "\n".join(lines)

    def get_daily_logs(self) -> DailyLogGroup:
        return git_utils.parse_daily_logs(self.get_raw_log())
