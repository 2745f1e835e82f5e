# data_sources/factory.py
import logging
from context import RunContext
from .base import DataSource
from .local_git import LocalGitDataSource
from .github_api import GitHubAPIDataSource

logger = logging.getLogger(__name__)


def is_remote_url(path: str) -> bool:
    return path.lower().startswith(("http://", "https://", "git@"))


def get_data_source(context: RunContext) -> DataSource:
    """
    日志源工厂
    [V1.1] 支持 GitHub URL 自动识别
    """
    if is_remote_url(context.repo_path):
        logger.info("🔌 [Factory] 检测到远程 URL，初始化数据源: GitHub API")
        return GitHubAPIDataSource(context)

    logger.info("🔌 [Factory] 初始化数据源: Local Git")
    return LocalGitDataSource(context)
