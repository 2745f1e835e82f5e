# git_utils.py
import subprocess
import logging
from typing import List

from config import GlobalConfig
from context import RunContext
from errors import LogFetchError
from models import DailyLogGroup
import utils

logger = logging.getLogger(__name__)

LOG_SEPARATOR = GlobalConfig.GIT_LOG_SEPARATOR


def run_git_command(
    args: List[str], repo_path: str, timeout: int = 30, context: str = "执行Git命令"
) -> str:
    """
    统一的 Git 命令执行函数
    - 使用 cwd 参数在指定仓库路径下执行
    - 以参数列表调用，作者名等用户输入不经过 shell
    - 任何失败都抛出 LogFetchError
    """
    cmd = ["git", *args]
    try:
        logger.info(f"在 {repo_path} 中执行命令: {' '.join(cmd)}")
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout,
            cwd=repo_path,
        )
    except subprocess.TimeoutExpired as e:
        logger.error(f"{context}超时")
        raise LogFetchError(f"{context}超时 ({timeout}s)") from e
    except OSError as e:
        logger.error(f"{context}出错: {e}")
        raise LogFetchError(f"{context}出错: {e}") from e

    if result.returncode != 0:
        logger.error(f"{context}失败: {result.stderr}")
        raise LogFetchError(
            f"{context}失败 (exit {result.returncode}): {result.stderr.strip()}"
        )
    logger.info(f"{context}成功，输出 {len(result.stdout.splitlines())} 行")
    return result.stdout


def is_git_repository(repo_path: str) -> bool:
    """检查指定路径是否为Git仓库"""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            capture_output=True,
            text=True,
            cwd=repo_path,
        )
        return result.returncode == 0
    except OSError:
        return False


def build_git_log_args(context: RunContext) -> List[str]:
    """
    组装 git log 参数。
    - 日期只写 YYYY-MM-DD 时 git 会套用当前时刻，因此显式补上 00:00:00
    - --reverse 让同一天内的提交按时间先后排列
    """
    return [
        "log",
        f"--since={context.since_date} 00:00:00",
        f"--author={context.author}",
        "--reverse",
        f"--pretty=format:{context.global_config.GIT_LOG_PRETTY}",
        "--date=short",
    ]


def get_git_log(context: RunContext) -> str:
    """获取目标月份起该作者的提交记录 (每行 '<date> - <message>')"""
    return run_git_command(
        build_git_log_args(context),
        context.repo_path,
        timeout=context.global_config.GIT_TIMEOUT,
        context="获取Git提交历史",
    )


def parse_daily_logs(log_output: str, separator: str = LOG_SEPARATOR) -> DailyLogGroup:
    """
    将 '<date> - <message>' 形式的日志按日期分组。
    - 空行跳过
    - 只在第一个分隔符处切分，提交信息中的分隔符原样保留
    - 同一日期的消息按输入顺序追加
    """
    daily_logs: DailyLogGroup = {}
    if not log_output or not log_output.strip():
        logger.warning("Git日志输出为空")
        return daily_logs

    for line in log_output.split("\n"):
        if not line.strip():
            continue
        try:
            date, message = utils.split_on_first(line, separator)
        except ValueError:
            logger.warning(f"提交格式异常，已跳过: {line}")
            continue
        daily_logs.setdefault(date.strip(), []).append(message.strip())

    total = sum(len(messages) for messages in daily_logs.values())
    logger.info(f"成功解析 {total} 条提交，覆盖 {len(daily_logs)} 天")
    return daily_logs


def flatten_daily_logs(
    daily_logs: DailyLogGroup, separator: str = LOG_SEPARATOR
) -> List[str]:
    """把分组结果还原为日志行 (保持每日内的顺序)"""
    return [
        f"{date}{separator}{message}"
        for date, messages in daily_logs.items()
        for message in messages
    ]
