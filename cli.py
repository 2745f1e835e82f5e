# cli.py
"""
命令行界面 (Interface) 层
负责参数解析、RunContext 组装，以及把致命错误转换为退出码。
"""
import argparse
import logging
import os
import sys
from datetime import date
from typing import List, Optional, Tuple

from config import GlobalConfig
from context import RunContext
from data_sources.factory import is_remote_url
from errors import LogFetchError, UsageError
from orchestrator import TimesheetOrchestrator

logger = logging.getLogger(__name__)


def parse_month(value: str) -> Tuple[int, int]:
    """解析 YYYY-MM，供 argparse 作为 type 使用"""
    try:
        year_str, month_str = value.split("-")
        year, month = int(year_str), int(month_str)
    except ValueError:
        raise argparse.ArgumentTypeError(f"月份格式应为 YYYY-MM: {value!r}")
    if not 1 <= month <= 12 or year < 1:
        raise argparse.ArgumentTypeError(f"无效的月份: {value!r}")
    return year, month


def non_negative_hours(value: str) -> float:
    try:
        hours = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"工时必须是数字: {value!r}")
    if hours < 0:
        raise argparse.ArgumentTypeError(f"工时不能为负数: {value!r}")
    return hours


def setup_parser() -> argparse.ArgumentParser:
    """
    负责所有 argparse 的定义。
    """
    parser = argparse.ArgumentParser(
        prog="git-timesheet",
        description="根据 Git 提交记录生成月度工时表并写入 Google Sheet",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    # --- 必填参数 ---
    parser.add_argument(
        "-k",
        "--apikey",
        required=True,
        help="LLM 的 API Key，用于润色提交信息",
    )
    parser.add_argument(
        "-a",
        "--author",
        required=True,
        help="按作者过滤 Git 日志 (原样传给 git log --author)",
    )
    parser.add_argument(
        "-s",
        "--sheetid",
        required=True,
        help="要更新的 Google Sheet ID",
    )

    # --- 可选参数 ---
    parser.add_argument(
        "-r",
        "--repo-path",
        type=str,
        default=".",
        help="要分析的 Git 仓库路径，或 GitHub 仓库 URL。\n(默认: 当前目录)",
    )
    parser.add_argument(
        "-m",
        "--month",
        type=parse_month,
        default=None,
        help="目标月份，格式 YYYY-MM。\n(默认: 当前月份)",
    )
    parser.add_argument(
        "--hours",
        type=non_negative_hours,
        default=GlobalConfig.DEFAULT_HOURS,
        help=f"每个有提交的工作日记多少小时。\n(默认: {GlobalConfig.DEFAULT_HOURS})",
    )
    parser.add_argument(
        "--llm",
        type=str,
        default=None,
        help="指定 LLM 供应商 (例如 'openai', 'deepseek', 'gemini', 'mock')。\n"
        f"(默认: {GlobalConfig.DEFAULT_LLM})",
    )

    # --- 标志 (Flags) ---
    parser.add_argument("--no-ai", action="store_true", help="禁用 AI 润色，直接使用原始提交信息")
    parser.add_argument("--html", action="store_true", help="同时在 data/ 下保存 HTML 工时表")
    parser.add_argument(
        "--no-browser", action="store_true", help="不自动在浏览器中打开 HTML 工时表"
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="只生成并打印工时表，不写入 Google Sheet"
    )

    return parser


def build_context(args: argparse.Namespace, global_config: GlobalConfig) -> RunContext:
    """把解析后的参数与全局配置合并为 RunContext"""
    if args.month:
        year, month = args.month
    else:
        today = date.today()
        year, month = today.year, today.month

    if is_remote_url(args.repo_path):
        repo_path = args.repo_path
    else:
        repo_path = os.path.abspath(args.repo_path)

    return RunContext(
        api_key=args.apikey,
        author=args.author,
        sheet_id=args.sheetid,
        repo_path=repo_path,
        year=year,
        month=month,
        daily_hours=args.hours,
        llm_id=(args.llm or global_config.DEFAULT_LLM).lower(),
        no_ai=args.no_ai,
        html=args.html,
        no_browser=args.no_browser,
        dry_run=args.dry_run,
        global_config=global_config,
    )


def run_cli(argv: Optional[List[str]] = None):
    """
    主入口点。缺少必填参数时 argparse 以退出码 2 结束。
    """
    parser = setup_parser()
    args = parser.parse_args(argv)

    global_config = GlobalConfig()
    run_context = build_context(args, global_config)

    logger.info("=" * 50)
    logger.info("🚀 Git Timesheet 启动...")
    logger.info(f"   [目标仓库]: {run_context.repo_path}")
    logger.info(f"   [作者]: {run_context.author}")
    logger.info(f"   [月份]: {run_context.month_label}")
    logger.info(f"   [LLM 供应商]: {'已禁用' if run_context.no_ai else run_context.llm_id}")
    logger.info(f"   [Google Sheet]: {run_context.sheet_id}")
    logger.info("=" * 50)

    try:
        orchestrator = TimesheetOrchestrator(run_context)
        orchestrator.run()
    except UsageError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
    except LogFetchError as e:
        logger.error(f"❌ 获取 Git 日志失败，是否位于 Git 仓库中? {e}")
        sys.exit(1)

    logger.info("✅ 运行完毕。")
