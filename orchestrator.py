# orchestrator.py
"""
业务逻辑编排器
- 启动校验 (凭证文件) -> 获取日志 -> 组装工时表 -> 写入 Google Sheet
- 只有 UsageError / LogFetchError 会终止运行
- 集成 Hook 系统 (Lifecycle & Plugins)
"""
import logging
import os
from typing import Optional

from context import RunContext
from errors import LogFetchError, UsageError, WriteError
from models import Timesheet

from ai_summarizer import AIService
from sheets_writer import GoogleSheetsWriter
from timesheet_builder import Formatter, build_timesheet
import report_builder
import utils

from data_sources.factory import get_data_source
from hooks.manager import PluginManager
from hooks.clean_output import CleanOutputPlugin

logger = logging.getLogger(__name__)


class TimesheetOrchestrator:
    """
    负责执行工时表生成的核心业务流程。
    """

    def __init__(self, context: RunContext):
        self.context = context
        self.global_config = context.global_config

        self.data_source = get_data_source(context)

        # 内置插件先注册，plugins/ 目录下的用户插件随后
        self.plugin_manager = PluginManager(context)
        self.plugin_manager.register(CleanOutputPlugin())
        self.plugin_manager.load_plugins()

        self.writer: Optional[GoogleSheetsWriter] = None

        logger.info("✅ TimesheetOrchestrator 已初始化 (含 Hooks)")

    def validate_startup(self):
        """
        启动前置校验，失败抛出 UsageError，此时尚未发起任何外部调用。
        """
        credentials_path = self.global_config.CREDENTIALS_PATH
        if not os.path.isfile(credentials_path):
            logger.error(f"❌ 未找到 Google 凭证文件: {credentials_path}")
            raise UsageError(f"Google credentials JSON file not found at: {credentials_path}")

        if not self.context.dry_run:
            self.writer = GoogleSheetsWriter(
                credentials_path, timeout=self.global_config.SHEETS_TIMEOUT
            )

    def _build_formatter(self) -> Formatter:
        """
        返回交给工时表组装器的格式化函数。
        AI 不可用时直接拼接原始提交信息。
        """
        ai_service: Optional[AIService] = None
        if not self.context.no_ai:
            try:
                ai_service = AIService(self.context)
            except (ValueError, ImportError) as e:
                logger.error(f"❌ AI 服务初始化失败: {e}")
                logger.error("   将以 --no-ai 模式继续...")
                self.context.no_ai = True

        if ai_service is None:
            return lambda messages: "\n".join(messages)

        return ai_service.format_commit_messages

    def _filter_summary(self, summary: str) -> str:
        """插件过滤链，作用于每个有提交的日子 (包括 --no-ai 和回退的原始信息)"""
        return self.plugin_manager.filter("on_log_summary_generated", summary)

    def run(self) -> Timesheet:
        """
        执行核心业务流程，返回生成的工时表。
        """
        # --- 0. 启动校验 ---
        self.validate_startup()

        # --- [Hook] 流程开始 ---
        self.plugin_manager.trigger("on_start")

        # --- 1. 验证数据源并获取日志 (失败即终止) ---
        if not self.data_source.validate():
            logger.error("❌ 数据源验证失败，终止运行。")
            raise LogFetchError(f"数据源不可用: {self.context.repo_path}")

        daily_logs = self.data_source.get_daily_logs()
        if not daily_logs:
            logger.warning(f"⚠️ {self.context.month_label} 未找到 {self.context.author} 的提交记录")

        # --- [Hook] 数据就绪 ---
        self.plugin_manager.trigger("on_logs_fetched", daily_logs=daily_logs)

        # --- 2. 组装工时表 ---
        timesheet = build_timesheet(
            daily_logs,
            self.context.year,
            self.context.month,
            self._build_formatter(),
            daily_hours=self.context.daily_hours,
            summary_filter=self._filter_summary,
        )

        # --- [Hook] 工时表就绪 ---
        self.plugin_manager.trigger("on_timesheet_built", timesheet=timesheet)

        # --- 3. 控制台输出 ---
        logger.info(
            "\n" + report_builder.generate_text_report(timesheet, self.context.author)
        )

        # --- 4. HTML 本地副本 ---
        if self.context.html:
            self._save_html(timesheet)

        # --- 5. 写入 Google Sheet (失败不终止) ---
        if self.context.dry_run:
            logger.info("ℹ️ --dry-run 模式，跳过写入 Google Sheet。")
        else:
            self._write_sheet(timesheet)

        # --- [Hook] 流程结束 ---
        self.plugin_manager.trigger("on_finish")
        return timesheet

    def _write_sheet(self, timesheet: Timesheet):
        values = report_builder.build_sheet_values(
            timesheet, self.global_config.SHEET_HEADER
        )
        try:
            self.writer.write(
                self.context.sheet_id,
                values,
                sheet_range=self.global_config.SHEET_RANGE or None,
            )
        except WriteError as e:
            logger.error(f"❌ 更新 Google Sheet 失败: {e}")

    def _save_html(self, timesheet: Timesheet):
        html_content = report_builder.generate_html_report(
            timesheet, self.context.author, self.global_config
        )
        html_content = self.plugin_manager.filter("on_html_generated", html_content)
        html_path = report_builder.save_html_report(html_content, self.context)
        if html_path and not self.context.no_browser:
            utils.open_report_in_browser(html_path)
