# hooks/base.py
from abc import ABC
from context import RunContext
from models import DailyLogGroup, Timesheet


class BasePlugin(ABC):
    """
    插件基类
    定义所有生命周期钩子。用户自定义插件应继承此类。
    """

    # 插件名称 (建议子类覆盖)
    name: str = "BasePlugin"

    def on_start(self, context: RunContext):
        """
        [钩子] 流程开始时调用。
        """
        pass

    def on_logs_fetched(self, context: RunContext, daily_logs: DailyLogGroup):
        """
        [钩子] 日志源获取并分组提交信息后调用。
        可用于检查数据完整性或统计自定义指标。
        """
        pass

    def on_log_summary_generated(self, context: RunContext, summary: str) -> str:
        """
        [Filter 钩子] 单日摘要写入工时表前调用。
        对每个有提交的日子都会调用，摘要可能来自 LLM，
        也可能是 --no-ai 或格式化失败时回退的原始提交信息。
        **必须返回字符串**。可用于敏感词过滤、格式调整。

        :param summary: 原始摘要
        :return: 修改后的摘要 (若不修改请直接返回 summary)
        """
        return summary

    def on_timesheet_built(self, context: RunContext, timesheet: Timesheet):
        """
        [钩子] 工时表组装完成、写入表格之前调用。
        """
        pass

    def on_html_generated(self, context: RunContext, html_content: str) -> str:
        """
        [Filter 钩子] HTML 副本生成后，保存前调用。
        """
        return html_content

    def on_finish(self, context: RunContext):
        """
        [钩子] 流程结束时调用（写入失败也会调用，只要未崩溃）。
        """
        pass
