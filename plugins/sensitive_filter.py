# plugins/sensitive_filter.py
import re
from hooks.base import BasePlugin
from context import RunContext


class SensitiveWordFilterPlugin(BasePlugin):
    """
    示例插件：屏蔽摘要中的敏感信息，工时表通常会共享给客户或财务。
    原始提交信息 (--no-ai 或回退) 同样会经过此过滤。
    """

    name = "SensitiveWordFilter"

    # 定义要过滤的词汇 (不区分大小写)
    SENSITIVE_WORDS = ["password", "secret", "api key", "内部IP"]

    # 形如 192.168.1.10 的 IPv4 地址
    IP_PATTERN = re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b")

    def on_log_summary_generated(self, context: RunContext, summary: str) -> str:
        if not summary:
            return summary

        filtered_summary = summary
        count = 0
        for word in self.SENSITIVE_WORDS:
            pattern = re.compile(re.escape(word), re.IGNORECASE)
            filtered_summary, n = pattern.subn("***", filtered_summary)
            count += n

        filtered_summary, n = self.IP_PATTERN.subn("***", filtered_summary)
        count += n

        if count > 0:
            print(f"🛡️ [SensitiveWordFilter] 已过滤 {count} 处敏感信息。")

        return filtered_summary
