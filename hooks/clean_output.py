# hooks/clean_output.py
import logging
import re
from hooks.base import BasePlugin
from context import RunContext

logger = logging.getLogger(__name__)

FENCE_START = re.compile(r"^```(markdown|md|text)?\s*\n", re.IGNORECASE)


class CleanOutputPlugin(BasePlugin):
    """
    [内置插件] 输出清洗器
    去除 LLM 可能输出的代码块包裹标记 (```markdown ... ```)，
    避免写进表格单元格。
    """

    name = "CleanMarkdownOutput"

    def on_log_summary_generated(self, context: RunContext, summary: str) -> str:
        if not summary:
            return summary

        cleaned = summary.strip()

        # 1. 去除开头的 ```markdown 或 ```
        if FENCE_START.match(cleaned):
            cleaned = FENCE_START.sub("", cleaned, count=1)

        # 2. 去除结尾的 ```
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]

        cleaned = cleaned.strip()

        if cleaned != summary:
            logger.info("🧹 [CleanOutput] 已去除 AI 回复中的代码块包裹。")

        return cleaned
