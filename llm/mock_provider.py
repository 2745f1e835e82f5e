# llm/mock_provider.py
"""
[测试样例] 一个模拟的 LLM 供应商
不进行任何实际 API 调用，可用于离线试运行 (--llm mock)。
"""
import logging
from typing import Optional, List
from llm.provider_abc import LLMProvider, register_provider
from config import GlobalConfig

logger = logging.getLogger(__name__)


@register_provider("mock")
class MockProvider(LLMProvider):
    """
    模拟的 Provider，把每条提交信息整理成一句首字母大写、句号结尾的话。
    """

    def __init__(self, global_config: GlobalConfig, api_key: str = ""):
        self.global_config = global_config
        logger.info("✅ MockProvider 已初始化 (无需 API Key)")

    def format_commit_messages(self, messages: List[str]) -> Optional[str]:
        sentences = []
        for message in messages:
            text = message.strip().rstrip(".")
            if text:
                sentences.append(f"- {text[0].upper()}{text[1:]}.")
        return "[Mock]\n" + "\n".join(sentences)
