# llm/deepseek_provider.py
"""
LLMProvider 针对 DeepSeek 的具体实现 (OpenAI 兼容接口)。
"""
import logging
from typing import Optional, List

try:
    from openai import OpenAI
except ImportError:
    pass

from llm.provider_abc import LLMProvider, register_provider, load_prompts_from_dir
from config import GlobalConfig

logger = logging.getLogger(__name__)


@register_provider("deepseek")
class DeepSeekProvider(LLMProvider):
    """
    DeepSeek 策略实现。--apikey 传入的是 DeepSeek 的密钥。
    """

    def __init__(self, global_config: GlobalConfig, api_key: str):
        self.global_config = global_config
        if not api_key:
            logger.error("❌ DeepSeek API Key 未设置。请使用 --apikey 传入。")
            raise ValueError("DeepSeek API Key 未设置。")

        try:
            self.client = OpenAI(
                api_key=api_key,
                base_url=self.global_config.DEEPSEEK_BASE_URL,
                timeout=self.global_config.LLM_TIMEOUT,
            )
            self.default_model = self.global_config.DEFAULT_MODEL_DEEPSEEK
            self.prompts = load_prompts_from_dir(
                self.global_config.prompts_dir, required=["format_commits"]
            )
            # DeepSeek 需要一个 System Prompt
            self.system_prompt = self.prompts.get("system", "You are a helpful assistant.")
            logger.info(
                f"✅ DeepSeekProvider 初始化成功 (已加载 {len(self.prompts)} 个提示)"
            )
        except Exception as e:
            logger.error(f"❌ DeepSeek (OpenAI) 客户端初始化失败: {e}")
            raise ValueError(f"DeepSeek (OpenAI) 客户端初始化失败: {e}")

    def _generate(self, user_prompt_key: str, format_kwargs: dict) -> Optional[str]:
        user_prompt_template = self.prompts.get(user_prompt_key)
        if not user_prompt_template:
            logger.error(
                f"❌ [DeepSeekProvider] 未找到 User 提示词: '{user_prompt_key}'"
            )
            return None
        try:
            user_prompt = user_prompt_template.format(**format_kwargs)
            messages = [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": user_prompt},
            ]
            response = self.client.chat.completions.create(
                model=self.default_model, messages=messages
            )
            if response.choices and response.choices[0].message.content:
                return response.choices[0].message.content.strip()
            else:
                raise Exception("未从 DeepSeek API 收到内容")
        except Exception as e:
            logger.error(f"❌ [DeepSeekProvider 错误] 生成内容失败: {e}")
            raise

    def format_commit_messages(self, messages: List[str]) -> Optional[str]:
        return self._generate("format_commits", {"messages": "\n".join(messages)})
