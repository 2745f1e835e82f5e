# llm/openai_provider.py
"""
LLMProvider 针对 OpenAI 的具体实现 (默认供应商)。
使用 @register_provider 进行自动注册。
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


@register_provider("openai")
class OpenAIProvider(LLMProvider):
    """
    OpenAI Chat Completions 策略实现。
    """

    def __init__(self, global_config: GlobalConfig, api_key: str):
        self.global_config = global_config
        if not api_key:
            logger.error("❌ OpenAI API Key 未设置。请使用 --apikey 传入。")
            raise ValueError("OpenAI API Key 未设置。")

        try:
            self.client = OpenAI(
                api_key=api_key, timeout=self.global_config.LLM_TIMEOUT
            )
        except Exception as e:
            logger.error(f"❌ OpenAI 客户端初始化失败: {e}")
            raise ValueError(f"OpenAI 客户端初始化失败: {e}")

        self.default_model = self.global_config.DEFAULT_MODEL_OPENAI
        self.prompts = load_prompts_from_dir(
            self.global_config.prompts_dir, required=["format_commits"]
        )
        self.system_prompt = self.prompts.get("system")
        logger.info(
            f"✅ OpenAIProvider 初始化成功 (模型: {self.default_model}, 已加载 {len(self.prompts)} 个提示)"
        )

    def _generate(
        self, user_prompt_key: str, format_kwargs: dict, model_name: str | None = None
    ) -> Optional[str]:
        user_prompt_template = self.prompts.get(user_prompt_key)
        if not user_prompt_template:
            logger.error(f"❌ [OpenAIProvider] 未找到 User 提示词: '{user_prompt_key}'")
            return None

        user_prompt = user_prompt_template.format(**format_kwargs)
        messages = [{"role": "user", "content": user_prompt}]
        if self.system_prompt:
            messages.insert(0, {"role": "system", "content": self.system_prompt})

        try:
            response = self.client.chat.completions.create(
                model=model_name or self.default_model, messages=messages
            )
            if response.choices and response.choices[0].message.content:
                return response.choices[0].message.content.strip()
            raise Exception("未从 OpenAI API 收到内容")
        except Exception as e:
            logger.error(f"❌ [OpenAIProvider 错误] 生成内容失败: {e}")
            raise

    def format_commit_messages(self, messages: List[str]) -> Optional[str]:
        return self._generate("format_commits", {"messages": "\n".join(messages)})
