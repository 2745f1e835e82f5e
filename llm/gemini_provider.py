# llm/gemini_provider.py
"""
LLMProvider 针对 Google Gemini 的具体实现。
"""
import logging
from typing import Optional, List

try:
    from google import genai
    from google.genai import types
except ImportError:
    # 错误将在实例化时被捕获
    pass

from llm.provider_abc import LLMProvider, register_provider, load_prompts_from_dir
from config import GlobalConfig

logger = logging.getLogger(__name__)


@register_provider("gemini")
class GeminiProvider(LLMProvider):
    """
    Gemini 策略实现。
    """

    def __init__(self, global_config: GlobalConfig, api_key: str):
        """
        初始化 Gemini 客户端 (genai.Client) 并加载提示词。
        """
        self.global_config = global_config
        if not api_key:
            logger.error("❌ Gemini API Key 未设置。请使用 --apikey 传入。")
            raise ValueError("Gemini API Key 未设置。")

        try:
            # HttpOptions.timeout 单位为毫秒
            self.client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(
                    timeout=int(self.global_config.LLM_TIMEOUT * 1000)
                ),
            )
            self.default_model = self.global_config.DEFAULT_MODEL_GEMINI
            self.prompts = load_prompts_from_dir(
                self.global_config.prompts_dir, required=["format_commits"]
            )
            logger.info(
                f"✅ GeminiProvider (genai.Client 模式) 初始化成功 (已加载 {len(self.prompts)} 个提示)"
            )
        except Exception as e:
            logger.error(f"❌ Gemini (genai.Client) 客户端初始化失败: {e}")
            raise ValueError(f"Gemini (genai.Client) 客户端初始化失败: {e}")

    def _generate(self, prompt_key: str, format_kwargs: dict) -> Optional[str]:
        """内部辅助函数，用于格式化和调用 Gemini"""
        prompt_template = self.prompts.get(prompt_key)
        if not prompt_template:
            logger.error(f"❌ [GeminiProvider] 未找到提示词: '{prompt_key}'")
            return None
        try:
            full_prompt = prompt_template.format(**format_kwargs)
        except KeyError as e:
            logger.error(
                f"❌ [GeminiProvider] 格式化提示 '{prompt_key}' 失败: 缺少键 {e}"
            )
            return None

        try:
            response = self.client.models.generate_content(
                model=f"models/{self.default_model}", contents=full_prompt
            )
            if not response or not response.text:
                raise Exception("API 调用成功，但回复内容为空")
            return response.text.strip()
        except Exception as e:
            logger.error(f"❌ [GeminiProvider 错误] 生成内容失败: {e}")
            raise

    def format_commit_messages(self, messages: List[str]) -> Optional[str]:
        return self._generate("format_commits", {"messages": "\n".join(messages)})
