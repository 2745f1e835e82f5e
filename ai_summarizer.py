# ai_summarizer.py
import logging
import os
import importlib
from typing import List

from config import GlobalConfig
from context import RunContext
from errors import FormatterError

# 导入 Registry 和基类
from llm.provider_abc import LLMProvider, PROVIDER_REGISTRY

logger = logging.getLogger(__name__)


# --- 动态加载器 ---
def load_providers_dynamically(script_base_path: str):
    """
    扫描 llm/ 目录下的所有 *_provider.py 文件并导入它们。
    这将触发 @register_provider 装饰器，将类注册到 PROVIDER_REGISTRY 中。
    """
    llm_dir = os.path.join(script_base_path, "llm")
    if not os.path.exists(llm_dir):
        logger.warning(f"⚠️ 未找到 llm 目录: {llm_dir}")
        return

    for filename in sorted(os.listdir(llm_dir)):
        if not filename.endswith("_provider.py"):
            continue
        # 构建模块名 (例如: llm.openai_provider)
        module_name = f"llm.{filename[:-3]}"
        try:
            importlib.import_module(module_name)
        except Exception as e:
            logger.error(f"❌ 动态加载模块 {module_name} 失败: {e}")


def get_llm_provider(
    provider_id: str, global_config: GlobalConfig, api_key: str
) -> LLMProvider:
    """
    工厂函数：基于 Registry Pattern 实现，从 PROVIDER_REGISTRY 查找供应商。
    """
    logger.info(f"ℹ️ 正在初始化 LLM 供应商: {provider_id}")

    # 1. 动态加载所有可能的 providers
    load_providers_dynamically(global_config.SCRIPT_BASE_PATH)

    # 2. 检查密钥
    if not global_config.is_provider_configured(provider_id, api_key):
        logger.error(f"❌ 供应商 '{provider_id}' 未提供 API Key。")
        raise ValueError(f"供应商 '{provider_id}' 未配置，请使用 --apikey 传入密钥。")

    # 3. 从注册表中查找
    if provider_id not in PROVIDER_REGISTRY:
        logger.error(f"❌ 未知的 LLM 供应商: '{provider_id}'")
        logger.error(f"   可用供应商: {list(PROVIDER_REGISTRY.keys())}")
        raise ValueError(f"未知的 LLM 供应商: {provider_id}")

    # 4. 实例化
    provider_class = PROVIDER_REGISTRY[provider_id]
    try:
        return provider_class(global_config, api_key)
    except ImportError as e:
        logger.error(f"❌ 供应商 '{provider_id}' 依赖缺失: {e}")
        raise


class AIService:
    """
    封装所有对 LLM 的调用。
    - 由 RunContext 初始化。
    - 失败统一转换为 FormatterError，由调用方决定如何降级。
    """

    def __init__(self, context: RunContext):
        self.context = context
        self.global_config = context.global_config

        self.provider: LLMProvider = get_llm_provider(
            context.llm_id, self.global_config, context.api_key
        )
        logger.info(
            f"✅ 🤖 AI 服务已成功初始化 (Provider: {self.provider.__class__.__name__})"
        )

    def format_commit_messages(self, messages: List[str]) -> str:
        """把一天的原始提交信息交给 LLM 润色"""
        try:
            formatted = self.provider.format_commit_messages(messages)
        except Exception as e:
            raise FormatterError(f"{self.context.llm_id} 格式化失败: {e}") from e
        if not formatted or not formatted.strip():
            raise FormatterError(f"{self.context.llm_id} 返回了空内容")
        return formatted.strip()
