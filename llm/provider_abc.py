# llm/provider_abc.py
"""
所有 LLM 供应商的抽象基类 (ABC)。
支持 Registry Pattern，允许动态注册供应商。
"""
import logging
import os
from abc import ABC, abstractmethod
from typing import Optional, Type, Dict, List, Sequence

logger = logging.getLogger(__name__)

# --- 注册表机制 START ---
# 全局注册表，存储 "provider_id" -> Provider Class 的映射
PROVIDER_REGISTRY: Dict[str, Type["LLMProvider"]] = {}


def register_provider(provider_id: str):
    """
    类装饰器：用于将具体的 Provider 实现类注册到全局注册表中。

    使用示例:
        @register_provider("openai")
        class OpenAIProvider(LLMProvider):
            ...
    """

    def decorator(cls):
        if provider_id in PROVIDER_REGISTRY:
            raise ValueError(
                f"Provider id '{provider_id}' 已经被注册过 ({PROVIDER_REGISTRY[provider_id].__name__})"
            )
        PROVIDER_REGISTRY[provider_id] = cls
        return cls

    return decorator


# --- 注册表机制 END ---


def load_prompts_from_dir(
    prompt_dir: str, required: Sequence[str] = ()
) -> Dict[str, str]:
    """
    递归加载目录下所有 .txt 提示词，键为去掉扩展名的相对路径。
    required 中的提示词缺失时抛出 ValueError。
    """
    prompts = {}
    try:
        for root, _, files in os.walk(prompt_dir):
            for filename in files:
                if filename.endswith(".txt"):
                    file_path = os.path.join(root, filename)
                    relative_path = os.path.relpath(file_path, prompt_dir)
                    key = os.path.splitext(relative_path)[0]
                    key = key.replace(os.path.sep, "/")  # 确保使用 /

                    with open(file_path, "r", encoding="utf-8") as f:
                        prompts[key] = f.read()

        if not prompts:
            logger.warning(f"⚠️ 在 {prompt_dir} 及其子目录中未找到 .txt 提示词。")
    except OSError as e:
        logger.error(f"❌ 加载提示词失败 ({prompt_dir}): {e}")
        prompts = {}

    missing = [key for key in required if key not in prompts]
    if missing:
        raise ValueError(f"在 {prompt_dir} 中缺少提示词: {missing}")
    return prompts


class LLMProvider(ABC):
    """
    LLM 供应商的抽象接口。
    """

    @abstractmethod
    def format_commit_messages(self, messages: List[str]) -> Optional[str]:
        """把一天内的原始提交信息整理成适合工时表的通顺语句"""
        pass
