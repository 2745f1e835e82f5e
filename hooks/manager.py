# hooks/manager.py
import logging
import os
import importlib.util
import inspect
from typing import List, Any, Optional
from context import RunContext
from .base import BasePlugin

logger = logging.getLogger(__name__)


class PluginManager:
    """
    插件管理器
    负责注册内置插件、从 plugins/ 目录动态加载脚本，并管理钩子调用链。
    插件自身的异常只记录日志，不影响工时表的生成。
    """

    def __init__(self, context: RunContext, plugins_dir: Optional[str] = None):
        self.context = context
        self.plugins: List[BasePlugin] = []
        self.plugins_dir = plugins_dir or context.global_config.plugins_dir

    def load_plugins(self):
        """从 plugins 目录加载 .py 插件，目录不存在则跳过"""
        if not os.path.isdir(self.plugins_dir):
            return

        logger.info(f"🔌 [Hooks] 正在扫描插件目录: {self.plugins_dir}")
        for filename in sorted(os.listdir(self.plugins_dir)):
            if filename.endswith(".py") and not filename.startswith("__"):
                self._load_plugin_from_file(os.path.join(self.plugins_dir, filename))

    def _load_plugin_from_file(self, filepath: str):
        """动态加载单个插件文件，实例化其中所有 BasePlugin 子类"""
        module_name = f"timesheet_plugin_{os.path.splitext(os.path.basename(filepath))[0]}"
        try:
            spec = importlib.util.spec_from_file_location(module_name, filepath)
            if not spec or not spec.loader:
                return
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        except Exception as e:
            logger.error(f"❌ [Hooks] 加载插件失败 {filepath}: {e}")
            return

        loaded_count = 0
        for _, obj in inspect.getmembers(module, inspect.isclass):
            # 只实例化在该文件中定义的子类，跳过 import 进来的基类/内置插件
            if (
                issubclass(obj, BasePlugin)
                and obj is not BasePlugin
                and obj.__module__ == module.__name__
            ):
                plugin_instance = obj()
                self.register(plugin_instance)
                loaded_count += 1
                logger.info(f"   ✅ [Hooks] 已加载插件: {plugin_instance.name}")

        if loaded_count == 0:
            logger.warning(f"   ⚠️ [Hooks] 文件 {filepath} 中未发现 BasePlugin 子类")

    def register(self, plugin: BasePlugin):
        """手动注册插件实例"""
        self.plugins.append(plugin)

    def trigger(self, event_name: str, *args, **kwargs):
        """
        触发无返回值的通知型钩子 (如 on_start)。
        """
        for plugin in self.plugins:
            method = getattr(plugin, event_name, None)
            if method:
                try:
                    method(self.context, *args, **kwargs)
                except Exception as e:
                    logger.error(
                        f"❌ [Hooks] 插件 {plugin.name} 执行 {event_name} 失败: {e}"
                    )

    def filter(self, event_name: str, initial_value: Any, *args, **kwargs) -> Any:
        """
        触发链式处理型钩子 (如 on_log_summary_generated)。
        初始值会依次经过所有插件的处理，类似于管道 (Pipeline)。
        """
        value = initial_value
        for plugin in self.plugins:
            method = getattr(plugin, event_name, None)
            if method:
                try:
                    new_value = method(self.context, value, *args, **kwargs)
                    # 如果插件返回了新值，则更新；如果返回 None，则保持原值
                    if new_value is not None:
                        value = new_value
                except Exception as e:
                    logger.error(
                        f"❌ [Hooks] 插件 {plugin.name} 执行 {event_name} 失败: {e}"
                    )
        return value
