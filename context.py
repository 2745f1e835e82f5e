# context.py
"""
运行时配置的数据模型
"""
from dataclasses import dataclass
from config import GlobalConfig


@dataclass
class RunContext:
    """
    封装一次运行所需的所有配置和状态。
    这是从 CLI 传递到 Orchestrator 的唯一对象。
    """

    # --- 凭证与目标 ---
    api_key: str
    author: str
    sheet_id: str

    # --- 数据源 ---
    # 本地仓库路径或 GitHub URL
    repo_path: str

    # --- 目标月份 (month 从 1 开始) ---
    year: int
    month: int

    # --- 工时与 AI 参数 ---
    daily_hours: float
    llm_id: str

    # --- 标志 ---
    no_ai: bool
    html: bool
    no_browser: bool
    dry_run: bool

    # --- 全局配置 ---
    # 包含凭证路径、常量和 .env 加载的数据
    global_config: GlobalConfig

    @property
    def since_date(self) -> str:
        """目标月份第一天 (YYYY-MM-01)"""
        return f"{self.year:04d}-{self.month:02d}-01"

    @property
    def month_label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
