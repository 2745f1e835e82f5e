# config.py
"""
[V1.0] 全局配置
[V1.1] 更新：新增 GitHub 远程数据源与 Google Sheets 超时配置
[V1.2] 更新：区分程序资源目录与用户文件目录，支持 pip 安装后运行
"""
import os
from dotenv import load_dotenv


# --- 程序资源目录 (prompts/ templates/ plugins/ 随程序一起安装) ---
SCRIPT_BASE_PATH = os.path.abspath(os.path.dirname(__file__))


def resolve_user_base_path(script_base_path: str) -> str:
    """
    用户文件 (.env, credentials.json, data/) 所在目录。
    - 环境变量 GIT_TIMESHEET_HOME 优先
    - 从源码目录运行 (存在 pyproject.toml) 时为脚本目录
    - pip 安装后脚本目录位于 site-packages，改用当前工作目录
    """
    home = os.getenv("GIT_TIMESHEET_HOME")
    if home:
        return os.path.abspath(os.path.expanduser(home))
    if os.path.isfile(os.path.join(script_base_path, "pyproject.toml")):
        return script_base_path
    return os.getcwd()


USER_BASE_PATH = resolve_user_base_path(SCRIPT_BASE_PATH)
env_path = os.path.join(USER_BASE_PATH, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
    print(f"✅ 已从用户目录加载 .env: {env_path}")
else:
    load_dotenv()
    print("⚠️ 未在用户目录找到 .env，尝试从 CWD 加载。")


class GlobalConfig:
    """
    Git 工时表生成器的全局应用配置。
    """

    # --- 路径配置 ---
    SCRIPT_BASE_PATH: str = SCRIPT_BASE_PATH
    USER_BASE_PATH: str = USER_BASE_PATH
    DATA_ROOT_DIR_NAME: str = "data"

    # Google 服务账号凭证，可用 GOOGLE_CREDENTIALS_PATH 指定其他位置
    CREDENTIALS_PATH: str = os.getenv("GOOGLE_CREDENTIALS_PATH") or os.path.join(
        USER_BASE_PATH, "credentials.json"
    )

    # --- Git 日志格式 ---
    # 每行输出形如 "2024-06-03 - fix bug"
    GIT_LOG_SEPARATOR: str = " - "
    GIT_LOG_PRETTY: str = "%ad - %s"
    GIT_TIMEOUT: int = 30

    # --- 工时表默认值 ---
    DEFAULT_HOURS: float = 8
    NO_LOGS_TEXT: str = "No logs"
    SHEET_HEADER: list[str] = ["Date", "Worked Hours", "Logs", "Weekend"]
    # 为空时写入表格的第一个工作表
    SHEET_RANGE: str = os.getenv("GOOGLE_SHEET_RANGE", "")
    SHEETS_TIMEOUT: int = 60

    # --- 文件名 ---
    OUTPUT_FILENAME_PREFIX = "Timesheet"

    # =================================================================
    # --- AI 供应商配置 ---
    # =================================================================

    # 1. 应用程序默认值
    DEFAULT_LLM: str = os.getenv("DEFAULT_LLM", "openai").lower()

    # 2. 供应商的默认模型
    DEFAULT_MODEL_OPENAI: str = os.getenv("OPENAI_MODEL", "gpt-4")
    DEFAULT_MODEL_DEEPSEEK: str = "deepseek-chat"
    DEFAULT_MODEL_GEMINI: str = "gemini-2.5-flash"

    # 3. 供应商特定配置
    DEEPSEEK_BASE_URL: str = "https://api.deepseek.com"

    # 单次 LLM 调用超时 (秒)，超时按格式化失败处理
    LLM_TIMEOUT: float = 60.0

    # =================================================================
    # --- GitHub 远程数据源配置 ---
    # =================================================================
    GITHUB_TOKEN: str = os.getenv("GITHUB_TOKEN", "")
    GITHUB_MAX_COMMITS: int = 500
    # GitHub API 只返回 UTC 时间，按此时区换算提交日期 (IANA 名称，如 Asia/Shanghai)
    # 为空时使用本机时区
    GITHUB_TIMEZONE: str = os.getenv("GITHUB_TIMEZONE", "")

    def is_provider_configured(self, provider: str, api_key: str) -> bool:
        """
        检查供应商是否具备可用的 API 密钥。
        mock 供应商不需要密钥。
        """
        if provider == "mock":
            return True
        return bool(api_key)

    @property
    def data_root_path(self) -> str:
        return os.path.join(self.USER_BASE_PATH, self.DATA_ROOT_DIR_NAME)

    @property
    def prompts_dir(self) -> str:
        return os.path.join(self.SCRIPT_BASE_PATH, "prompts")

    @property
    def templates_dir(self) -> str:
        return os.path.join(self.SCRIPT_BASE_PATH, "templates")

    @property
    def plugins_dir(self) -> str:
        return os.path.join(self.SCRIPT_BASE_PATH, "plugins")
