# errors.py
"""
工时表生成流程中的错误类型。
- UsageError / LogFetchError: 致命，终止运行
- FormatterError: 单日可恢复，回退到原始提交信息
- WriteError: 仅报告，进程仍正常退出
"""


class TimesheetError(Exception):
    """所有工时表错误的基类"""


class UsageError(TimesheetError):
    """缺少必要参数或凭证文件"""


class LogFetchError(TimesheetError):
    """日志源不可用或执行失败"""


class FormatterError(TimesheetError):
    """LLM 格式化提交信息失败"""


class WriteError(TimesheetError):
    """写入 Google Sheet 失败"""
