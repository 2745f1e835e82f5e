# data_sources/base.py
from abc import ABC, abstractmethod
from models import DailyLogGroup


class DataSource(ABC):
    """
    日志源抽象基类
    屏蔽了底层是本地 Git 还是远程 API 的差异。
    """

    @abstractmethod
    def validate(self) -> bool:
        """
        验证数据源是否可用。
        例如：本地路径是否存在且为 Git 仓库，或者远程仓库是否可访问。
        """
        pass

    @abstractmethod
    def get_raw_log(self) -> str:
        """
        获取目标月份起该作者的提交记录。
        返回多行文本，每行形如 '<YYYY-MM-DD> - <message>'。
        失败时抛出 LogFetchError。
        """
        pass

    @abstractmethod
    def get_daily_logs(self) -> DailyLogGroup:
        """获取按日期分组后的提交信息"""
        pass
