# models.py
from dataclasses import dataclass, field
from typing import Dict, List

# 日期 (YYYY-MM-DD) -> 当天按顺序排列的提交信息
DailyLogGroup = Dict[str, List[str]]


@dataclass
class DayRecord:
    """单日工时记录"""

    date: str
    worked_hours: float
    log_summary: str
    is_weekend: bool

    @property
    def has_work(self) -> bool:
        return self.worked_hours > 0

    def to_row(self) -> list:
        """按表格列顺序输出: Date, Worked Hours, Logs, Weekend"""
        return [
            self.date,
            self.worked_hours,
            self.log_summary,
            "Yes" if self.is_weekend else "No",
        ]


@dataclass
class Timesheet:
    """一个自然月的完整工时表"""

    year: int
    month: int
    days: List[DayRecord] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return sum(day.worked_hours for day in self.days)

    @property
    def worked_days(self) -> int:
        return sum(1 for day in self.days if day.has_work)

    def __len__(self) -> int:
        return len(self.days)
