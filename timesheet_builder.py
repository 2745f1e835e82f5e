# timesheet_builder.py
"""
工时表组装器
按自然月逐日遍历，把分组后的提交信息整理成完整的每日工时记录。
- 没有提交的日子也会生成一行 ("No logs", 0 小时)
- 周末即使有提交也记 0 小时
- 格式化失败时回退到原始提交信息，不会中断整个流程
"""
import calendar
import logging
from datetime import date
from typing import Callable, List, Optional

from config import GlobalConfig
from models import DailyLogGroup, DayRecord, Timesheet

logger = logging.getLogger(__name__)

# 接收一天内按顺序排列的原始提交信息，返回润色后的文本
Formatter = Callable[[List[str]], str]
# 插件过滤链，接收并返回单日摘要
SummaryFilter = Callable[[str], str]

NO_LOGS_TEXT = GlobalConfig.NO_LOGS_TEXT


def days_in_month(year: int, month: int) -> int:
    """返回指定月份的天数 (含闰年)"""
    return calendar.monthrange(year, month)[1]


def is_weekend(day: date) -> bool:
    # Monday == 0 ... Saturday == 5, Sunday == 6
    return day.weekday() >= 5


def summarize_day(
    day_str: str,
    raw_messages: List[str],
    formatter: Formatter,
    summary_filter: Optional[SummaryFilter] = None,
) -> str:
    """
    生成单日的 Logs 列内容。
    summary_filter 作用于最终写入的文本，无论来自格式化结果还是回退的原始信息。
    """
    if not raw_messages:
        return NO_LOGS_TEXT
    apply_filter = summary_filter or (lambda text: text)

    try:
        summary = formatter(raw_messages)
    except Exception as e:
        logger.warning(f"⚠️ {day_str} 的提交信息格式化失败，使用原始信息: {e}")
        summary = ""
    else:
        if not summary:
            logger.warning(f"⚠️ {day_str} 的格式化结果为空，使用原始信息")

    if summary:
        summary = apply_filter(summary)
    return summary or apply_filter("\n".join(raw_messages))


def build_timesheet(
    daily_logs: DailyLogGroup,
    year: int,
    month: int,
    formatter: Formatter,
    daily_hours: float = GlobalConfig.DEFAULT_HOURS,
    summary_filter: Optional[SummaryFilter] = None,
) -> Timesheet:
    """
    为 (year, month) 生成工时表。
    每个有提交的工作日记 daily_hours 小时，其余为 0。
    formatter 每个有提交的日子只调用一次。
    """
    if daily_hours < 0:
        raise ValueError(f"daily_hours 不能为负数: {daily_hours}")

    timesheet = Timesheet(year=year, month=month)
    last_day = days_in_month(year, month)
    logger.info(f"🗓️ 正在生成 {year:04d}-{month:02d} 的工时表 (共 {last_day} 天)...")

    for day_of_month in range(1, last_day + 1):
        current = date(year, month, day_of_month)
        day_str = current.isoformat()
        weekend = is_weekend(current)

        raw_messages = daily_logs.get(day_str, [])
        log_summary = summarize_day(
            day_str, raw_messages, formatter, summary_filter
        )
        hours = daily_hours if raw_messages and not weekend else 0

        timesheet.days.append(
            DayRecord(
                date=day_str,
                worked_hours=hours,
                log_summary=log_summary,
                is_weekend=weekend,
            )
        )

    logger.info(
        f"✅ 工时表生成完毕: {timesheet.worked_days} 个工作日，共 {timesheet.total_hours} 小时"
    )
    return timesheet
