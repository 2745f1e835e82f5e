# report_builder.py
"""
工时表渲染
- 纯文本表格 (终端/日志输出)
- Google Sheet 的二维数组 (表头 + 每日一行)
- Jinja2 模板渲染的 HTML 本地副本
"""
import logging
import os
from datetime import datetime
from typing import List, Optional

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape

from models import Timesheet
from config import GlobalConfig
from context import RunContext

logger = logging.getLogger(__name__)


def build_sheet_values(
    timesheet: Timesheet, header: Optional[List[str]] = None
) -> List[list]:
    """表头 + 每日一行，列顺序固定为 Date, Worked Hours, Logs, Weekend"""
    header = header or GlobalConfig.SHEET_HEADER
    return [list(header)] + [day.to_row() for day in timesheet.days]


def generate_text_report(timesheet: Timesheet, author: str = "") -> str:
    """
    生成纯文本格式的工时表 (用于终端输出或 --dry-run)。
    多行的 Logs 只显示第一行。
    """
    lines = [
        "=" * 80,
        f"                     Git 工时表 {timesheet.year:04d}-{timesheet.month:02d}",
        "=" * 80,
        f"生成时间: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
    ]
    if author:
        lines.append(f"作者: {author}")
    lines.append(f"工作天数: {timesheet.worked_days}    总工时: {timesheet.total_hours}")
    lines.append("")
    lines.append(f" {'日期':<10} | {'工时':<5} | {'周末':<4} | 日志")
    lines.append("-" * 80)
    for day in timesheet.days:
        first_line = day.log_summary.splitlines()[0] if day.log_summary else ""
        weekend = "Yes" if day.is_weekend else "No"
        lines.append(
            f" {day.date:<10} | {day.worked_hours:<5} | {weekend:<4} | {first_line}"
        )
    lines.append("=" * 80)
    return "\n".join(lines)


def _get_css_styles(global_config: GlobalConfig) -> str:
    """读取 CSS 文件内容"""
    css_path = os.path.join(global_config.templates_dir, "styles.css")
    try:
        with open(css_path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        logger.error(f"❌ CSS 模板文件未找到: {css_path}")
        return "/* CSS 模板文件未找到 */"


def generate_html_report(
    timesheet: Timesheet, author: str, global_config: GlobalConfig
) -> str:
    """
    使用 Jinja2 模板引擎生成 HTML 工时表。
    LLM 输出通常是 Markdown 列表，这里先转换成 HTML。
    """
    templates_dir = global_config.templates_dir
    env = Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html", "xml", "html.j2"]),
    )

    rows = []
    for day in timesheet.days:
        rows.append(
            {
                "date": day.date,
                "worked_hours": day.worked_hours,
                "is_weekend": day.is_weekend,
                "logs_html": markdown.markdown(
                    day.log_summary, extensions=["sane_lists", "nl2br"]
                ),
            }
        )

    template_context = {
        "title": f"Git 工时表 - {timesheet.year:04d}-{timesheet.month:02d}",
        "author": author,
        "generation_time": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "css_content": _get_css_styles(global_config),
        "header": global_config.SHEET_HEADER,
        "rows": rows,
        "total_hours": timesheet.total_hours,
        "worked_days": timesheet.worked_days,
    }

    template_name = "timesheet.html.j2"
    try:
        template = env.get_template(template_name)
        logger.info(f"🎨 正在渲染 Jinja2 模板: {template_name}")
        return template.render(**template_context)
    except Exception as e:
        logger.error(f"❌ Jinja2 模板渲染失败: {e}", exc_info=True)
        return f"<h1>错误：模板渲染失败</h1><pre>{e}</pre>"


def save_html_report(html_content: str, context: RunContext) -> Optional[str]:
    """保存 HTML 工时表到 data/ 目录"""
    data_root = context.global_config.data_root_path
    filename = f"{context.global_config.OUTPUT_FILENAME_PREFIX}_{context.year:04d}{context.month:02d}.html"
    full_path = os.path.join(data_root, filename)

    try:
        os.makedirs(data_root, exist_ok=True)
        with open(full_path, "w", encoding="utf-8") as f:
            f.write(html_content)
        logger.info(f"✅ HTML 工时表已保存: {full_path}")
        return full_path
    except OSError as e:
        logger.error(f"❌ 保存 HTML 工时表失败 ({full_path}): {e}")
        return None
