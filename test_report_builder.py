# test_report_builder.py
import os
import shutil
import tempfile
import unittest

import report_builder
from config import GlobalConfig
from timesheet_builder import build_timesheet
from test_git_utils import make_context


def june_timesheet():
    daily_logs = {
        "2024-06-03": ["fix bug", "add test"],
        "2024-06-04": ["refactor"],
    }
    return build_timesheet(
        daily_logs, 2024, 6, lambda messages: "\n".join(f"- {m}" for m in messages)
    )


class TestSheetValues(unittest.TestCase):

    def test_header_and_rows(self):
        values = report_builder.build_sheet_values(june_timesheet())
        self.assertEqual(values[0], ["Date", "Worked Hours", "Logs", "Weekend"])
        self.assertEqual(len(values), 31)
        self.assertEqual(values[3], ["2024-06-03", 8, "- fix bug\n- add test", "No"])
        self.assertEqual(values[-1], ["2024-06-30", 0, "No logs", "Yes"])


class TestTextReport(unittest.TestCase):

    def test_contains_totals_and_each_day(self):
        text = report_builder.generate_text_report(june_timesheet(), author="Jane")
        self.assertIn("2024-06", text)
        self.assertIn("Jane", text)
        self.assertIn("16", text)
        for day in range(1, 31):
            self.assertIn(f"2024-06-{day:02d}", text)


class TestHtmlReport(unittest.TestCase):

    def test_renders_rows_and_markdown(self):
        html = report_builder.generate_html_report(
            june_timesheet(), "Jane <jane@example.com>", GlobalConfig()
        )
        self.assertIn("<table>", html)
        self.assertIn("2024-06-03", html)
        self.assertIn("<li>fix bug</li>", html)
        # 作者名需要被转义
        self.assertIn("Jane &lt;jane@example.com&gt;", html)

    def test_save_html_report(self):
        tmp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, tmp_dir, True)
        global_config = GlobalConfig()
        global_config.USER_BASE_PATH = tmp_dir

        path = report_builder.save_html_report(
            "<html></html>", make_context(global_config=global_config)
        )
        self.assertEqual(path, os.path.join(tmp_dir, "data", "Timesheet_202406.html"))
        with open(path, encoding="utf-8") as f:
            self.assertEqual(f.read(), "<html></html>")


if __name__ == "__main__":
    unittest.main()
