# test_sheets_writer.py
import unittest
from unittest.mock import MagicMock, patch

import httplib2
from googleapiclient.errors import HttpError

from errors import UsageError, WriteError
from sheets_writer import GoogleSheetsWriter, leftover_range, quote_sheet_title

VALUES = [
    ["Date", "Worked Hours", "Logs", "Weekend"],
    ["2024-06-01", 0, "No logs", "Yes"],
]


class TestRangeHelpers(unittest.TestCase):

    def test_quote_sheet_title(self):
        self.assertEqual(quote_sheet_title("June"), "'June'")
        self.assertEqual(quote_sheet_title("Q3"), "'Q3'")
        self.assertEqual(quote_sheet_title("Jane's hours"), "'Jane''s hours'")

    def test_leftover_range(self):
        self.assertEqual(leftover_range("'June'!A1:D31"), "'June'!A32:D")
        self.assertEqual(leftover_range("'Q3!'!B5:E6"), "'Q3!'!B7:E")
        self.assertEqual(leftover_range("Sheet1!A1"), "Sheet1!A2:A")
        self.assertIsNone(leftover_range(""))


class TestGoogleSheetsWriter(unittest.TestCase):

    def setUp(self):
        creds_patcher = patch(
            "sheets_writer.service_account.Credentials.from_service_account_file"
        )
        self.from_file = creds_patcher.start()
        self.addCleanup(creds_patcher.stop)

        http_patcher = patch("sheets_writer.AuthorizedHttp")
        http_patcher.start()
        self.addCleanup(http_patcher.stop)

        build_patcher = patch("sheets_writer.build")
        self.build = build_patcher.start()
        self.addCleanup(build_patcher.stop)

        self.service = MagicMock()
        self.build.return_value = self.service
        self.spreadsheets = self.service.spreadsheets.return_value
        self.spreadsheets.get.return_value.execute.return_value = {
            "sheets": [{"properties": {"title": "June"}}, {"properties": {"title": "Old"}}]
        }
        self.values_api = self.spreadsheets.values.return_value
        self.values_api.update.return_value.execute.return_value = {
            "updatedRange": "'June'!A1:D2"
        }

    def test_writes_first_sheet_then_clears_leftover_rows(self):
        writer = GoogleSheetsWriter("/tmp/credentials.json")
        writer.write("sheet-123", VALUES)

        self.values_api.update.assert_called_once_with(
            spreadsheetId="sheet-123",
            range="'June'",
            valueInputOption="RAW",
            body={"values": VALUES},
        )
        self.values_api.clear.assert_called_once_with(
            spreadsheetId="sheet-123", range="'June'!A3:D", body={}
        )

    def test_sheet_title_is_quoted(self):
        self.spreadsheets.get.return_value.execute.return_value = {
            "sheets": [{"properties": {"title": "Q3"}}]
        }
        writer = GoogleSheetsWriter("/tmp/credentials.json")
        writer.write("sheet-123", VALUES)
        self.assertEqual(self.values_api.update.call_args[1]["range"], "'Q3'")

    def test_failed_update_keeps_existing_data(self):
        calls = []
        self.values_api.clear.side_effect = lambda **kwargs: calls.append("clear")

        def failing_update(**kwargs):
            calls.append("update")
            request = MagicMock()
            request.execute.side_effect = HttpError(
                httplib2.Response({"status": 503}), b'{"error": {"message": "backend"}}'
            )
            return request

        self.values_api.update.side_effect = failing_update
        writer = GoogleSheetsWriter("/tmp/credentials.json")
        with self.assertRaises(WriteError):
            writer.write("sheet-123", VALUES)

        self.assertEqual(calls, ["update"])
        self.values_api.clear.assert_not_called()

    def test_explicit_range_skips_lookup(self):
        self.values_api.update.return_value.execute.return_value = {
            "updatedRange": "Timesheet!A1:D2"
        }
        writer = GoogleSheetsWriter("/tmp/credentials.json")
        writer.write("sheet-123", VALUES, sheet_range="Timesheet!A1")

        self.spreadsheets.get.assert_not_called()
        self.assertEqual(self.values_api.update.call_args[1]["range"], "Timesheet!A1")
        self.assertEqual(self.values_api.clear.call_args[1]["range"], "Timesheet!A3:D")

    def test_unparsable_updated_range_skips_clear(self):
        self.values_api.update.return_value.execute.return_value = {}
        writer = GoogleSheetsWriter("/tmp/credentials.json")
        writer.write("sheet-123", VALUES)
        self.values_api.clear.assert_not_called()

    def test_http_error_becomes_write_error(self):
        resp = httplib2.Response({"status": 403})
        self.values_api.update.return_value.execute.side_effect = HttpError(
            resp, b'{"error": {"message": "forbidden"}}'
        )
        writer = GoogleSheetsWriter("/tmp/credentials.json")
        with self.assertRaises(WriteError):
            writer.write("sheet-123", VALUES)

    def test_timeout_becomes_write_error(self):
        self.spreadsheets.get.return_value.execute.side_effect = TimeoutError("timed out")
        writer = GoogleSheetsWriter("/tmp/credentials.json")
        with self.assertRaises(WriteError):
            writer.write("sheet-123", VALUES)

    def test_unreadable_credentials_is_usage_error(self):
        self.from_file.side_effect = FileNotFoundError("credentials.json")
        with self.assertRaises(UsageError):
            GoogleSheetsWriter("/tmp/credentials.json")
        self.build.assert_not_called()


if __name__ == "__main__":
    unittest.main()
