# sheets_writer.py
"""
Google Sheets 写入器
使用服务账号凭证 (credentials.json) 覆盖目标表格的第一个工作表。
"""
import logging
import re
from typing import List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from errors import UsageError, WriteError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def quote_sheet_title(title: str) -> str:
    """A1 表示法中的工作表名需加单引号，否则 "Q3"、"A1" 会被当成单元格"""
    return "'" + title.replace("'", "''") + "'"


def leftover_range(updated_range: str) -> Optional[str]:
    """
    根据 update 返回的 updatedRange (如 'June'!A1:D31)
    计算新数据下方需要清空的区域 (如 'June'!A32:D)。
    """
    sheet, _, cells = updated_range.rpartition("!")
    match = re.fullmatch(r"([A-Z]+)(\d+)(?::([A-Z]+)(\d+))?", cells)
    if not sheet or not match:
        return None
    first_col, first_row, last_col, last_row = match.groups()
    last_col = last_col or first_col
    last_row = int(last_row or first_row)
    return f"{sheet}!{first_col}{last_row + 1}:{last_col}"


class GoogleSheetsWriter:
    """
    负责把工时表写入 Google Sheet。
    - 构造时只读取本地凭证，不发起网络请求
    - write() 的任何失败都转换为 WriteError
    """

    def __init__(self, credentials_path: str, timeout: int = 60):
        try:
            credentials = service_account.Credentials.from_service_account_file(
                credentials_path, scopes=SCOPES
            )
        except (OSError, ValueError) as e:
            logger.error(f"❌ 无法加载 Google 凭证 ({credentials_path}): {e}")
            raise UsageError(f"无法加载 Google 凭证 ({credentials_path}): {e}") from e

        http = AuthorizedHttp(credentials, http=httplib2.Http(timeout=timeout))
        self.service = build("sheets", "v4", http=http, cache_discovery=False)
        logger.info("✅ Google Sheets 客户端已初始化")

    def _first_sheet_title(self, sheet_id: str) -> str:
        meta = (
            self.service.spreadsheets()
            .get(spreadsheetId=sheet_id, fields="sheets.properties.title")
            .execute()
        )
        sheets = meta.get("sheets", [])
        if not sheets:
            raise WriteError(f"表格 {sheet_id} 中没有任何工作表")
        return sheets[0]["properties"]["title"]

    def write(
        self, sheet_id: str, values: List[list], sheet_range: Optional[str] = None
    ):
        """
        先覆盖写入，成功后再清空新数据下方残留的旧行。
        写入失败时原有内容保持不变。
        """
        try:
            target = sheet_range or quote_sheet_title(self._first_sheet_title(sheet_id))
            logger.info(f"📤 正在写入 Google Sheet: {sheet_id} ({target}, {len(values)} 行)")

            response = (
                self.service.spreadsheets()
                .values()
                .update(
                    spreadsheetId=sheet_id,
                    range=target,
                    valueInputOption="RAW",
                    body={"values": values},
                )
                .execute()
            )

            stale = leftover_range(response.get("updatedRange", ""))
            if stale:
                self.service.spreadsheets().values().clear(
                    spreadsheetId=sheet_id, range=stale, body={}
                ).execute()
            else:
                logger.warning(
                    f"⚠️ 无法解析写入范围 {response.get('updatedRange')!r}，跳过清理旧行"
                )
        except HttpError as e:
            raise WriteError(f"Google Sheets API 错误: {e}") from e
        except GoogleAuthError as e:
            raise WriteError(f"Google 凭证认证失败: {e}") from e
        except (OSError, httplib2.HttpLib2Error) as e:
            # socket 超时属于 OSError
            raise WriteError(f"连接 Google Sheets 失败: {e}") from e

        logger.info("✅ Google Sheet 更新成功！")
