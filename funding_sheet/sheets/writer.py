"""Google Sheets writer built on gspread.

Each SheetUpdate replaces the target worksheet wholesale: the sheet is found
or created, cleared, refilled with header and body rows, and the summary
cells are written on top. gspread is synchronous, so the async entry point
runs it in a worker thread.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass, field

import gspread
from google.oauth2.service_account import Credentials

from funding_sheet.exceptions import ConfigurationError
from funding_sheet.sheets.layout import SheetUpdate

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

MIN_ROWS = 1000
MIN_COLS = 26


@dataclass(frozen=True)
class SheetCredentials:
    sheet_id: str
    service_account_email: str
    private_key: str = field(repr=False)

    def validate(self) -> None:
        if not self.sheet_id:
            raise ConfigurationError("Missing google sheet ID!")
        if not self.service_account_email or not self.private_key:
            raise ConfigurationError("Missing google account credential!")

    def service_account_info(self) -> dict[str, str]:
        return {
            "type": "service_account",
            "client_email": self.service_account_email,
            # keys stored in .env files usually carry literal "\n" sequences
            "private_key": self.private_key.replace("\\n", "\n"),
            "token_uri": TOKEN_URI,
        }


def authorize(credentials: SheetCredentials) -> gspread.Client:
    credentials.validate()
    creds = Credentials.from_service_account_info(
        credentials.service_account_info(), scopes=SCOPES
    )
    return gspread.authorize(creds)


class SheetWriter:
    """Applies SheetUpdates to one spreadsheet."""

    def __init__(self, credentials: SheetCredentials, client: gspread.Client | None = None) -> None:
        credentials.validate()
        self._credentials = credentials
        self._client = client
        self._spreadsheet: gspread.Spreadsheet | None = None
        self._lock = threading.Lock()

    async def write(self, update: SheetUpdate) -> None:
        await asyncio.to_thread(self.write_sync, update)

    def write_sync(self, update: SheetUpdate) -> None:
        worksheet = self._ensure_worksheet(update)

        logger.info(f"Writing {len(update.rows)} records to sheet {update.sheet_name}")
        worksheet.clear()
        worksheet.update(
            values=[update.header, *update.rows],
            range_name="A1",
            value_input_option="RAW",
        )

        worksheet.batch_update(
            [
                data
                for cell in update.summary_cells
                for data in (
                    {"range": cell.label_cell, "values": [[cell.label]]},
                    {"range": cell.value_cell, "values": [[cell.formula]]},
                )
            ],
            value_input_option="USER_ENTERED",
        )
        worksheet.batch_format(
            [
                {"range": cell.label_cell, "format": {"textFormat": {"bold": True}}}
                for cell in update.summary_cells
            ]
        )
        logger.info(f"Records have been successfully written to sheet {update.sheet_name}")

    def _open(self) -> gspread.Spreadsheet:
        with self._lock:
            if self._spreadsheet is None:
                if self._client is None:
                    self._client = authorize(self._credentials)
                self._spreadsheet = self._client.open_by_key(self._credentials.sheet_id)
            return self._spreadsheet

    def _ensure_worksheet(self, update: SheetUpdate) -> gspread.Worksheet:
        spreadsheet = self._open()
        rows_needed = max(MIN_ROWS, len(update.rows) + 1)

        try:
            worksheet = spreadsheet.worksheet(update.sheet_name)
        except gspread.WorksheetNotFound:
            logger.info(f"Creating sheet {update.sheet_name}")
            return spreadsheet.add_worksheet(
                title=update.sheet_name, rows=rows_needed, cols=MIN_COLS
            )

        if worksheet.row_count < rows_needed or worksheet.col_count < MIN_COLS:
            worksheet.resize(
                rows=max(worksheet.row_count, rows_needed),
                cols=max(worksheet.col_count, MIN_COLS),
            )
        return worksheet
