"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is offered as a storage backend because:
1. Users can see (and back up) their data directly in Sheets
2. No database setup required
3. Data survives reinstalling the app

TRADEOFFS:
- One cell holds at most 50,000 characters, so very long snapshot
  histories will not fit (we reject them loudly instead of truncating)
- No transactions (each save replaces one cell)

The worksheet has one row per key: key | value | updated_at.
Reads are retried; writes are not (a failed save is logged upstream and
the next mutation writes the full state again anyway).

gspread is synchronous, so every sheet call runs in a worker thread.
"""

import asyncio
from typing import Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from networth_tracker.config import GoogleSheetsSettings, get_settings
from networth_tracker.ids import utc_now
from networth_tracker.services.storage.interface import (
    BlobStorageInterface,
    PayloadTooLargeError,
    StorageConnectionError,
    StorageError,
)


# Column layout of the state worksheet
BLOB_COLUMNS = ["key", "value", "updated_at"]

# Google Sheets hard limit per cell
MAX_CELL_CHARS = 50_000


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and worksheet creation.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise StorageConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise StorageConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise StorageConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_state_sheet(self) -> gspread.Worksheet:
        """Get or create the state worksheet."""
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(self._settings.sheet_name)
        except gspread.WorksheetNotFound:
            # Create the sheet with headers
            sheet = spreadsheet.add_worksheet(
                title=self._settings.sheet_name,
                rows=10,
                cols=len(BLOB_COLUMNS),
            )
            sheet.append_row(BLOB_COLUMNS)
        return sheet


class GoogleSheetsBlobStorage(BlobStorageInterface):
    """
    Google Sheets implementation of blob storage.

    Each key occupies one row; the blob is the second column.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    @staticmethod
    def _find_row(rows: list[list[str]], key: str) -> Optional[int]:
        """1-based sheet row number of the key, skipping the header."""
        for idx, row in enumerate(rows[1:], start=2):
            if row and row[0] == key:
                return idx
        return None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _read(self, key: str) -> Optional[str]:
        try:
            sheet = self._client.get_state_sheet()
            rows = sheet.get_all_values()
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to read state: {e}")

        row_number = self._find_row(rows, key)
        if row_number is None:
            return None
        row = rows[row_number - 1]
        return row[1] if len(row) > 1 and row[1] else None

    def _write(self, key: str, value: str) -> None:
        try:
            sheet = self._client.get_state_sheet()
            rows = sheet.get_all_values()
            new_row = [key, value, utc_now().isoformat()]

            row_number = self._find_row(rows, key)
            if row_number is None:
                sheet.append_row(new_row, value_input_option="RAW")
            else:
                sheet.update(
                    range_name=f"A{row_number}:C{row_number}",
                    values=[new_row],
                    value_input_option="RAW",
                )
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save state: {e}")

    async def get_item(self, key: str) -> Optional[str]:
        """Read the blob for a key."""
        return await asyncio.to_thread(self._read, key)

    async def set_item(self, key: str, value: str) -> None:
        """Write the blob for a key, creating its row if needed."""
        if len(value) > MAX_CELL_CHARS:
            raise PayloadTooLargeError(
                f"State is {len(value)} characters; a sheet cell holds {MAX_CELL_CHARS}"
            )
        await asyncio.to_thread(self._write, key, value)
