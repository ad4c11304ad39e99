# sync/google_sheets_adapter.py

import logging

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiError

from sync.errors import StoreUnavailable
from sync.google_auth import get_credentials


logger = logging.getLogger(__name__)

# API, auth and transport failures
STORE_ERRORS = (GoogleApiError, GoogleAuthError, httplib2.HttpLib2Error, OSError)


class GoogleSheetsAdapter:
    """
    Grid store backed by the Sheets values API.

    fetch / persist work on rectangular A1 ranges; nothing here knows about
    regions or fulfillment data.
    """

    def __init__(self, spreadsheet_id: str, service=None):
        if not spreadsheet_id:
            raise RuntimeError("SPREADSHEET_ID environment variable is not set.")
        self.spreadsheet_id = spreadsheet_id
        self.service = service or build(
            "sheets", "v4", credentials=get_credentials(), cache_discovery=False
        )

    def fetch(self, range_a1: str) -> list[list]:
        try:
            result = self.service.spreadsheets().values().get(
                spreadsheetId=self.spreadsheet_id,
                range=range_a1,
            ).execute()
        except STORE_ERRORS as exc:
            raise StoreUnavailable(str(exc)) from exc

        return [list(row) for row in result.get("values", [])]

    def persist(self, range_a1: str, values: list[list]):
        logger.info("Updating sheet data with range: %s", range_a1)
        try:
            self.service.spreadsheets().values().update(
                spreadsheetId=self.spreadsheet_id,
                range=range_a1,
                valueInputOption="RAW",
                body={"values": [self._normalize_row(row) for row in values]},
            ).execute()
        except STORE_ERRORS as exc:
            raise StoreUnavailable(str(exc)) from exc

    def _normalize_row(self, row):
        return [self._normalize_cell(value) for value in row]

    def _normalize_cell(self, value):
        """
        Convert Python values into Google Sheets-safe scalars.
        """
        if value is None:
            return ""
        if isinstance(value, (list, dict)):
            return str(value)
        return value
