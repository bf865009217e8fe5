# rosterboard/fetchers/sheet_fetcher.py

from typing import Optional

import httpx
from loguru import logger

from rosterboard.config.settings import AppSettings
from .base_fetcher import BaseFetcher

GVIZ_BASE_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq"


class SheetFetcher(BaseFetcher):
    """Reads the published tournament spreadsheet from Google Sheets."""

    source_name: str = "Google Sheets"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        app_settings: Optional[AppSettings] = None,
    ):
        super().__init__(client, app_settings)

    @property
    def teams_csv_url(self) -> str:
        return self.settings.resolved_teams_csv_url

    @property
    def documents_url(self) -> str:
        return GVIZ_BASE_URL.format(sheet_id=self.settings.sheet_id)

    async def fetch_teams_csv(self) -> str:
        """Fetch the teams sheet as delimited text."""
        logger.info(f"Fetching teams CSV from {self.teams_csv_url}")
        text = await self.fetch_text(self.teams_csv_url)
        logger.info(f"Received {len(text)} characters of teams CSV.")
        return text

    async def fetch_documents_payload(self) -> str:
        """Fetch the documents sheet as a Google Visualization response (JS-wrapped JSON)."""
        params = {
            "tqx": "out:json",
            "sheet": self.settings.documents_sheet_name,
            "range": self.settings.documents_range,
        }
        logger.info(
            f"Fetching documents sheet '{self.settings.documents_sheet_name}' ({self.settings.documents_range})"
        )
        return await self.fetch_text(self.documents_url, params=params)
