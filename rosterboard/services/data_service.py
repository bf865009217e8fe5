from typing import List, Optional, Protocol

from loguru import logger

from rosterboard.calculation.aggregator import calculate_summary
from rosterboard.models.document import Document
from rosterboard.models.summary import LoadResult
from rosterboard.normalization.documents import parse_documents
from rosterboard.normalization.normalizer import Normalizer
from rosterboard.parsing.csv_parser import parse_table
from rosterboard.parsing.gviz_parser import unwrap_gviz_response
from .sample_data import fallback_documents, sample_summary, sample_teams


class SheetSource(Protocol):
    """Anything able to hand back the raw spreadsheet bodies."""

    async def fetch_teams_csv(self) -> str: ...

    async def fetch_documents_payload(self) -> str: ...


class DataService:
    """Runs fetch -> parse -> group -> aggregate, degrading to sample data on failure.

    One instance per load-and-render cycle; nothing is shared between
    instances. ``load_all_data`` and ``load_documents`` never raise.
    """

    def __init__(self, source: SheetSource, normalizer: Optional[Normalizer] = None):
        self.source = source
        self.normalizer = normalizer or Normalizer()
        self.last_result: Optional[LoadResult] = None

    async def load_all_data(self) -> LoadResult:
        """Loads teams and their summary from the spreadsheet."""
        try:
            logger.info("Loading teams from Google Sheets...")
            csv_text = await self.source.fetch_teams_csv()
            records = parse_table(csv_text)
            teams = self.normalizer.normalize(records)
            summary = calculate_summary(teams)
            result = LoadResult(teams=teams, summary=summary)
            logger.success(
                f"Loaded {summary.total_teams} team(s) with {summary.total_players} player(s)."
            )
        except Exception as e:
            logger.exception(f"Error loading team data, falling back to sample data: {e}")
            result = LoadResult(
                teams=sample_teams(), summary=sample_summary(), from_sample=True
            )

        # Replaced wholesale, never merged
        self.last_result = result
        return result

    async def load_documents(self) -> List[Document]:
        """Loads the document list, falling back to the two default documents."""
        try:
            logger.info("Loading documents from Google Sheets...")
            payload_text = await self.source.fetch_documents_payload()
            payload = unwrap_gviz_response(payload_text)
            documents = parse_documents(payload)
        except Exception as e:
            logger.exception(f"Error loading documents, using fallback list: {e}")
            return fallback_documents()
        return documents
