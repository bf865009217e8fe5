import sys
import asyncio
from typing import List

# --- Settings/Logging ---
from rosterboard.logging.setup import setup_logging
from rosterboard.config.settings import settings

setup_logging()

from loguru import logger

# --- Pipeline Imports ---
from rosterboard.fetchers.sheet_fetcher import SheetFetcher
from rosterboard.models.document import Document
from rosterboard.models.summary import LoadResult
from rosterboard.services.data_service import DataService

from rich import print
from rich.panel import Panel
from rich.table import Table


def render_summary(result: LoadResult) -> None:
    summary = result.summary
    source = "sample data" if result.from_sample else "Google Sheets"
    print(
        Panel(
            f"Drużyny: [bold]{summary.total_teams}[/bold]\n"
            f"Zawodnicy: [bold]{summary.total_players}[/bold]\n"
            f"Lider: [bold]{summary.champion_team}[/bold]",
            title="Podsumowanie",
            subtitle=f"source: {source}",
        )
    )


def render_teams(result: LoadResult) -> None:
    table = Table(title="Drużyny")
    table.add_column("#", justify="right")
    table.add_column("Drużyna")
    table.add_column("Klasa")
    table.add_column("Zawodnicy", justify="right")
    table.add_column("Kapitan")
    table.add_column("Dyscypliny")
    table.add_column("Pkt", justify="right")

    for team in result.teams:
        table.add_row(
            str(team.id),
            team.short_name,
            team.class_name,
            str(team.total_players),
            team.captain or "Brak kapitana",
            ", ".join(d.name for d in team.disciplines),
            f"{team.total_points:g}",
        )
    print(table)


def render_documents(documents: List[Document]) -> None:
    table = Table(title="Dokumenty")
    table.add_column("Nazwa")
    table.add_column("Typ")
    table.add_column("Data")
    table.add_column("Link")

    for doc in documents:
        table.add_row(
            doc.name,
            doc.file_type,
            doc.date.strftime("%Y-%m-%d") if doc.date else (doc.raw_date or "Brak daty"),
            doc.file_url,
        )
    print(table)


async def main() -> None:
    """Main entry point: load teams and documents once and print them."""
    logger.info("Starting rosterboard - fetch, normalize and summarize")

    fetcher = SheetFetcher(app_settings=settings)
    try:
        service = DataService(fetcher)
        result, documents = await asyncio.gather(
            service.load_all_data(), service.load_documents()
        )

        if result.from_sample:
            logger.warning("Showing sample data; the spreadsheet could not be loaded.")

        render_summary(result)
        render_teams(result)
        render_documents(documents)
    finally:
        await fetcher.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
