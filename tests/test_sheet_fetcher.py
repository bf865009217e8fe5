import asyncio

import httpx
import pytest
from tenacity import wait_none

from rosterboard.config.settings import AppSettings
from rosterboard.fetchers.base_fetcher import BaseFetcher, FetchError
from rosterboard.fetchers.sheet_fetcher import SheetFetcher
from rosterboard.services.data_service import DataService
from rosterboard.services.sample_data import sample_summary


def make_fetcher(handler, **settings_overrides):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    app_settings = AppSettings(sheet_id="SHEET123", **settings_overrides)
    return SheetFetcher(client=client, app_settings=app_settings)


def run_with(fetcher, coro_factory):
    async def runner():
        try:
            return await coro_factory(fetcher)
        finally:
            await fetcher.close()

    return asyncio.run(runner())


def test_fetch_teams_csv_uses_published_url():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, text="Nazwa,Klasa\nOrły,3A\n")

    fetcher = make_fetcher(handler)
    text = run_with(fetcher, lambda f: f.fetch_teams_csv())

    assert text.startswith("Nazwa,Klasa")
    assert str(seen[0]) == (
        "https://docs.google.com/spreadsheets/d/e/SHEET123/pub?output=csv"
    )


def test_explicit_teams_csv_url_wins():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, text="")

    fetcher = make_fetcher(handler, teams_csv_url="https://example.test/teams.csv")
    run_with(fetcher, lambda f: f.fetch_teams_csv())
    assert seen == ["https://example.test/teams.csv"]


def test_fetch_documents_payload_sends_gviz_query():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, text="google.visualization.Query.setResponse({});")

    fetcher = make_fetcher(handler)
    run_with(fetcher, lambda f: f.fetch_documents_payload())

    url = seen[0]
    assert url.path == "/spreadsheets/d/SHEET123/gviz/tq"
    assert url.params["tqx"] == "out:json"
    assert url.params["sheet"] == "Dokumenty"
    assert url.params["range"] == "A2:F20"


def test_non_retryable_status_raises_fetch_error_without_retry():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(404, text="not found")

    fetcher = make_fetcher(handler)
    with pytest.raises(FetchError):
        run_with(fetcher, lambda f: f.fetch_teams_csv())
    assert len(calls) == 1


def test_http_failure_through_data_service_yields_sample_summary():
    fetcher = make_fetcher(lambda request: httpx.Response(403, text="forbidden"))
    result = run_with(fetcher, lambda f: DataService(f).load_all_data())

    assert result.from_sample is True
    assert result.summary == sample_summary()


def test_end_to_end_with_mock_transport():
    csv_text = "Nazwa;Klasa;Imie;Nazwisko;Kapitan\nOrły;3A;Jan;Kowalski;TRUE\n"
    fetcher = make_fetcher(lambda request: httpx.Response(200, text=csv_text))
    result = run_with(fetcher, lambda f: DataService(f).load_all_data())

    assert result.from_sample is False
    assert result.teams[0].captain == "Jan Kowalski"
    assert result.summary.total_players == 1


@pytest.fixture
def no_backoff(monkeypatch):
    monkeypatch.setattr(BaseFetcher._make_request.retry, "wait", wait_none())


def test_injected_settings_configure_default_client():
    app_settings = AppSettings(http_timeout_seconds=5.0, user_agent="rosterboard-test/1")
    fetcher = SheetFetcher(app_settings=app_settings)
    try:
        assert fetcher.settings is app_settings
        assert fetcher.client.timeout == httpx.Timeout(5.0)
        assert fetcher.client.headers["User-Agent"] == "rosterboard-test/1"
    finally:
        asyncio.run(fetcher.close())


@pytest.mark.parametrize("status", [408, 429, 503])
def test_retryable_status_is_retried_then_raises_fetch_error(no_backoff, status):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(status, text="busy")

    fetcher = make_fetcher(handler)
    with pytest.raises(FetchError):
        run_with(fetcher, lambda f: f.fetch_teams_csv())
    assert len(calls) == 4


def test_transient_status_recovers_on_retry(no_backoff):
    responses = [httpx.Response(503), httpx.Response(200, text="Nazwa,Klasa\n")]

    fetcher = make_fetcher(lambda request: responses.pop(0))
    assert run_with(fetcher, lambda f: f.fetch_teams_csv()) == "Nazwa,Klasa\n"
    assert responses == []


def test_connection_error_becomes_fetch_error(no_backoff):
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = make_fetcher(handler)
    with pytest.raises(FetchError):
        run_with(fetcher, lambda f: f.fetch_teams_csv())
    assert len(calls) == 4
