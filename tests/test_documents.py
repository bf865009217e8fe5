import json
from datetime import datetime

import pytest

from rosterboard.normalization.documents import parse_documents, parse_sheet_date
from rosterboard.parsing.gviz_parser import GvizParseError, unwrap_gviz_response


def gviz_text(payload):
    return (
        "/*O_o*/\n"
        f"google.visualization.Query.setResponse({json.dumps(payload)});"
    )


def doc_row(*values):
    return {"c": [None if v is None else {"v": v} for v in values]}


def test_unwrap_gviz_response():
    payload = {"version": "0.6", "table": {"rows": []}}
    assert unwrap_gviz_response(gviz_text(payload)) == payload


def test_unwrap_rejects_missing_envelope():
    with pytest.raises(GvizParseError):
        unwrap_gviz_response('{"table": {"rows": []}}')


def test_unwrap_rejects_invalid_json():
    with pytest.raises(GvizParseError):
        unwrap_gviz_response("google.visualization.Query.setResponse({not json});")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Date(2024,0,15)", datetime(2024, 1, 15)),
        ("Date(2024,11,31,18,30,0)", datetime(2024, 12, 31, 18, 30)),
        ("2024-03-01", datetime(2024, 3, 1)),
        ("2024-03-01T10:00:00+02:00", datetime(2024, 3, 1, 8, 0)),
        ("wczoraj", None),
        (None, None),
        ("", None),
    ],
)
def test_parse_sheet_date(raw, expected):
    assert parse_sheet_date(raw) == expected


def test_parse_documents_drops_nameless_rows_and_sorts_newest_first():
    payload = {
        "table": {
            "rows": [
                doc_row(1, "Regulamin", "Zasady", "https://x/reg.pdf", "PDF", "Date(2024,0,10)"),
                doc_row(2, None, "Bez nazwy", "#", "PDF", "Date(2024,5,1)"),
                doc_row(3, "Zgłoszenie", None, "https://forms/x", "FORM", "Date(2024,2,1)"),
                doc_row(4, "Harmonogram", "Terminy", None, None, None),
            ]
        }
    }
    documents = parse_documents(payload)

    assert [d.name for d in documents] == ["Zgłoszenie", "Regulamin", "Harmonogram"]
    form = documents[0]
    assert form.is_form is True
    assert form.description == "Brak opisu"
    schedule = documents[2]
    assert schedule.file_url == "#"
    assert schedule.file_type == "PDF"
    assert schedule.date is None
    assert schedule.is_form is False


def test_parse_documents_defaults_id_to_position():
    payload = {"table": {"rows": [{"c": [None, {"v": "Plan"}]}]}}
    assert parse_documents(payload)[0].id == "1"


def test_parse_documents_without_table():
    assert parse_documents({}) == []
    assert parse_documents({"table": {}}) == []


def test_whole_number_cells_lose_float_suffix():
    payload = {
        "table": {
            "rows": [
                {"c": [{"v": 1.0, "f": "1"}, {"v": "Regulamin"}, {"v": 2024.0}]},
                {"c": [{"v": 2.5}, {"v": "Aneks"}]},
            ]
        }
    }
    documents = parse_documents(payload)
    assert [d.id for d in documents] == ["1", "2.5"]
    assert documents[0].description == "2024"
