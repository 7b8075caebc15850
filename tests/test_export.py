"""
Tests for CSV export
"""
from datetime import datetime

from fastapi import status

from touchpoints.services.export import export_filename, parse_csv, to_csv


def test_quotes_only_when_needed():
    text = to_csv([{"name": "plain", "note": 'He said, "hi"'}])
    lines = text.split("\r\n")
    assert lines[0] == "name,note"
    assert lines[1] == 'plain,"He said, ""hi"""'


def test_round_trip_with_commas_quotes_and_newlines():
    rows = [
        {"id": "1", "location": 'He said, "hi"', "note": "line one\nline two"},
        {"id": "2", "location": "plain", "note": 'carriage\rreturn, and "quotes"'},
    ]
    assert parse_csv(to_csv(rows)) == rows


def test_none_and_datetimes_are_rendered():
    rows = [{"id": "1", "created_at": datetime(2024, 1, 1, 10, 0), "ip": None}]
    assert parse_csv(to_csv(rows)) == [{"id": "1", "created_at": "2024-01-01T10:00:00", "ip": ""}]


def test_header_covers_all_columns():
    text = to_csv([{"a": "1"}, {"a": "2", "b": "3"}])
    assert text.split("\r\n")[0] == "a,b"


def test_parse_empty_text():
    assert parse_csv("") == []


def test_export_filename():
    name = export_filename("store-visits", datetime(2024, 5, 6, 7, 8, 9))
    assert name == "store-visits-export-2024-05-06T07-08-09Z.csv"


def test_export_endpoint(client, auth_headers, store_visit):
    store_visit["location"] = 'Main St, "Unit 4"'
    client.post("/api/v1/store-visits/", json=store_visit, headers=auth_headers)

    response = client.get("/api/v1/export/store-visits", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="store-visits-export-' in response.headers["content-disposition"]
    [row] = parse_csv(response.text)
    assert row["location"] == 'Main St, "Unit 4"'
    assert row["owner_contact"] == store_visit["owner_contact"]


def test_export_unknown_workflow(client, auth_headers):
    response = client.get("/api/v1/export/purchases", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_export_without_rows(client, auth_headers):
    response = client.get("/api/v1/export/login-signup", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
