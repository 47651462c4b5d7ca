# src/tests/test_exporter.py
import csv
import json

import pytest
from lalparser.common.exporter import DataExporter

DATA = {
    "logins": [
        {
            "login": "alice",
            "password": "s3cret",
            "display_name": "Alice",
            "email": None,
            "old_password": "older",
            "invalid": False,
        },
        {
            "login": "bob",
            "password": "hunter2",
            "display_name": None,
            "email": "bob@example.com",
            "old_password": None,
            "invalid": True,
        },
    ],
    "comments": [{"comment": "// personal"}],
}


def test_export_json(tmp_path):
    """JSON export keeps every table and adds metadata"""
    out = tmp_path / "report.json"

    DataExporter().export(DATA, out, "json")

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["metadata"]["format"] == "lal"
    assert payload["logins"] == DATA["logins"]
    assert payload["comments"] == DATA["comments"]


def test_export_csv_writes_one_file_per_table(tmp_path):
    out = tmp_path / "report.csv"

    DataExporter().export(DATA, out, "csv")

    export_dir = tmp_path / "report_export"
    with open(export_dir / "logins.csv", encoding="utf-8-sig", newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["login"] for r in rows] == ["alice", "bob"]
    assert list(rows[0].keys())[:2] == ["login", "password"]
    assert (export_dir / "comments.csv").exists()


def test_export_markdown_marks_passwords(tmp_path):
    out = tmp_path / "report.md"

    DataExporter(banner="BANNER").export(DATA, out, "md")

    text = out.read_text(encoding="utf-8")
    assert "BANNER" in text
    assert "### 1. Alice" in text
    assert "- **Login**: alice" in text
    assert "- **Password**: 🔐 `s3cret`" in text
    assert "- **Old Password**: 🔐 `older`" in text
    assert "### 1. // personal" in text


def test_export_text(tmp_path):
    out = tmp_path / "report.txt"

    DataExporter().export(DATA, out, "TXT")

    text = out.read_text(encoding="utf-8")
    assert text.startswith("LAL CREDENTIAL REPORT")
    assert "[LOGINS]" in text
    assert "bob@example.com" in text


def test_export_unknown_format(tmp_path):
    with pytest.raises(ValueError, match="Unsupported export format"):
        DataExporter().export(DATA, tmp_path / "report.xml", "xml")


def test_export_empty_data_writes_nothing(tmp_path):
    out = tmp_path / "report.json"

    DataExporter().export({}, out, "json")

    assert not out.exists()
