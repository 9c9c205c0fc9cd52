'''
    File Name: test_pdf_report.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
import io
import re

from matplotlib.figure import Figure

from reports import pdf_report
from reports.pdf_report import build_report, default_report_name, paginate
from conftest import make_tx


def _png() -> bytes:
    fig = Figure(figsize=(2, 1))
    fig.add_subplot(111).plot([0, 1], [1, 0])
    buf = io.BytesIO()
    fig.savefig(buf, format="png")
    return buf.getvalue()


def test_default_report_name():
    assert default_report_name("2024-01-01", "2024-01-31") == "finance-report-2024-01-01-2024-01-31.pdf"


def test_paginate():
    rows = list(range(10))
    assert paginate(rows, 4, 3) == [[0, 1, 2, 3], [4, 5, 6], [7, 8, 9]]
    assert paginate([], 4, 3) == [[]]


def test_build_report_writes_pdf(tmp_path, scenario_a):
    out = tmp_path / "report.pdf"
    assert build_report(scenario_a, "2024-01-01", "2024-02-29", out, chart_png=_png())
    assert out.read_bytes().startswith(b"%PDF")


def test_build_report_uses_its_own_period(tmp_path, scenario_a, monkeypatch):
    seen = {}
    real = pdf_report.compute_totals

    def spy(rows):
        seen["ids"] = [t.id for t in rows]
        return real(rows)

    monkeypatch.setattr(pdf_report, "compute_totals", spy)
    assert build_report(scenario_a, "2024-02-01", "2024-02-29", tmp_path / "feb.pdf")
    assert seen["ids"] == ["a3"]


def test_build_report_paginates_long_tables(tmp_path):
    txs = [make_tx(i + 1, f"2024-03-{(i % 28) + 1:02d}", name=f"Row {i}") for i in range(120)]
    out = tmp_path / "long.pdf"
    assert build_report(txs, "2024-03-01", "2024-03-31", out)
    assert len(re.findall(rb"/Type\s*/Page(?!s)", out.read_bytes())) >= 3


def test_build_report_failure_returns_false(tmp_path, scenario_a):
    missing_dir = tmp_path / "nope" / "report.pdf"
    assert build_report(scenario_a, "2024-01-01", "2024-12-31", missing_dir) is False
