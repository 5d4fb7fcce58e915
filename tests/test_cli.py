"""Tests for the ``ggraphs`` command line."""

from __future__ import annotations

import json

import pytest

from ggraphs.__main__ import main

TABLE_HTML = """
<html><body>
<table id="visits">
  <thead><tr><th>Site</th><th>Mon</th><th>Tue</th><th>Wed</th></tr></thead>
  <tbody>
    <tr><th>North</th><td>10</td><td>20</td><td>15</td></tr>
    <tr><th>South</th><td>5</td><td>8</td><td>1,200</td></tr>
  </tbody>
</table>
</body></html>
"""


def _summary(capsys):
    return json.loads(capsys.readouterr().out)


def test_render_from_json(tmp_path, capsys, sales):
    src = tmp_path / "series.json"
    src.write_text(json.dumps(sales), encoding="utf-8")
    out = tmp_path / "chart.svg"
    rc = main(["render", "--data", str(src), "--out", str(out), "--no-animation", "--type", "bar"])
    assert rc == 0
    summary = _summary(capsys)
    assert summary["type"] == "bar"
    assert summary["series"] == 2
    assert (summary["width"], summary["height"]) == (800, 500)
    text = out.read_text(encoding="utf-8")
    assert text.startswith("<svg")
    assert "<animate" not in text


def test_render_with_embedded_options(tmp_path, capsys, sales):
    src = tmp_path / "series.json"
    src.write_text(json.dumps({"data": sales, "options": {"showGrid": False}}), encoding="utf-8")
    out = tmp_path / "chart.svg"
    assert main(["render", "--data", str(src), "--out", str(out), "--legend", "none", "--width", "400"]) == 0
    assert _summary(capsys)["width"] == 400
    text = out.read_text(encoding="utf-8")
    assert "horizontal-grid" not in text
    assert "legend" not in text


def test_render_from_table(tmp_path, capsys):
    page = tmp_path / "page.html"
    page.write_text(TABLE_HTML, encoding="utf-8")
    out = tmp_path / "table.svg"
    rc = main(["render", "--table-file", str(page), "--table-id", "visits", "--out", str(out), "--type", "line"])
    assert rc == 0
    assert _summary(capsys)["series"] == 2
    assert "South Wed: 1200" in out.read_text(encoding="utf-8")


def test_table_file_requires_table_id(tmp_path):
    page = tmp_path / "page.html"
    page.write_text(TABLE_HTML, encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["render", "--table-file", str(page), "--out", str(tmp_path / "x.svg")])
    assert exc.value.code == 2


def test_unknown_type_fails(tmp_path, capsys, sales):
    src = tmp_path / "series.json"
    src.write_text(json.dumps(sales), encoding="utf-8")
    rc = main(["render", "--data", str(src), "--out", str(tmp_path / "x.svg"), "--type", "radar"])
    assert rc == 1
    assert "radar" in capsys.readouterr().err
    assert not (tmp_path / "x.svg").exists()


def test_types_command(capsys):
    assert main(["types"]) == 0
    assert set(json.loads(capsys.readouterr().out)) >= {"line", "bar", "pie", "donut", "gauge"}
