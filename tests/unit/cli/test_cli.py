from __future__ import annotations

import pytest
from fastapi import FastAPI
from typer.testing import CliRunner

from product_store.cli import app
from product_store.products import FileProductStore, Product

runner = CliRunner()


@pytest.fixture
def populated(data_dir):
    store = FileProductStore(data_dir)
    store.put(
        [
            Product.model_validate({"name": n, "id": i, "options": [{"sku": "s", "id": "o"}]})
            for n, i in (("A", "100"), ("B", "101"), ("C", "102"))
        ]
    )
    return store


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for cmd in ("serve", "page", "clean"):
        assert cmd in result.output


def test_page_prints_products(populated, data_dir):
    result = runner.invoke(app, ["page", "--data-dir", str(data_dir), "--cursor", "100", "--limit", "1"])
    assert result.exit_code == 0, result.output
    assert '"id": "101"' in result.output
    assert '"id": "100"' not in result.output


def test_page_reads_data_dir_from_environment(populated, data_dir, monkeypatch):
    monkeypatch.setenv("PRODUCT_STORE_DATA_DIR", str(data_dir))
    result = runner.invoke(app, ["page", "--limit", "5"])
    assert result.exit_code == 0, result.output
    for product_id in ("100", "101", "102"):
        assert f'"id": "{product_id}"' in result.output


def test_missing_data_dir_exits_with_usage_error():
    result = runner.invoke(app, ["page"])
    assert result.exit_code == 2


def test_clean_with_confirmation_flag(populated, data_dir):
    result = runner.invoke(app, ["clean", "--data-dir", str(data_dir), "--yes"])
    assert result.exit_code == 0, result.output
    assert "Removed 3 product file(s)" in result.output
    assert populated.list_all_paths() == []


def test_clean_aborts_without_confirmation(populated, data_dir):
    result = runner.invoke(app, ["clean", "--data-dir", str(data_dir)], input="n\n")
    assert result.exit_code != 0
    assert len(populated.list_all_paths()) == 3


def test_serve_builds_app_and_runs_uvicorn(monkeypatch, tmp_path):
    calls = {}

    def fake_run(app_obj, **kwargs):
        calls["app"] = app_obj
        calls.update(kwargs)

    monkeypatch.setattr("uvicorn.run", fake_run)
    data_dir = tmp_path / "fresh"

    result = runner.invoke(app, ["serve", "--data-dir", str(data_dir), "--port", "9090"])

    assert result.exit_code == 0, result.output
    assert isinstance(calls["app"], FastAPI)
    assert calls["port"] == 9090
    assert calls["host"] == "0.0.0.0"
    assert data_dir.is_dir()
