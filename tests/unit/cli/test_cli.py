"""Tests for the command-line interface."""

import json
from unittest import mock

import pytest
from click.testing import CliRunner

from bucketbase.cli import cli
from bucketbase.core.config import get_settings


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def bundle_env(bundle, monkeypatch):
    monkeypatch.setenv("BUCKETBASE_BUNDLE_PATH", str(bundle))
    monkeypatch.setenv("BUCKETBASE_STORAGE_BACKEND", "embedded")
    get_settings.cache_clear()
    yield bundle
    get_settings.cache_clear()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_templates(runner):
    result = runner.invoke(cli, ["templates"])

    assert result.exit_code == 0
    assert "blog" in result.output
    assert "posts, authors" in result.output


def test_collections(runner, bundle_env):
    result = runner.invoke(cli, ["collections", "--site", "default"])

    assert result.exit_code == 0, result.output
    assert "products" in result.output
    assert "Products" in result.output


def test_records_prints_json(runner, bundle_env):
    result = runner.invoke(cli, ["records", "products"])

    assert result.exit_code == 0, result.output
    start = result.output.index("[\n")
    rows = json.loads(result.output[start:])
    assert rows[0]["data"] == {"title": "Widget"}


def test_sites(runner, bundle_env):
    result = runner.invoke(cli, ["sites"])

    assert result.exit_code == 0, result.output
    assert "Main" in result.output


def test_unknown_site_exits_with_error(runner, bundle_env):
    result = runner.invoke(cli, ["collections", "--site", "ghost"])

    assert result.exit_code == 1
    assert "ERROR (NOT_FOUND)" in result.output


def test_info(runner, bundle_env):
    result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Backend:      embedded" in result.output


def test_serve_runs_uvicorn(runner, bundle_env):
    with mock.patch("uvicorn.run") as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0, result.output
    args, kwargs = mock_run.call_args
    assert args == ("bucketbase.infrastructure.api.app:app",)
    assert kwargs["port"] == 9000
    assert kwargs["reload"] is False
