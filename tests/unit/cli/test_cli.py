"""Tests for the command-line interface."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from yokozuna import cli
from yokozuna.client.client import AsyncYokozunaClient
from yokozuna.config.settings import ObservabilitySettings
from yokozuna.models.response import ResponseMeta
from yokozuna.observability.logging import setup_logging
from yokozuna.transport.exceptions import TransportError

# ── Option parsing ───────────────────────────────────────────────────────────


class TestParseOptions:
    def test_pairs(self) -> None:
        assert cli._parse_options(["rows=5", "sort=score desc", "fq=a=b"]) == {
            "rows": "5",
            "sort": "score desc",
            "fq": "a=b",
        }

    def test_invalid_pair(self) -> None:
        with pytest.raises(SystemExit):
            cli._parse_options(["rows"])

    def test_requires_command(self) -> None:
        with pytest.raises(SystemExit):
            cli.main([])


# ── Commands ─────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for key in ("YOKOZUNA_CONNECTION__HOST", "YOKOZUNA_CONNECTION__PORT"):
        monkeypatch.delenv(key, raising=False)


class TestCommands:
    def test_find_prints_result(self, capsys: pytest.CaptureFixture[str]) -> None:
        result = {"numFound": 1, "docs": [], "facet_counts": None, "stats": None, "grouped": None}
        with patch.object(AsyncYokozunaClient, "find", new_callable=AsyncMock) as mock:
            mock.return_value = result
            cli.main(["--host", "riak9", "find", "books", "title:dune", "-o", "rows=5"])

        mock.assert_awaited_once_with("books", "title:dune", rows="5")
        assert json.loads(capsys.readouterr().out) == result

    def test_create_index_default_schema(self, capsys: pytest.CaptureFixture[str]) -> None:
        meta = ResponseMeta(method="PUT", url="http://riak9:8098/search/index/books", status_code=204)
        with patch.object(AsyncYokozunaClient, "create_index", new_callable=AsyncMock) as mock:
            mock.return_value = meta
            cli.main(["create-index", "books"])

        mock.assert_awaited_once_with("books", "_yz_default")
        assert json.loads(capsys.readouterr().out) == {"status": "ok", "status_code": 204}

    def test_create_schema_reads_file(self, tmp_path: Path) -> None:
        schema = tmp_path / "schema.xml"
        schema.write_text("<schema/>", encoding="utf-8")
        with patch.object(AsyncYokozunaClient, "create_schema", new_callable=AsyncMock) as mock:
            mock.return_value = None
            cli.main(["create-schema", "books_schema", str(schema)])

        mock.assert_awaited_once_with("books_schema", "<schema/>")

    def test_error_exits_nonzero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(AsyncYokozunaClient, "destroy_index", new_callable=AsyncMock) as mock:
            mock.side_effect = TransportError("Riak returned HTTP 404", status_code=404)
            with pytest.raises(SystemExit) as exc_info:
                cli.main(["destroy-index", "missing"])

        assert exc_info.value.code == 1
        assert "HTTP 404" in capsys.readouterr().err

    def test_missing_config_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--config", "nope.yaml", "destroy-index", "x"])
        assert exc_info.value.code == 1
        assert "not found" in capsys.readouterr().err


# ── Logging ──────────────────────────────────────────────────────────────────


class TestLogging:
    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_setup_logging_sets_level(self, fmt: str) -> None:
        setup_logging(ObservabilitySettings(log_level="debug", log_format=fmt))
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_defaults(self) -> None:
        setup_logging()
        assert logging.getLogger().level == logging.WARNING
        root: Any = logging.getLogger()
        assert len(root.handlers) == 1
