from __future__ import annotations

import io
import runpy
from pathlib import Path
from typing import Any, Dict, List

import pytest

from nbrb_convert.conversion import cli as cli_module
from nbrb_convert.conversion.errors import EMPTY_INPUT_MESSAGE
from nbrb_convert.ingestion.strategy import RateLookupError


class _FakeClient:
    instances: List["_FakeClient"] = []
    rates: Dict[str, float] = {"2024-12-01": 3.2}

    def __init__(self, currency: str = "USD", **kwargs: Any) -> None:
        self.currency = currency.upper()
        self.kwargs = kwargs
        self.closed = False
        _FakeClient.instances.append(self)

    def fetch_rate(self, on_date: str) -> float:
        if on_date not in self.rates:
            raise RateLookupError(on_date)
        return self.rates[on_date]

    def __enter__(self) -> "_FakeClient":
        return self

    def __exit__(self, *_exc: Any) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _fake_client(monkeypatch: pytest.MonkeyPatch) -> None:
    _FakeClient.instances = []
    monkeypatch.setattr(cli_module, "NBRBRatesClient", _FakeClient)


def test_parse_args_defaults() -> None:
    args = cli_module.parse_args([])

    assert args.input == "-"
    assert args.currency == "USD"
    assert args.timeout is None
    assert args.workers is None
    assert args.csv_path is None
    assert args.verbose is False


def test_main_prints_table_and_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "ops.txt"
    source.write_text("2024-12-01 150.50\n2024-12-05; 99,30\n", encoding="utf-8")
    csv_path = tmp_path / "out.csv"

    exit_code = cli_module.main([str(source), "--timeout", "10", "--csv", str(csv_path)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "3.2000" in out
    assert "47.03" in out
    assert "no rate for date" in out
    assert "Valid rows: 1" in out
    assert "Total USD: 47.03" in out
    assert csv_path.exists()
    assert _FakeClient.instances[0].kwargs["timeout"] == 10.0
    assert _FakeClient.instances[0].closed is True


def test_main_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(cli_module.sys, "stdin", io.StringIO("2024-12-01 6,4\n"))

    exit_code = cli_module.main(["--currency", "eur"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Total EUR: 2.00" in out


def test_main_reports_empty_input(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(cli_module.sys, "stdin", io.StringIO("nothing useful\n"))

    exit_code = cli_module.main(["-"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert EMPTY_INPUT_MESSAGE in captured.err
    assert captured.out == ""


def test_main_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli_module.main([str(tmp_path / "missing.txt")])

    assert exit_code == 1
    assert "Input file not found" in capsys.readouterr().err


def test_convert_amounts_script_invokes_main(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {"value": False}

    def _fake_main() -> int:
        called["value"] = True
        return 0

    monkeypatch.setattr(cli_module, "main", _fake_main)

    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("nbrb_convert.scripts.convert_amounts", run_name="__main__")

    assert excinfo.value.code == 0
    assert called["value"] is True
