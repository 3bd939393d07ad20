#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Tests for payload decoding and the command line entry point."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

from report_reader import cli
from report_reader.payload import decode_payload, payload_to_text
from report_reader.query_errors import ReportFetchError
from report_reader.reports import PartialReport


def test_decode_payload():
    """Hex payloads decode to bytes with or without the 0x prefix."""
    assert decode_payload("0x68656c6c6f") == b"hello"
    assert decode_payload("68656c6c6f") == b"hello"
    assert decode_payload("") == b""


def test_payload_to_text_falls_back_to_hex():
    """Payloads that are not UTF-8 text are shown unchanged."""
    assert payload_to_text("0x68656c6c6f") == "hello"
    assert payload_to_text("0xff") == "0xff"
    assert payload_to_text("0xzz") == "0xzz"


def _client(**methods):
    client = MagicMock()
    client.__enter__.return_value = client
    for name, value in methods.items():
        getattr(client, name).configure_mock(**value)
    return client


def test_list_prints_decoded_table(monkeypatch, capsys):
    """`list --input N --decode` prints a table with text payloads."""
    monkeypatch.delenv("READER_GRAPHQL_URL", raising=False)
    reports = [PartialReport("Report", 0, "0x6869", 3)]
    client = _client(list_reports={"return_value": reports})

    with patch.object(cli, "ReportQueryClient", return_value=client) as factory:
        assert cli.main(["--url", "http://node/graphql", "list", "--input", "3", "--decode"]) == 0

    assert factory.call_args.args == ("http://node/graphql",)
    client.list_reports.assert_called_once_with(3)
    out = capsys.readouterr().out
    assert "index | input | payload" in out
    assert "0     | 3     | hi" in out


def test_list_json(capsys):
    """`list --json` prints the projected reports as JSON."""
    reports = [PartialReport("Report", 1, "0x00", 0)]
    client = _client(list_reports={"return_value": reports})

    with patch.object(cli, "ReportQueryClient", return_value=client):
        assert cli.main(["list", "--json"]) == 0

    assert json.loads(capsys.readouterr().out) == [
        {"__typename": "Report", "index": 1, "payload": "0x00", "input": {"index": 0}}
    ]


def test_get_decoded_report(capsys):
    """`get --decode` prints the full report with a text payload."""
    report = {"index": 0, "payload": "0x6869", "input": {"index": 2, "msgSender": "0xabc"}}
    client = _client(get_report={"return_value": report})

    with patch.object(cli, "ReportQueryClient", return_value=client):
        assert cli.main(["get", "--input", "2", "--decode"]) == 0

    client.get_report.assert_called_once_with(2, 0)
    printed = json.loads(capsys.readouterr().out)
    assert printed["payload"] == "hi"
    assert printed["input"] == {"index": 2, "msgSender": "0xabc"}


def test_get_failure_exits_with_error(capsys):
    """A failed fetch exits with status 1 and prints nothing on stdout."""
    client = _client(get_report={"side_effect": ReportFetchError("report not found")})

    with patch.object(cli, "ReportQueryClient", return_value=client):
        assert cli.main(["get", "--input", "2", "--report", "1"]) == 1

    client.get_report.assert_called_once_with(2, 1)
    assert capsys.readouterr().out == ""


def test_settings_from_environment(monkeypatch):
    """Settings read the endpoint, timeout and retry overrides from the environment."""
    from report_reader.settings import load_settings

    monkeypatch.setenv("READER_GRAPHQL_URL", "http://node:4000/graphql")
    monkeypatch.setenv("READER_TIMEOUT", "12")
    monkeypatch.setenv("REPORT_RETRY_MAX_ATTEMPTS", "4")
    monkeypatch.delenv("REPORT_RETRY_INITIAL_DELAY", raising=False)

    settings = load_settings()

    assert settings.graphql_url == "http://node:4000/graphql"
    assert settings.timeout == 12.0
    assert settings.report_retry.max_attempts == 4
    assert settings.report_retry.initial_delay == 2.0
