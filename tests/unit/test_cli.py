"""
Name: CLI Tests

Responsibilities:
  - Validate the CLI runs the pipeline end-to-end with fake models
  - Validate exit codes for missing files, pipeline errors and bad settings
"""

import json

import pytest

from fragment_extraction.cli import main

pytestmark = pytest.mark.unit


def test_extracts_from_local_text_file(tmp_path, capsys):
    document = tmp_path / "notes.md"
    document.write_text("新規事業の立ち上げを担当した。チームは5名。", encoding="utf-8")

    exit_code = main([str(document), "--fake"])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["summary"] == "1件の記憶のかけらを抽出しました"
    assert output["fragments"][0]["content"] == "新規事業の立ち上げを担当した。"


def test_missing_file_exits_2(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt"), "--fake"]) == 2
    assert "File not found" in capsys.readouterr().err


def test_pipeline_error_exits_1(tmp_path, capsys):
    document = tmp_path / "slides.pptx"
    document.write_bytes(b"PK\x03\x04")

    assert main([str(document), "--fake"]) == 1
    error = json.loads(capsys.readouterr().err)
    assert error["error_code"] == "UNSUPPORTED_FORMAT"


def test_missing_api_key_without_fake_exits_1(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("FAKE_LLM", "0")
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    document = tmp_path / "notes.txt"
    document.write_text("本文", encoding="utf-8")

    assert main([str(document)]) == 1
    error = json.loads(capsys.readouterr().err)
    assert error["error_code"] == "CONFIGURATION_ERROR"
    assert "GOOGLE_API_KEY" in error["message"]
