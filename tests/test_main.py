"""Tests for the main.py command line."""

import os
from unittest.mock import MagicMock, patch

import pytest

import main
from core.orchestrator import Orchestrator
from manager.agent import ManagerAgent

HTML = "<!DOCTYPE html><html><head></head><body>hi</body></html>"


def _manager_with(generator):
    return lambda: ManagerAgent(Orchestrator(generator=generator, logger=MagicMock()))


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main.main([])
    assert excinfo.value.code == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_list_roles(capsys):
    main.main(["list-roles"])
    out = capsys.readouterr().out
    assert "architect" in out
    assert "accessibility" in out


def test_plan(capsys):
    main.main(["plan", "--prompt", "an e-commerce shop with stripe"])
    out = capsys.readouterr().out
    assert "App type:   e-commerce" in out
    assert "security" in out


def test_pipeline_error_exits_2(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main.main(["plan", "--prompt", "  "])
    assert excinfo.value.code == 2
    assert "Error:" in capsys.readouterr().err


def test_extract_writes_project(tmp_path, capsys):
    response = tmp_path / "reply.txt"
    response.write_text(
        '```json\n{"type": "multi-file", "projectName": "notes", '
        '"files": [{"path": "app.js", "content": "run()"}], "mainFile": "app.js"}\n```'
    )
    out_dir = tmp_path / "out"
    main.main(["extract", "--response", str(response), "--request", "node app", "--out", str(out_dir)])

    assert "Project:  notes" in capsys.readouterr().out
    assert (out_dir / "notes" / "app.js").read_text() == "run()"


def test_generate_with_defaults(capsys):
    generator = MagicMock()
    generator.generate_single.return_value = HTML
    with patch("main._manager", _manager_with(generator)):
        main.main(["generate", "--prompt", "crée une todo list", "--defaults"])

    out = capsys.readouterr().out
    assert "What kind of application" in out
    assert HTML in out
    assert generator.generate_single.call_count == 1


def test_generate_writes_single_document(tmp_path, capsys):
    generator = MagicMock()
    generator.generate_single.return_value = HTML
    with patch("main._manager", _manager_with(generator)):
        main.main(["generate", "--prompt", "a minimal blog", "--mode", "fast", "--out", str(tmp_path)])

    with open(os.path.join(tmp_path, "index.html")) as f:
        assert f.read() == HTML


def test_generate_prints_answer(capsys):
    generator = MagicMock()
    generator.answer.return_value = "Flexbox is one-dimensional."
    with patch("main._manager", _manager_with(generator)):
        main.main(["generate", "--prompt", "pourquoi flexbox ?"])
    assert "Flexbox is one-dimensional." in capsys.readouterr().out
