"""
Unit tests for docstyle/cli.py
"""
import json
import logging
import logging.handlers

import pytest
from bs4 import BeautifulSoup

from docstyle.cli import build_parser, main


@pytest.fixture
def document(temp_dir):
    path = temp_dir / "doc.md"
    path.write_text("# Title\n\nIntro text\n\n## Part\n\nBody", encoding="utf-8")
    return path


class TestParser:
    """Test argument parsing."""

    def test_render_args(self):
        args = build_parser().parse_args(["render", "in.md", "--selectable", "--token", "t"])
        assert args.command == "render"
        assert args.selectable is True
        assert args.token == "t"

    def test_paginate_args(self):
        args = build_parser().parse_args(["paginate", "in.md", "--backend", "heuristic", "--toc"])
        assert args.backend == "heuristic"
        assert args.toc is True

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    """Test command execution."""

    def test_render_to_file(self, document, temp_dir):
        output = temp_dir / "out.html"
        assert main(["render", str(document), "-o", str(output)]) == 0
        soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
        assert soup.h1["id"] == "h1-Title"
        assert soup.p["style"].startswith("font-family: 'Times New Roman'")

    def test_render_with_overrides_to_stdout(self, document, temp_dir, capsys):
        overrides = temp_dir / "overrides.json"
        overrides.write_text(json.dumps({"p-Intro-text": {"color": "#123456"}, "p-Old": {}}), encoding="utf-8")
        assert main(["render", str(document), "--overrides", str(overrides)]) == 0
        captured = capsys.readouterr()
        assert "color: #123456" in captured.out
        assert "p-Old" in captured.err

    def test_paginate(self, document, temp_dir):
        output = temp_dir / "print.html"
        assert main(["paginate", str(document), "--backend", "heuristic", "--toc", "-o", str(output)]) == 0
        html = output.read_text(encoding="utf-8")
        assert html.startswith("<!DOCTYPE html>")
        assert "toc-line" in html
        assert "<title>doc</title>" in html

    def test_missing_input(self, temp_dir, capsys):
        assert main(["render", str(temp_dir / "missing.md")]) == 1
        assert "Error" in capsys.readouterr().err

    def test_bad_profile(self, document, temp_dir):
        profile = temp_dir / "profile.json"
        profile.write_text("{broken", encoding="utf-8")
        assert main(["render", str(document), "--profile", str(profile)]) == 1

    def test_log_file_option(self, document, temp_dir):
        log_file = temp_dir / "logs" / "run.log"
        try:
            assert main(["render", str(document), "-o", str(temp_dir / "out.html"), "--log-file", str(log_file)]) == 0
            assert log_file.exists()
        finally:
            logger = logging.getLogger("docstyle")
            for handler in list(logger.handlers):
                if isinstance(handler, logging.handlers.RotatingFileHandler):
                    handler.close()
                    logger.removeHandler(handler)
