"""
Tests for the command-line entry point
"""

import json
import logging

import pytest

from tenure.main import EXIT_BAD_INPUT, EXIT_OK, main


@pytest.fixture(autouse=True)
def restore_logging():
    """main() adjusts logger levels; put them back for the other tests."""
    loggers = [logging.getLogger(name) for name in ("", "tenure.grammar", "tenure.dates")]
    levels = [logger.level for logger in loggers]
    handlers = loggers[0].handlers[:]
    yield
    loggers[0].handlers[:] = handlers
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)


class TestMain:
    """Test reading entries and printing the summary"""

    def test_prints_summary_json(self, tmp_path, capsys):
        path = tmp_path / "experience.json"
        path.write_text(
            json.dumps(
                [
                    "Founder, Stealth (2024-10-01 – Present)",
                    {"title": "Engineer", "company": "Acme", "startDate": "2020-01-01", "endDate": "2021-01-01"},
                    "not a recognizable format",
                ]
            ),
            encoding="utf-8",
        )

        assert main([str(path), "--today", "2025-10"]) == EXIT_OK

        output = json.loads(capsys.readouterr().out)
        assert output["total_duration_months"] == 24
        assert output["total_duration_text"] == "2 years"
        assert [s["company"] for s in output["stints"]] == ["Stealth", "Acme"]
        assert output["positions"][0]["start"] == "2024-10"
        assert output["positions"][0]["end"] == "2025-10"

    def test_empty_list(self, tmp_path, capsys):
        path = tmp_path / "experience.json"
        path.write_text("[]", encoding="utf-8")

        assert main([str(path)]) == EXIT_OK
        output = json.loads(capsys.readouterr().out)
        assert output["total_duration_text"] == "No experience data"

    @pytest.mark.parametrize("content", ["{not json", '{"title": "Engineer"}'])
    def test_bad_input(self, tmp_path, capsys, content):
        path = tmp_path / "experience.json"
        path.write_text(content, encoding="utf-8")

        assert main([str(path)]) == EXIT_BAD_INPUT
        assert "error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == EXIT_BAD_INPUT
        assert "Cannot read" in capsys.readouterr().err

    def test_invalid_today(self, tmp_path):
        with pytest.raises(SystemExit):
            main([str(tmp_path / "x.json"), "--today", "someday"])
