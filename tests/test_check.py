"""Tests for the build-time check command."""

import logging

from app import check

GOOD = "---\ntitle: Good\nsummary: Fine.\ndate: 2024-01-01\n---\n\nBody.\n"
BAD = "---\ntitle: Bad\ndate: 2024-01-01\n---\n\nNo summary.\n"


def test_check_clean(tmp_path):
    (tmp_path / "blog").mkdir()
    (tmp_path / "blog" / "good.md").write_text(GOOD)
    assert check(str(tmp_path)) == 0


def test_check_reports_per_item_errors(tmp_path, caplog):
    (tmp_path / "blog").mkdir()
    (tmp_path / "blog" / "good.md").write_text(GOOD)
    (tmp_path / "blog" / "bad.md").write_text(BAD)
    with caplog.at_level(logging.ERROR):
        assert check(str(tmp_path)) == 1
    assert "bad.md" in caplog.text
    assert "summary" in caplog.text


def test_check_fatal(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert check(str(tmp_path / "missing")) == 2
    assert "missing_source" in caplog.text
