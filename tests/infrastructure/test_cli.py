"""Tests for the click CLI against a throwaway SQLite file."""

import pytest
from click.testing import CliRunner

from bookstore.infrastructure.cli.main import cli


@pytest.fixture()
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("BOOKSTORE_DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    runner = CliRunner()
    result = runner.invoke(cli, ["db", "init"])
    assert result.exit_code == 0, result.output
    return runner


def _add(runner, *args) -> str:
    result = runner.invoke(cli, ["book", "add", *args])
    assert result.exit_code == 0, result.output
    return result.output.split()[1]


class TestBookCommands:

    def test_add_and_list(self, runner):
        _add(runner, "--title", "Tuổi Thơ Dữ Dội", "--price", "180000", "--stock", "4")
        result = runner.invoke(cli, ["book", "list"])
        assert result.exit_code == 0
        assert "Tuổi Thơ Dữ Dội" in result.output
        assert "180,000" in result.output
        assert "Page 1/1 (1 books)" in result.output

    def test_empty_list(self, runner):
        result = runner.invoke(cli, ["book", "list"])
        assert "No books found." in result.output

    def test_update_price(self, runner):
        book_id = _add(runner, "--title", "X", "--price", "100000")
        result = runner.invoke(cli, ["book", "update-price", "--id", book_id, "--price", "120000"])
        assert result.exit_code == 0
        assert "120,000 VND" in result.output

    def test_set_stock(self, runner):
        book_id = _add(runner, "--title", "X", "--price", "100000")
        result = runner.invoke(cli, ["book", "set-stock", "--id", book_id, "--quantity", "12"])
        assert result.exit_code == 0
        assert "set to 12" in result.output

    def test_domain_error_becomes_click_error(self, runner):
        result = runner.invoke(cli, ["book", "add", "--title", "X", "--price", "0"])
        assert result.exit_code == 1
        assert "greater than zero" in result.output

    def test_unknown_book(self, runner):
        result = runner.invoke(cli, ["book", "set-stock", "--id", "nope", "--quantity", "1"])
        assert result.exit_code == 1
        assert "not found" in result.output
