"""Tests for the searchbar command line."""
import pytest
from typer.testing import CliRunner

from searchbar.cli.commands import app

runner = CliRunner()


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("SEARCHBAR_HISTORY__OPTIONS_PATH", str(tmp_path / "options.json"))
    return tmp_path


class TestFind:
    def test_lists_hits(self, home):
        target = home / "doc.txt"
        target.write_text("foo bar\nfoo\n", encoding="utf-8")
        result = runner.invoke(app, ["find", str(target), "foo"])
        assert result.exit_code == 0
        assert "2 strings found" in result.stdout

    def test_missing_file(self, home):
        result = runner.invoke(app, ["find", str(home / "nope.txt"), "foo"])
        assert result.exit_code == 1

    def test_repeated_run_gives_same_result(self, home):
        target = home / "doc.txt"
        target.write_text("a\nb", encoding="utf-8")
        for _ in range(2):
            result = runner.invoke(app, ["find", str(target), "a\\nb", "--regex"])
            assert result.exit_code == 0
            assert "1 string found" in result.stdout

    def test_records_history(self, home):
        target = home / "doc.txt"
        target.write_text("abc", encoding="utf-8")
        runner.invoke(app, ["find", str(target), "a.c", "--regex"])
        result = runner.invoke(app, ["history"])
        assert result.exit_code == 0
        assert "a.c" in result.stdout
        assert "..!." in result.stdout


class TestReplace:
    def test_prints_result(self, home):
        target = home / "doc.txt"
        target.write_text("foo bar foo", encoding="utf-8")
        result = runner.invoke(app, ["replace", str(target), "foo", "baz"])
        assert result.exit_code == 0
        assert "baz bar baz" in result.stdout
        assert target.read_text(encoding="utf-8") == "foo bar foo"

    def test_write_back_with_regex_escapes(self, home):
        target = home / "doc.txt"
        target.write_text("a,b,c", encoding="utf-8")
        result = runner.invoke(app, ["replace", str(target), ",", "\\n", "--regex", "--write"])
        assert result.exit_code == 0
        assert target.read_text(encoding="utf-8") == "a\nb\nc"


def test_empty_history(home):
    result = runner.invoke(app, ["history"])
    assert result.exit_code == 0
    assert "No search history" in result.stdout
