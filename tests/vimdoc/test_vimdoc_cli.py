"""
Tests for the vimdoc command-line interface
"""
import io
import json

import pytest

from vimdoc.vimdoc_cli import collect_files, create_parser, main, output_path


@pytest.fixture
def doc_tree(tmp_path):
    """Fixture providing a directory of help files."""
    (tmp_path / "a.txt").write_text("Alpha\t*alpha*\n=====\n", encoding="utf-8")
    (tmp_path / "b.md").write_text("Beta\n", encoding="utf-8")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.txt").write_text("Gamma\n", encoding="utf-8")
    return tmp_path


def test_parser_defaults():
    """Test the default argument values."""
    args = create_parser().parse_args([])
    assert args.paths == []
    assert args.extensions is None
    assert not args.recursive
    assert not args.debug_output
    assert args.standalone is None


def test_output_path():
    """Test that output replaces the extension with '.html'."""
    assert output_path("doc/myplugin.txt") == "doc/myplugin.html"


def test_convert_file(tmp_path):
    """Test converting a single file."""
    path = tmp_path / "help.txt"
    path.write_text("Title\n=====\n", encoding="utf-8")

    assert main([str(path)]) == 0
    assert (tmp_path / "help.html").read_text(encoding="utf-8") == "<h1>Title</h1>\n"


def test_convert_directory(doc_tree):
    """Test that a directory contributes only files with a listed extension."""
    assert main([str(doc_tree)]) == 0
    assert (doc_tree / "a.html").exists()
    assert not (doc_tree / "b.html").exists()
    assert not (doc_tree / "sub" / "c.html").exists()


def test_convert_directory_recursive(doc_tree):
    """Test that subdirectories are searched when asked for."""
    assert main(["-r", str(doc_tree)]) == 0
    assert (doc_tree / "sub" / "c.html").read_text(encoding="utf-8") == "<p>Gamma</p>\n"


def test_extensions(doc_tree):
    """Test choosing the extensions taken from directories."""
    assert main(["-e", "md", "-e", ".txt", str(doc_tree)]) == 0
    assert (doc_tree / "a.html").exists()
    assert (doc_tree / "b.html").exists()


def test_collect_files(doc_tree):
    """Test expanding paths into files."""
    files = collect_files([str(doc_tree)], ["txt"], recursive=True)
    assert files == [str(doc_tree / "a.txt"), str(doc_tree / "sub" / "c.txt")]


def test_debug_output_file(tmp_path):
    """Test writing the document listing instead of HTML."""
    path = tmp_path / "help.txt"
    path.write_text("Title\n=====\n", encoding="utf-8")

    assert main(["--debug-output", str(path)]) == 0
    assert (tmp_path / "help.html").read_text(encoding="utf-8").startswith("Document: 1 blocks")


def test_stdin_to_stdout(monkeypatch, capsys):
    """Test reading stdin and printing HTML when no paths are given."""
    monkeypatch.setattr("sys.stdin", io.StringIO("See |x|.\n\nx\t*x*\n"))

    assert main([]) == 0
    out = capsys.readouterr().out
    assert '<a href="#x">x</a>' in out


def test_stdin_debug_output(monkeypatch, capsys):
    """Test the listing on stdout."""
    monkeypatch.setattr("sys.stdin", io.StringIO("Usage ~\n"))

    assert main(["--debug-output"]) == 0
    assert "Heading (level 4)" in capsys.readouterr().out


def test_missing_file_fails(tmp_path, capsys):
    """Test that an unreadable path is reported and gives a failing exit code."""
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "missing.txt" in capsys.readouterr().err


def test_bad_file_does_not_stop_others(tmp_path, capsys):
    """Test that a file that is not UTF-8 fails alone."""
    (tmp_path / "bad.txt").write_bytes(b"\xff\xfe\n")
    (tmp_path / "good.txt").write_text("Good\n", encoding="utf-8")

    assert main([str(tmp_path / "bad.txt"), str(tmp_path / "good.txt")]) == 1
    assert (tmp_path / "good.html").exists()
    assert not (tmp_path / "bad.html").exists()
    assert "not valid UTF-8" in capsys.readouterr().err


def test_setting_overrides(tmp_path):
    """Test the standalone and title options."""
    path = tmp_path / "help.txt"
    path.write_text("text\n", encoding="utf-8")

    assert main(["--standalone", "--title", "My Help", str(path)]) == 0
    html = (tmp_path / "help.html").read_text(encoding="utf-8")
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>My Help</title>" in html


def test_settings_file(tmp_path):
    """Test loading settings from a file."""
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"dedentCode": True}), encoding="utf-8")
    path = tmp_path / "help.txt"
    path.write_text("\tcode\n", encoding="utf-8")

    assert main(["--settings", str(settings_path), str(path)]) == 0
    assert (tmp_path / "help.html").read_text(encoding="utf-8") == "<pre><code>code</code></pre>\n"


def test_bad_settings_file(tmp_path, capsys):
    """Test that an unreadable settings file is reported."""
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{oops", encoding="utf-8")

    assert main(["--settings", str(settings_path)]) == 1
    assert "cannot load settings" in capsys.readouterr().err


def test_log_file(tmp_path, monkeypatch):
    """Test that verbose logging goes to the log file."""
    monkeypatch.setattr("sys.stdin", io.StringIO("See |nowhere|.\n"))
    log_path = tmp_path / "vimdoc.log"

    assert main(["-v", "--log-file", str(log_path)]) == 0
    assert "Unresolved reference 'nowhere'" in log_path.read_text(encoding="utf-8")
