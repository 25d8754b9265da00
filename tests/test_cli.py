"""
Tests for pagecard/cli.py

Tests argument parsing, command routing, output formats and error exits.
"""
import io
import json
import pytest
from unittest.mock import MagicMock, patch

from pagecard import cli
from pagecard.content import ContentReader, Meta
from pagecard.errors import FetchError


@pytest.fixture
def page_file(tmp_path, sample_html):
    path = tmp_path / "page.html"
    path.write_text(sample_html, encoding="utf-8")
    return path


class TestArgumentParser:
    """Test the parser structure."""

    def test_fetch_requires_url(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["fetch"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])

    def test_global_options(self):
        args = cli.build_parser().parse_args(["-o", "table", "--timeout", "3", "parse", "x.html"])
        assert args.output == "table"
        assert args.timeout == 3
        assert args.func is cli.cmd_parse

    def test_invalid_output_format(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["-o", "xml", "parse", "x.html"])


class TestParseCommand:
    """Test `pagecard parse`."""

    def test_parse_json(self, page_file, capsys):
        assert cli.main(["parse", str(page_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["open_graph"]["title"] == "The Rock"
        assert data["open_graph"]["images"][0]["width"] == 400
        assert data["twitter"]["type"] == "summary_large_image"
        assert data["twitter"]["player"] is None

    def test_parse_table(self, page_file, capsys):
        assert cli.main(["-o", "table", "parse", str(page_file)]) == 0

        out = capsys.readouterr().out
        assert "Open Graph" in out
        assert "Twitter Card" in out
        assert "summary_large_image" in out

    def test_parse_table_keeps_bracketed_text(self, tmp_path, capsys):
        """Page text that looks like console markup is printed as-is."""
        path = tmp_path / "brackets.html"
        path.write_text("""<html><head>
            <meta property="og:title" content="Tips [/b] and tricks">
            <meta property="og:description" content="Array [red] notation">
            <meta name="twitter:title" content="[bold]Loud[/bold]">
        </head></html>""")

        assert cli.main(["-o", "table", "parse", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Tips [/b] and tricks" in out
        assert "Array [red] notation" in out
        assert "[bold]Loud[/bold]" in out

    def test_parse_stdin(self, sample_html, capsys, monkeypatch):
        stdin = MagicMock()
        stdin.buffer = io.BytesIO(sample_html.encode("utf-8"))
        monkeypatch.setattr("sys.stdin", stdin)
        assert cli.main(["parse", "-"]) == 0
        assert json.loads(capsys.readouterr().out)["open_graph"]["type"] == "video.movie"

    def test_parse_metadata_error_exits_1(self, tmp_path, capsys):
        path = tmp_path / "bad.html"
        path.write_text('<html><head><meta property="og:image:width" content="1"></head></html>')

        assert cli.main(["parse", str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "og:image" in captured.err

    def test_parse_missing_file_exits_1(self, tmp_path, capsys):
        assert cli.main(["parse", str(tmp_path / "missing.html")]) == 1
        assert "Error" in capsys.readouterr().err


class TestFetchCommand:
    """Test `pagecard fetch` with the reader mocked."""

    def test_fetch_json(self, capsys):
        meta = [Meta("og:title", "Remote"), Meta("twitter:card", "player"), Meta("twitter:player", "p")]
        with patch.object(ContentReader, "read", return_value=meta) as mock_read:
            assert cli.main(["fetch", "https://example.com"]) == 0

        mock_read.assert_called_once_with("https://example.com")
        data = json.loads(capsys.readouterr().out)
        assert data["open_graph"]["title"] == "Remote"
        assert data["twitter"]["player"]["url"] == "p"

    def test_fetch_error_exits_1(self, capsys):
        error = FetchError("https://example.com", "connection error")
        with patch.object(ContentReader, "read", side_effect=error):
            assert cli.main(["fetch", "https://example.com"]) == 1
        assert "connection error" in capsys.readouterr().err


class TestMetaCommand:
    """Test `pagecard meta`."""

    def test_meta_from_file(self, page_file, capsys):
        assert cli.main(["meta", str(page_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data[0] == {"name": "og:title", "value": "The Rock"}
        assert {"name": "twitter:site", "value": "@imdb"} in data

    def test_meta_table_keeps_bracketed_text(self, tmp_path, capsys):
        path = tmp_path / "brackets.html"
        path.write_text('<head><meta name="keywords[x]" content="[/i] [link=x]"></head>')

        assert cli.main(["-o", "table", "meta", str(path)]) == 0
        out = capsys.readouterr().out
        assert "keywords[x]" in out
        assert "[/i] [link=x]" in out

    def test_meta_from_url(self, capsys):
        with patch.object(ContentReader, "read", return_value=[Meta("og:type", "website")]):
            assert cli.main(["meta", "https://example.com"]) == 0
        assert json.loads(capsys.readouterr().out) == [{"name": "og:type", "value": "website"}]


class TestConfigCommands:
    """Test `pagecard config`."""

    def test_config_show_json(self, capsys):
        assert cli.main(["--timeout", "4", "config", "show"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["timeout"] == 4

    def test_config_show_table_keeps_bracketed_text(self, capsys):
        assert cli.main(["-o", "table", "--user-agent", "bot [beta]", "config", "show"]) == 0
        assert "bot [beta]" in capsys.readouterr().out

    def test_missing_config_file_uses_defaults(self, tmp_path, capsys):
        assert cli.main(["--config", str(tmp_path / "missing.toml"), "config", "show"]) == 0
        assert json.loads(capsys.readouterr().out)["timeout"] == 10

    def test_invalid_env_var_exits_1(self, monkeypatch, capsys):
        monkeypatch.setenv("PAGECARD_TIMEOUT", "abc")
        assert cli.main(["config", "show"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "PAGECARD_TIMEOUT" in captured.err

    def test_malformed_config_file_exits_1(self, tmp_path, capsys):
        path = tmp_path / "broken.toml"
        path.write_text("timeout = [\n")
        assert cli.main(["--config", str(path), "config", "show"]) == 1
        assert "broken.toml" in capsys.readouterr().err

    def test_config_init(self, tmp_path, capsys):
        path = tmp_path / "saved.toml"
        assert cli.main(["config", "init", "--path", str(path)]) == 0
        assert path.exists()
        assert "timeout" in path.read_text()
