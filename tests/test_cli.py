"""Tests for the typegen command line."""

import io
import json

import pytest

from typegen.cli import create_parser, main

USER_SCHEMA = """\
type User {
    name: String
    account: Account
}

type Account {
    id: Int
}
"""


@pytest.fixture
def schema(tmp_path):
    path = tmp_path / "user.type"
    path.write_text(USER_SCHEMA, encoding="utf-8")
    return path


@pytest.fixture
def out(tmp_path):
    return tmp_path / "out"


class TestGeneration:
    def test_writes_gleam_by_default(self, schema, out):
        assert main([str(schema), "-o", str(out)]) == 0

        assert sorted(p.name for p in out.iterdir()) == ["account.gleam", "user.gleam"]
        content = (out / "user.gleam").read_text(encoding="utf-8")
        assert content.startswith("import gleam/decode\n")
        assert content.endswith("}\n")

    def test_suffix_may_be_omitted(self, schema, out):
        assert main([str(schema.with_suffix("")), "-o", str(out)]) == 0
        assert (out / "user.gleam").exists()

    def test_several_languages_get_subdirectories(self, schema, out):
        assert main([str(schema), "-l", "gleam", "-l", "rs", "-o", str(out)]) == 0

        assert (out / "gleam" / "user.gleam").exists()
        assert sorted(p.name for p in (out / "rust").iterdir()) == [
            "account.rs",
            "mod.rs",
            "user.rs",
        ]

    def test_duplicate_languages_run_once(self, schema, out):
        assert main([str(schema), "-l", "rust", "-l", "rs", "-o", str(out)]) == 0
        assert (out / "user.rs").exists()

    def test_module_name(self, schema, out):
        assert main([str(schema), "--module-name", "models", "-o", str(out)]) == 0
        content = (out / "user.gleam").read_text(encoding="utf-8")
        assert "import models/account" in content

    def test_config_file(self, schema, out, tmp_path):
        config = tmp_path / "rust.json"
        config.write_text(json.dumps({"derives": ["Debug"]}), encoding="utf-8")

        assert main([str(schema), "-l", "rust", "--config", str(config), "-o", str(out)]) == 0
        content = (out / "user.rs").read_text(encoding="utf-8")
        assert content.startswith("#[derive(Debug)]\n")

    def test_stdin(self, out, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("type Tag { label: String }"))
        assert main(["--stdin", "-l", "rust", "-o", str(out)]) == 0
        assert (out / "tag.rs").exists()

    def test_dry_run_writes_nothing(self, schema, out, capsys):
        assert main([str(schema), "--dry-run", "-o", str(out)]) == 0

        assert not out.exists()
        captured = capsys.readouterr().out
        assert "user.gleam" in captured
        assert "pub type User {" in captured

    def test_verbose_shows_metadata(self, schema, out, capsys):
        assert main([str(schema), "-v", "--dry-run", "-o", str(out)]) == 0
        assert "Generation Metadata" in capsys.readouterr().out

    def test_warnings_are_printed(self, tmp_path, out, capsys):
        path = tmp_path / "empty.type"
        path.write_text("type Empty {}", encoding="utf-8")

        assert main([str(path), "-o", str(out)]) == 0
        assert "has no fields" in capsys.readouterr().out


class TestFailures:
    def test_parse_error_writes_nothing(self, tmp_path, out, capsys):
        path = tmp_path / "bad.type"
        path.write_text("type Good { a: Int }\ntype Bad { b Int }", encoding="utf-8")

        assert main([str(path), "-l", "gleam", "-l", "rust", "-o", str(out)]) == 1
        assert not out.exists()
        assert "Parse error" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, out):
        assert main([str(tmp_path / "missing"), "-o", str(out)]) == 1
        assert not out.exists()

    def test_unknown_language(self, schema, out, capsys):
        assert main([str(schema), "-l", "cobol", "-o", str(out)]) == 1
        assert not out.exists()
        assert "Unsupported language" in capsys.readouterr().out

    def test_no_source(self, capsys):
        assert main([]) == 1
        assert "Failed to load input" in capsys.readouterr().out

    def test_bad_config(self, schema, out, tmp_path):
        config = tmp_path / "config.json"
        config.write_text("[]", encoding="utf-8")
        assert main([str(schema), "--config", str(config), "-o", str(out)]) == 1
        assert not out.exists()

    def test_file_and_url_are_exclusive(self, schema):
        with pytest.raises(SystemExit):
            create_parser().parse_args([str(schema), "--url", "https://example.com"])


class TestInformation:
    def test_list_languages(self, capsys):
        assert main(["--list-languages"]) == 0
        captured = capsys.readouterr().out
        assert "gleam" in captured
        assert "rust" in captured

    def test_language_info(self, capsys):
        assert main(["--language-info", "rs"]) == 0
        captured = capsys.readouterr().out
        assert "RustGenerator" in captured

    def test_unknown_language_info(self, capsys):
        assert main(["--language-info", "cobol"]) == 1
        assert "not supported" in capsys.readouterr().out
