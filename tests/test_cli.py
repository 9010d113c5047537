"""Tests for the dictionary command-line interface."""

import json

import pytest

from bilingual_dictionary.cli import create_parser, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "DICTIONARY_CONFIG",
        "DICTIONARY_DB",
        "DICTIONARY_MAX_FETCH_WORKERS",
        "DICTIONARY_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def run(tmp_path, capsys):
    """Run the CLI against a scratch database and return (code, stdout, stderr)."""
    db = str(tmp_path / "cli.db")

    def invoke(*args):
        code = main(["--db", db, *args])
        out, err = capsys.readouterr()
        return code, out, err
    return invoke


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_parser_rejects_unknown_language():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["word", "add", "Katze", "de"])


class TestWordCommands:

    def test_add_and_get(self, run):
        code, out, _ = run("word", "add", "kot", "pl")
        assert code == 0
        assert json.loads(out) == {"id": 1, "text": "kot", "language": "pl"}

        code, out, _ = run("word", "get", "kot")
        assert json.loads(out)["id"] == 1

    def test_update_and_list(self, run):
        run("word", "add", "kot", "pl")
        run("word", "update", "kot", "pl", "kotek")
        code, out, _ = run("words")
        assert code == 0
        assert [w["text"] for w in json.loads(out)] == ["kotek"]

    def test_delete(self, run):
        run("word", "add", "kot", "pl")
        code, out, _ = run("word", "delete", "kot", "pl")
        assert code == 0
        assert json.loads(out) is True

    def test_missing_word(self, run):
        code, out, err = run("word", "get", "kot")
        assert code == 1
        assert out == ""
        assert "[ERROR] Word not found" in err


class TestExampleCommands:

    def test_lifecycle(self, run):
        run("word", "add", "kot", "pl")
        code, out, _ = run("example", "add", "kot", "pl", "Kot śpi.")
        assert code == 0
        example = json.loads(out)
        assert example["text"] == "Kot śpi."

        code, out, _ = run("example", "update", str(example["id"]), "Kot je.")
        assert code == 0

        code, out, _ = run("examples", "kot")
        assert json.loads(out) == [{"id": example["id"], "text": "Kot je."}]

        code, out, _ = run("example", "delete", str(example["id"]))
        assert code == 0
        code, out, _ = run("examples", "kot")
        assert json.loads(out) == []


class TestTranslationCommands:

    def test_lifecycle(self, run):
        for text, language in [("kot", "pl"), ("cat", "en"), ("kitty", "en")]:
            run("word", "add", text, language)

        code, _, _ = run("translation", "add", "kot", "cat")
        assert code == 0
        code, out, _ = run("translations", "cat")
        assert [w["text"] for w in json.loads(out)] == ["kot"]

        code, _, _ = run("translation", "update", "kot", "cat", "kot", "kitty")
        assert code == 0
        code, out, _ = run("translations", "kot")
        assert [w["text"] for w in json.loads(out)] == ["kitty"]

        code, out, _ = run("translation", "delete", "kot", "kitty")
        assert code == 0
        code, out, _ = run("translations", "kot")
        assert json.loads(out) == []


class TestApplyCommand:

    def test_apply(self, run, tmp_path):
        request = tmp_path / "changes.yaml"
        request.write_text(
            "description: Seed\n"
            "changes:\n"
            "  - operation: add_word\n"
            "    text: kot\n"
            "    language: pl\n",
            encoding="utf-8",
        )
        code, out, _ = run("apply", str(request))
        assert code == 0
        assert "Description: Seed" in out
        assert "Success: 1" in out

        code, out, _ = run("word", "get", "kot")
        assert code == 0

    def test_dry_run(self, run, tmp_path):
        request = tmp_path / "changes.yaml"
        request.write_text(
            "changes:\n  - operation: add_word\n    text: kot\n    language: pl\n",
            encoding="utf-8",
        )
        code, out, _ = run("apply", str(request), "--dry-run")
        assert code == 0
        assert "[DRY RUN]" in out
        _, out, _ = run("words")
        assert json.loads(out) == []

    def test_failed_change_sets_exit_code(self, run, tmp_path):
        request = tmp_path / "changes.yaml"
        request.write_text(
            "changes:\n  - operation: delete_example\n    id: 42\n",
            encoding="utf-8",
        )
        code, out, _ = run("apply", str(request))
        assert code == 1
        assert "FAILED" in out

    def test_parse_error(self, run, tmp_path):
        request = tmp_path / "changes.yaml"
        request.write_text("changes: []\n", encoding="utf-8")
        code, _, err = run("apply", str(request))
        assert code == 1
        assert "[PARSE ERROR]" in err

    def test_missing_file(self, run, tmp_path):
        code, _, err = run("apply", str(tmp_path / "missing.yaml"))
        assert code == 1
        assert "File not found" in err


def test_bad_config_file(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "missing.yaml"), "words"])
    assert code == 1
    assert "[CONFIG ERROR]" in capsys.readouterr().err
