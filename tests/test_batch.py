"""
Tests for batch change request functionality.
"""
import pytest

from bilingual_dictionary.batch import (
    REQUIRED_FIELDS,
    BatchResult,
    Change,
    ChangeRequest,
    OperationType,
    ParseError,
    execute_change_request,
    load_change_request,
)


class TestParser:
    """Tests for YAML parsing."""

    def test_load_from_file(self, tmp_path):
        """Test loading a change request from a file."""
        yaml_content = """
description: Cats
changes:
  - operation: add_word
    text: kot
    language: pl
"""
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text(yaml_content, encoding="utf-8")

        request = load_change_request(yaml_file)

        assert request.description == "Cats"
        assert request.source_file == yaml_file
        assert len(request.changes) == 1
        assert request.changes[0].operation == "add_word"
        assert request.changes[0].params == {"text": "kot", "language": "pl"}

    def test_load_from_path_string(self, tmp_path):
        """Test that a string naming a .yaml file is read as a file."""
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text(
            "changes:\n  - operation: delete_example\n    id: 3\n", encoding="utf-8"
        )

        request = load_change_request(str(yaml_file))

        assert request.changes[0].params == {"id": 3}

    def test_load_from_string(self):
        """Test loading a change request from a YAML string."""
        yaml_content = """
changes:
  - operation: add_example
    word: kot
    language: pl
    example: Kot śpi.
"""
        request = load_change_request(yaml_content)

        assert request.description is None
        assert request.source_file is None
        assert request.changes[0].params["example"] == "Kot śpi."

    def test_load_from_dict(self):
        """Test loading a change request from a dictionary."""
        data = {
            "changes": [
                {"operation": "add_translation", "pl": "kot", "en": "cat"},
            ],
        }

        request = load_change_request(data)

        assert len(request.changes) == 1
        assert request.changes[0].target == "kot"

    def test_parse_error_missing_changes(self):
        """Test that missing changes raises ParseError."""
        with pytest.raises(ParseError, match="changes"):
            load_change_request("description: nothing\n")

    def test_parse_error_empty_changes(self):
        """Test that empty changes raises ParseError."""
        with pytest.raises(ParseError, match="empty"):
            load_change_request("changes: []\n")

    def test_parse_error_changes_not_list(self):
        with pytest.raises(ParseError, match="list"):
            load_change_request({"changes": {"operation": "add_word"}})

    def test_parse_error_description_not_string(self):
        with pytest.raises(ParseError, match="description"):
            load_change_request({"description": 5, "changes": [{}]})

    def test_parse_error_invalid_yaml(self, tmp_path):
        """Test that invalid YAML raises ParseError with a line number."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("changes:\n  - [invalid yaml\n", encoding="utf-8")

        with pytest.raises(ParseError, match="Invalid YAML") as excinfo:
            load_change_request(yaml_file)
        assert excinfo.value.line is not None

    def test_parse_error_root_not_mapping(self):
        with pytest.raises(ParseError, match="mapping"):
            load_change_request("- one\n- two\n")

    def test_file_not_found(self, tmp_path):
        """Test that non-existent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_change_request(tmp_path / "missing.yaml")

    def test_unknown_operation(self):
        with pytest.raises(ParseError, match="Unknown operation 'merge_words'"):
            load_change_request({"changes": [{"operation": "merge_words"}]})

    def test_missing_operation(self):
        with pytest.raises(ParseError, match="operation"):
            load_change_request({"changes": [{"text": "kot"}]})

    def test_change_not_mapping(self):
        with pytest.raises(ParseError, match="Change #1"):
            load_change_request({"changes": ["add_word"]})

    def test_missing_required_field(self):
        """Test that the missing field is named in the error."""
        data = {
            "changes": [
                {"operation": "add_word", "text": "kot", "language": "pl"},
                {"operation": "update_word", "old_text": "kot", "language": "pl"},
            ]
        }
        with pytest.raises(ParseError, match=r"Change #2 .*new_text"):
            load_change_request(data)

    @pytest.mark.parametrize("value", ["3", 2.5, True])
    def test_id_must_be_integer(self, value):
        with pytest.raises(ParseError, match="'id' must be an integer"):
            load_change_request(
                {"changes": [{"operation": "delete_example", "id": value}]}
            )


class TestOperationTypes:
    """Tests for operation definitions."""

    def test_all_operations_have_required_fields(self):
        """Test that every operation type has required fields defined."""
        for op in OperationType:
            assert op.value in REQUIRED_FIELDS
            assert REQUIRED_FIELDS[op.value]

    def test_change_target(self):
        assert Change("update_word", {"old_text": "kot"}).target == "kot"
        assert Change("delete_example", {"id": 7}).target == "#7"
        assert Change("add_word", {}).target is None


class TestExecutor:
    """Tests for change execution."""

    def test_dry_run(self, service):
        """Test that dry run doesn't modify the database."""
        request = load_change_request(
            {"changes": [{"operation": "add_word", "text": "kot", "language": "pl"}]}
        )

        result = execute_change_request(service, request, dry_run=True)

        assert result.success_count == 1
        assert result.changes[0].message == "Would execute add_word"
        assert service.list_words() == []

    def test_execute_all_operations(self, service):
        """Test every operation type against a real dictionary."""
        request = load_change_request("""
changes:
  - operation: add_word
    text: kot
    language: pl
  - operation: add_word
    text: cat
    language: en
  - operation: add_word
    text: kitty
    language: en
  - operation: add_translation
    pl: kot
    en: cat
  - operation: update_translation
    old_pl: kot
    old_en: cat
    new_pl: kot
    new_en: kitty
  - operation: add_example
    word: kot
    language: pl
    example: Kot śpi.
  - operation: update_word
    old_text: kot
    language: pl
    new_text: kotek
""")

        result = execute_change_request(service, request)

        assert result.failure_count == 0, [c.message for c in result.changes]
        assert result.changes[0].created_id is not None
        example_id = result.changes[5].created_id
        assert [e.id for e in service.examples_for_word("kotek")] == [example_id]
        assert [w.text for w in service.translations_for_word("kotek")] == ["kitty"]

        cleanup = load_change_request({
            "changes": [
                {"operation": "update_example", "id": example_id, "example": "Kot je."},
                {"operation": "delete_example", "id": example_id},
                {"operation": "delete_translation", "pl": "kotek", "en": "kitty"},
                {"operation": "delete_word", "text": "cat", "language": "en"},
            ]
        })
        result = execute_change_request(service, cleanup)

        assert result.failure_count == 0, [c.message for c in result.changes]
        assert service.examples_for_word("kotek") == []
        assert service.translations_for_word("kitty") == []
        assert [w.text for w in service.list_words()] == ["kotek", "kitty"]

    def test_execute_continues_on_error(self, service):
        """Test that a failing change does not stop later ones."""
        request = load_change_request({
            "changes": [
                {"operation": "add_example", "word": "kot", "language": "pl",
                 "example": "Kot śpi."},
                {"operation": "add_word", "text": "kot", "language": "pl"},
            ]
        })

        result = execute_change_request(service, request)

        assert result.total_count == 2
        assert result.failure_count == 1
        assert result.success_count == 1
        failed = result.changes[0]
        assert not failed.success
        assert failed.target == "kot"
        assert "not found" in failed.error
        assert [w.text for w in service.list_words()] == ["kot"]

    def test_unknown_operation_in_request(self, service):
        request = ChangeRequest(changes=[Change("merge_words", {})])

        result = execute_change_request(service, request)

        assert result.failure_count == 1
        assert result.changes[0].error == "Unknown operation: merge_words"

    def test_batch_result_counts(self, service):
        request = ChangeRequest(changes=[])
        result = execute_change_request(service, request)
        assert isinstance(result, BatchResult)
        assert result.total_count == 0
        assert result.duration_seconds >= 0
