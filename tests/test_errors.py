"""
Unit tests for error model and sanitization functions.

Tests error codes, error structure, and message sanitization.
"""

import pytest
from models.errors import (
    ErrorCode,
    ToolError,
    sanitize_path,
    sanitize_stack_trace,
    create_validation_error,
    create_file_not_found_error,
    create_catalog_error,
    create_internal_error,
)


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_codes_serialize_to_their_names(self):
        """Test that error codes serialize to their names."""
        assert [code.value for code in ErrorCode] == [
            "VALIDATION_ERROR",
            "FILE_NOT_FOUND",
            "CATALOG_ERROR",
            "INTERNAL_ERROR",
        ]


class TestToolError:
    """Tests for ToolError exception class."""

    def test_defaults(self):
        """Test ToolError default values."""
        error = ToolError(code=ErrorCode.VALIDATION_ERROR, message="bad cohort")

        assert str(error) == "bad cohort"
        assert error.retryable is False
        assert error.original_error is None

    def test_to_dict_omits_original_error(self):
        """Test that to_dict never exposes the wrapped exception."""
        original = ValueError("raw detail")
        error = ToolError(
            code=ErrorCode.CATALOG_ERROR,
            message="Catalog unreadable",
            original_error=original,
        )

        assert error.original_error is original
        assert error.to_dict() == {
            "error": {
                "code": "CATALOG_ERROR",
                "message": "Catalog unreadable",
                "retryable": False,
            }
        }

    def test_raised_and_caught(self):
        """Test raising and catching a ToolError."""
        with pytest.raises(ToolError) as exc_info:
            raise create_validation_error("Invalid transition: 'x'")

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR


class TestSanitizePath:
    """Tests for path sanitization."""

    def test_sanitize_absolute_path(self):
        """Test that absolute paths return only basename."""
        assert sanitize_path("/srv/gradradar/data/stage_catalog.yaml") == "stage_catalog.yaml"
        assert sanitize_path("/tmp/catalog.yaml") == "catalog.yaml"

    def test_sanitize_relative_path(self):
        """Test that relative paths are kept as-is."""
        assert sanitize_path("data/stage_catalog.yaml") == "data/stage_catalog.yaml"
        assert sanitize_path("catalog.yaml") == "catalog.yaml"


class TestSanitizeStackTrace:
    """Tests for stack trace sanitization."""

    def test_keep_first_line_only(self):
        """Test that only the first line of error is kept."""
        error_msg = """ValueError: Invalid input
        at line 42 in module.py
        at line 10 in main.py"""

        result = sanitize_stack_trace(error_msg)
        assert result == "ValueError: Invalid input"

    def test_single_line_unchanged(self):
        """Test that a single-line message is unchanged."""
        assert sanitize_stack_trace("Connection refused") == "Connection refused"

    def test_strip_whitespace(self):
        """Test that surrounding whitespace is stripped."""
        assert sanitize_stack_trace("  Error message  \n") == "Error message"


class TestCreateValidationError:
    """Tests for validation error creation."""

    def test_create_validation_error(self):
        """Test creating a validation error."""
        error = create_validation_error("Invalid cohort_year: must be an integer")

        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.message == "Invalid cohort_year: must be an integer"
        assert error.retryable is False


class TestCreateFileNotFoundError:
    """Tests for file not found error creation."""

    def test_create_file_not_found_error(self):
        """Test creating a file not found error."""
        error = create_file_not_found_error("data/stage_catalog.yaml", "Stage catalog")

        assert error.code == ErrorCode.FILE_NOT_FOUND
        assert error.message == "Stage catalog not found: data/stage_catalog.yaml"
        assert error.retryable is False

    def test_file_not_found_sanitizes_path(self):
        """Test that absolute paths are reduced to the basename."""
        error = create_file_not_found_error("/home/user/secret/catalog.yaml")

        assert "catalog.yaml" in error.message
        assert "/home/user/secret/" not in error.message

    def test_default_file_type(self):
        """Test the default file type label."""
        assert create_file_not_found_error("x.yaml").message == "File not found: x.yaml"


class TestCreateCatalogError:
    """Tests for catalog error creation."""

    def test_create_catalog_error(self):
        """Test creating a catalog error."""
        error = create_catalog_error("missing stage lists for path types: work")

        assert error.code == ErrorCode.CATALOG_ERROR
        assert error.message == "Stage catalog error: missing stage lists for path types: work"
        assert error.retryable is False

    def test_catalog_error_keeps_first_line(self):
        """Test that catalog errors keep only the first line."""
        error = create_catalog_error("malformed YAML\n  in line 3, column 7")

        assert error.message == "Stage catalog error: malformed YAML"

    def test_catalog_error_with_original_exception(self):
        """Test that catalog errors keep the original exception."""
        original = ValueError("bad")
        error = create_catalog_error("Wrapped", original_error=original)

        assert error.original_error is original


class TestCreateInternalError:
    """Tests for internal error creation."""

    def test_create_internal_error(self):
        """Test creating a retryable internal error."""
        error = create_internal_error("Unexpected error occurred")

        assert error.code == ErrorCode.INTERNAL_ERROR
        assert "Unexpected error occurred" in error.message
        assert error.retryable is True

    def test_internal_error_sanitizes_stack_trace(self):
        error_msg = """ValueError: Something went wrong
        at line 42 in module.py"""

        error = create_internal_error(error_msg)

        assert "ValueError: Something went wrong" in error.message
        assert "at line" not in error.message

    def test_internal_error_with_original_exception(self):
        """Test that internal errors keep the original exception."""
        original = RuntimeError("Original error")
        error = create_internal_error("Wrapped error", original_error=original)

        assert error.original_error is original


class TestErrorStructureCompliance:
    """Tests for error structure consistency across error types."""

    def test_all_error_types_produce_valid_dict(self):
        """Test that every error type serializes to the same structure."""
        errors = [
            create_validation_error("Test"),
            create_file_not_found_error("test.yaml"),
            create_catalog_error("Test"),
            create_internal_error("Test"),
        ]

        for error in errors:
            result = error.to_dict()
            assert set(result["error"]) == {"code", "message", "retryable"}
            assert isinstance(result["error"]["code"], str)
            assert isinstance(result["error"]["message"], str)
            assert isinstance(result["error"]["retryable"], bool)
