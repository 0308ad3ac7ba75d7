"""
Error model for the progress engine tools.

Tool handlers never raise to the MCP client: every failure becomes a
``ToolError`` and is returned as ``{"error": {"code", "message", "retryable"}}``.
Messages are sanitized so absolute paths and tracebacks do not leak.
"""

import os
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Structured error codes for the MCP tools."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    CATALOG_ERROR = "CATALOG_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ToolError(Exception):
    """
    Failure with a code, a client-safe message and a retry hint.

    ``original_error`` keeps the wrapped exception for server-side logging;
    it is never serialized.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        retryable: bool = False,
        original_error: Optional[Exception] = None
    ):
        self.code = code
        self.message = message
        self.retryable = retryable
        self.original_error = original_error
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "retryable": self.retryable
            }
        }


def sanitize_path(path: str) -> str:
    """Reduce absolute paths to their basename; relative paths pass through."""
    return os.path.basename(path) if os.path.isabs(path) else path


def sanitize_stack_trace(error_msg: str) -> str:
    """Keep only the first line of a multi-line error message."""
    return error_msg.split('\n', 1)[0].strip()


def create_validation_error(message: str) -> ToolError:
    """Invalid request input; not retryable without changing the request."""
    return ToolError(code=ErrorCode.VALIDATION_ERROR, message=message)


def create_file_not_found_error(file_path: str, file_type: str = "File") -> ToolError:
    """
    Missing input file.

    Args:
        file_path: Path that was looked up (sanitized in the message)
        file_type: Label for the message, e.g. "Stage catalog"
    """
    return ToolError(
        code=ErrorCode.FILE_NOT_FOUND,
        message=f"{file_type} not found: {sanitize_path(file_path)}",
    )


def create_catalog_error(message: str, original_error: Optional[Exception] = None) -> ToolError:
    """Stage catalog that exists but cannot be read, parsed or validated."""
    return ToolError(
        code=ErrorCode.CATALOG_ERROR,
        message=f"Stage catalog error: {sanitize_stack_trace(message)}",
        original_error=original_error
    )


def create_internal_error(message: str, original_error: Optional[Exception] = None) -> ToolError:
    """Unexpected exception at the tool boundary; marked retryable."""
    return ToolError(
        code=ErrorCode.INTERNAL_ERROR,
        message=f"Internal error: {sanitize_stack_trace(message)}",
        retryable=True,
        original_error=original_error
    )
