"""Tests for custom exceptions."""

from pathlib import Path

import pytest

from walktree.exceptions import ConfigurationError, DuplicatePathError, TraversalError, WalkTreeError


class TestTraversalError:
    """Test TraversalError exception."""

    def test_traversal_error_with_cause(self):
        """Test creating TraversalError from an OSError."""
        cause = PermissionError(13, "Permission denied")
        error = TraversalError("/srv/private", cause)

        assert error.path == Path("/srv/private")
        assert error.cause is cause
        assert str(error) == "Cannot traverse /srv/private: [Errno 13] Permission denied"

    def test_traversal_error_with_message(self):
        """Test that an explicit message replaces the cause's text."""
        error = TraversalError("/r/link", message="symbolic link loop back to /r")
        assert error.cause is None
        assert str(error) == "Cannot traverse /r/link: symbolic link loop back to /r"

    def test_traversal_error_without_detail(self):
        error = TraversalError("/r")
        assert str(error) == "Cannot traverse /r: unknown error"


class TestDuplicatePathError:
    """Test DuplicatePathError exception."""

    def test_duplicate_path_error_creation(self):
        error = DuplicatePathError("/r/a")
        assert error.path == Path("/r/a")
        assert str(error) == "Duplicate path in entry stream: /r/a"


@pytest.mark.parametrize("error", [ConfigurationError("bad"), TraversalError("/r"), DuplicatePathError("/r")])
def test_errors_share_base_class(error):
    """Every package error can be caught as WalkTreeError."""
    assert isinstance(error, WalkTreeError)
    assert isinstance(error, Exception)
