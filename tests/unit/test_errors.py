"""Tests for installer errors and OS error classification."""

from __future__ import annotations

import errno
import pickle
from pathlib import Path

import pytest

from opencoder_agents.installer.config import FailureReason, ValidationResult
from opencoder_agents.installer.errors import (
    FileFailure,
    FileOperationError,
    HomeDirectoryError,
    InstallerError,
    IOErrorKind,
    MissingSourceDirectoryError,
    NoCandidateFilesError,
    SizeMismatchError,
    ValidationFailureError,
    classify_os_error,
    describe_os_error,
    is_transient_error,
)


def _os_error(code: int) -> OSError:
    return OSError(code, "boom")


class TestClassifyOsError:
    """Tests for classify_os_error and is_transient_error."""

    @pytest.mark.parametrize(
        ("code", "kind"),
        [
            (errno.EAGAIN, IOErrorKind.TRANSIENT),
            (errno.EBUSY, IOErrorKind.TRANSIENT),
            (errno.EACCES, IOErrorKind.PERMISSION),
            (errno.EPERM, IOErrorKind.NOT_PERMITTED),
            (errno.ENOSPC, IOErrorKind.NO_SPACE),
            (errno.ENOENT, IOErrorKind.NOT_FOUND),
            (errno.EROFS, IOErrorKind.READ_ONLY),
            (errno.EMFILE, IOErrorKind.TOO_MANY_FILES),
            (errno.EEXIST, IOErrorKind.EXISTS),
            (errno.EISDIR, IOErrorKind.IS_DIRECTORY),
        ],
    )
    def test_known_codes(self, code: int, kind: IOErrorKind) -> None:
        """Known errno values map onto their kind."""
        assert classify_os_error(_os_error(code)) is kind

    def test_unknown_code(self) -> None:
        """Unlisted errno values map to OTHER."""
        assert classify_os_error(_os_error(errno.EXDEV)) is IOErrorKind.OTHER

    def test_non_os_error(self) -> None:
        """Exceptions without errno map to OTHER."""
        assert classify_os_error(ValueError("x")) is IOErrorKind.OTHER
        assert classify_os_error(OSError("no errno")) is IOErrorKind.OTHER

    def test_transient(self) -> None:
        """Only EAGAIN and EBUSY are transient."""
        assert is_transient_error(_os_error(errno.EBUSY)) is True
        assert is_transient_error(_os_error(errno.EAGAIN)) is True
        assert is_transient_error(_os_error(errno.EACCES)) is False
        assert is_transient_error(RuntimeError("busy")) is False

    def test_subclass_classified_by_errno(self) -> None:
        """PermissionError is classified like any OSError."""
        error = PermissionError(errno.EACCES, "denied")
        assert classify_os_error(error) is IOErrorKind.PERMISSION


class TestDescribeOsError:
    """Tests for describe_os_error function."""

    def test_permission_names_parent(self) -> None:
        """Permission errors point at the directory to fix."""
        message = describe_os_error(_os_error(errno.EACCES), "a.md", "/x/agents/a.md")
        assert message == "Permission denied. Check write permissions for /x/agents"

    def test_busy(self) -> None:
        """EBUSY gets a try-again message."""
        message = describe_os_error(_os_error(errno.EBUSY), "a.md", "/x/a.md")
        assert message == "File is busy or locked. Try again later"

    def test_not_found_names_file(self) -> None:
        """Missing sources name the file."""
        message = describe_os_error(_os_error(errno.ENOENT), "a.md", "/x/a.md")
        assert message == "Source file not found: a.md"

    def test_disk_full(self) -> None:
        """ENOSPC suggests freeing space."""
        assert "Disk full" in describe_os_error(_os_error(errno.ENOSPC), "a.md", "/x/a.md")

    def test_unknown_falls_back_to_strerror(self) -> None:
        """Unlisted codes use the system message."""
        error = OSError(errno.EXDEV, "Invalid cross-device link")
        assert describe_os_error(error, "a.md", "/x/a.md") == "Invalid cross-device link"


class TestInstallerError:
    """Tests for base InstallerError."""

    def test_message(self) -> None:
        """Message is stored and returned by str()."""
        error = InstallerError("Something went wrong")
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_repr(self) -> None:
        """Repr names the class and message."""
        assert repr(InstallerError("oops")) == "InstallerError('oops')"

    def test_picklable(self) -> None:
        """Error survives pickling."""
        restored = pickle.loads(pickle.dumps(InstallerError("pickle test")))
        assert restored.message == "pickle test"


class TestHomeDirectoryError:
    """Tests for HomeDirectoryError."""

    def test_includes_cause(self) -> None:
        """The original error is part of the message."""
        error = HomeDirectoryError(KeyError("HOME"))
        assert "home directory" in str(error)
        assert "HOME" in str(error)
        assert isinstance(error, InstallerError)

    def test_picklable(self) -> None:
        """Error survives pickling."""
        error = HomeDirectoryError(RuntimeError("no home"))
        restored = pickle.loads(pickle.dumps(error))
        assert str(restored) == str(error)


class TestSourceErrors:
    """Tests for MissingSourceDirectoryError and NoCandidateFilesError."""

    def test_missing_source(self) -> None:
        """Missing source directory names the path."""
        error = MissingSourceDirectoryError("/pkg/agents")
        assert error.path == Path("/pkg/agents")
        assert str(error) == "Source agents directory not found at /pkg/agents"
        assert "path='/pkg/agents'" in repr(error)

    def test_no_candidates(self) -> None:
        """Empty source directory names the extension."""
        error = NoCandidateFilesError("/pkg/agents")
        assert error.extension == ".md"
        assert "(.md)" in str(error)

    def test_picklable(self) -> None:
        """Both errors survive pickling."""
        for error in (MissingSourceDirectoryError("/a"), NoCandidateFilesError("/a", ".txt")):
            restored = pickle.loads(pickle.dumps(error))
            assert str(restored) == str(error)


class TestFileFailures:
    """Tests for per-file errors."""

    def test_file_failure_defaults_to_io_error(self) -> None:
        """Base per-file failure carries the IOError reason."""
        error = FileFailure("a.md", "broken")
        assert error.reason is FailureReason.IO_ERROR
        assert str(error) == "a.md: broken"

    def test_validation_failure_takes_result_reason(self) -> None:
        """The validation reason becomes the outcome reason."""
        result = ValidationResult(
            valid=False,
            reason=FailureReason.MISSING_HEADER,
            detail="File does not have a markdown header (# ) after frontmatter",
        )
        error = ValidationFailureError("a.md", result)

        assert error.reason is FailureReason.MISSING_HEADER
        assert error.detail.startswith("Invalid agent file: ")
        assert isinstance(error, FileFailure)
        assert "MissingHeader" in repr(error)

    def test_validation_failure_picklable(self) -> None:
        """Validation failures survive pickling with their result."""
        result = ValidationResult(valid=False, reason=FailureReason.TOO_SHORT, detail="short")
        restored = pickle.loads(pickle.dumps(ValidationFailureError("a.md", result)))

        assert restored.reason is FailureReason.TOO_SHORT
        assert restored.result == result

    def test_size_mismatch(self) -> None:
        """Size mismatch reports both sizes."""
        error = SizeMismatchError("a.md", 120, 64)

        assert error.reason is FailureReason.SIZE_MISMATCH
        assert "source=120 bytes" in error.detail
        assert "target=64 bytes" in error.detail
        restored = pickle.loads(pickle.dumps(error))
        assert restored.target_size == 64

    def test_file_operation_error(self) -> None:
        """OS errors are classified and described."""
        cause = _os_error(errno.EROFS)
        error = FileOperationError("a.md", "/x/a.md", cause)

        assert error.kind is IOErrorKind.READ_ONLY
        assert error.cause is cause
        assert error.reason is FailureReason.IO_ERROR
        assert "Read-only file system" in error.detail
        assert "kind='read_only'" in repr(error)

    def test_file_operation_error_picklable(self) -> None:
        """File operation errors survive pickling."""
        error = FileOperationError("a.md", "/x/a.md", _os_error(errno.EBUSY))
        restored = pickle.loads(pickle.dumps(error))

        assert restored.kind is IOErrorKind.TRANSIENT
        assert restored.path == Path("/x/a.md")
