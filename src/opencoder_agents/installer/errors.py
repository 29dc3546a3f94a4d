"""Installer exceptions and OS error classification."""

from __future__ import annotations

import errno
from enum import Enum
from pathlib import Path

from opencoder_agents.installer.config import FailureReason, ValidationResult


class IOErrorKind(str, Enum):
    """Closed set of filesystem failure kinds.

    An ``OSError`` is classified once, where it is caught. Retry decisions
    and user-facing messages dispatch on the kind only.
    """

    TRANSIENT = "transient"
    PERMISSION = "permission"
    NOT_PERMITTED = "not_permitted"
    NO_SPACE = "no_space"
    NOT_FOUND = "not_found"
    READ_ONLY = "read_only"
    TOO_MANY_FILES = "too_many_files"
    EXISTS = "exists"
    IS_DIRECTORY = "is_directory"
    OTHER = "other"


_ERRNO_KINDS: dict[int, IOErrorKind] = {
    errno.EAGAIN: IOErrorKind.TRANSIENT,
    errno.EBUSY: IOErrorKind.TRANSIENT,
    errno.EACCES: IOErrorKind.PERMISSION,
    errno.EPERM: IOErrorKind.NOT_PERMITTED,
    errno.ENOSPC: IOErrorKind.NO_SPACE,
    errno.ENOENT: IOErrorKind.NOT_FOUND,
    errno.EROFS: IOErrorKind.READ_ONLY,
    errno.EMFILE: IOErrorKind.TOO_MANY_FILES,
    errno.ENFILE: IOErrorKind.TOO_MANY_FILES,
    errno.EEXIST: IOErrorKind.EXISTS,
    errno.EISDIR: IOErrorKind.IS_DIRECTORY,
}


def classify_os_error(error: BaseException) -> IOErrorKind:
    """Map an exception onto an ``IOErrorKind`` using its ``errno``.

    Non-``OSError`` exceptions and unknown codes map to ``OTHER``.
    """
    if not isinstance(error, OSError) or error.errno is None:
        return IOErrorKind.OTHER
    return _ERRNO_KINDS.get(error.errno, IOErrorKind.OTHER)


def is_transient_error(error: BaseException) -> bool:
    """Return True if ``error`` may succeed when retried shortly after."""
    return classify_os_error(error) is IOErrorKind.TRANSIENT


def describe_os_error(error: BaseException, file: str, target_path: str | Path) -> str:
    """Return a user-friendly message for a failed filesystem operation.

    Args:
        error: The exception raised by the operation.
        file: Filename being processed.
        target_path: Destination path of the operation.

    Returns:
        A message describing the problem and, where possible, a remedy.
    """
    kind = classify_os_error(error)
    target = Path(target_path)
    messages = {
        IOErrorKind.PERMISSION: f"Permission denied. Check write permissions for {target.parent}",
        IOErrorKind.NOT_PERMITTED: "Operation not permitted. The file may be in use or locked",
        IOErrorKind.NO_SPACE: "Disk full. Free up space and try again",
        IOErrorKind.NOT_FOUND: f"Source file not found: {file}",
        IOErrorKind.READ_ONLY: "Read-only file system. Cannot write to target directory",
        IOErrorKind.TOO_MANY_FILES: "Too many open files. Close some applications and try again",
        IOErrorKind.EXISTS: f"Target already exists: {target}",
        IOErrorKind.IS_DIRECTORY: f"Expected a file but found a directory: {target}",
    }
    if kind is IOErrorKind.TRANSIENT:
        if isinstance(error, OSError) and error.errno == errno.EBUSY:
            return "File is busy or locked. Try again later"
        return "Resource temporarily unavailable. Try again"
    if kind in messages:
        return messages[kind]
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error) or "Unknown error"


class InstallerError(Exception):
    """Base exception for all installer errors.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}({self.message!r})"


class HomeDirectoryError(InstallerError):
    """Raised when the user's home directory cannot be determined.

    This is a startup failure for the whole process, not a per-file error.

    Attributes:
        cause: Original exception from the home directory lookup.
    """

    def __init__(self, cause: Exception | None = None) -> None:
        self.cause = cause
        cause_str = f" ({cause})" if cause else ""
        super().__init__(f"Cannot resolve the home directory{cause_str}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.cause,))


class MissingSourceDirectoryError(InstallerError):
    """Raised when the package's ``agents/`` directory does not exist.

    Attributes:
        path: Directory that was checked.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Source agents directory not found at {self.path}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (str(self.path),))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(path={str(self.path)!r})"


class NoCandidateFilesError(InstallerError):
    """Raised when the source directory holds no agent files.

    Attributes:
        path: Directory that was scanned.
        extension: File extension that was expected.
    """

    def __init__(self, path: str | Path, extension: str = ".md") -> None:
        self.path = Path(path)
        self.extension = extension
        super().__init__(f"No agent files ({extension}) found in {self.path}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (str(self.path), self.extension))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(path={str(self.path)!r}, extension={self.extension!r})"


class FileFailure(InstallerError):
    """Base for errors confined to a single file.

    The controllers catch these at the per-file boundary and turn them into
    a ``Failed`` outcome.

    Attributes:
        file: Filename the error refers to.
        reason: Failure reason recorded in the outcome.
        detail: Description without the filename.
    """

    reason: FailureReason = FailureReason.IO_ERROR

    def __init__(self, file: str, detail: str) -> None:
        self.file = file
        self.detail = detail
        super().__init__(f"{file}: {detail}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.file, self.detail))


class ValidationFailureError(FileFailure):
    """Raised when an agent document fails content validation.

    Attributes:
        result: The failing ``ValidationResult``.
    """

    def __init__(self, file: str, result: ValidationResult) -> None:
        self.result = result
        if result.reason is not None:
            self.reason = result.reason
        super().__init__(file, f"Invalid agent file: {result.detail}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.file, self.result))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        reason = self.result.reason.value if self.result.reason else None
        return f"{type(self).__name__}(file={self.file!r}, reason={reason!r})"


class SizeMismatchError(FileFailure):
    """Raised when a copied file's size differs from its source.

    Attributes:
        source_size: Size of the source file in bytes.
        target_size: Size of the target file in bytes.
    """

    reason = FailureReason.SIZE_MISMATCH

    def __init__(self, file: str, source_size: int, target_size: int) -> None:
        self.source_size = source_size
        self.target_size = target_size
        super().__init__(
            file,
            f"File size mismatch: source={source_size} bytes, target={target_size} bytes",
        )

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.file, self.source_size, self.target_size))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(file={self.file!r}, "
            f"source_size={self.source_size!r}, target_size={self.target_size!r})"
        )


class FileOperationError(FileFailure):
    """Raised when a copy, delete or read fails with an ``OSError``.

    Transient errors only end up here once retries are exhausted.

    Attributes:
        path: Path the operation was acting on.
        kind: Classified error kind.
        cause: Original ``OSError``.
    """

    reason = FailureReason.IO_ERROR

    def __init__(self, file: str, path: str | Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        self.kind = classify_os_error(cause)
        super().__init__(file, describe_os_error(cause, file, self.path))

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.file, str(self.path), self.cause))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(file={self.file!r}, "
            f"path={str(self.path)!r}, kind={self.kind.value!r})"
        )
