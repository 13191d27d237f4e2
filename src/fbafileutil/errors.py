"""Exception types raised by FBAFileUtil and its service clients."""

from typing import Any, List, Optional


class FBAFileUtilError(Exception):
    """Base class for all errors raised by this package."""


class ArgumentShapeError(FBAFileUtilError, ValueError):
    """A public operation received arguments of the wrong count or type."""

    def __init__(self, message: str, method_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.method_name = method_name


class ConfigurationError(FBAFileUtilError):
    """A required deployment setting is missing."""


class TransportError(FBAFileUtilError):
    """The RPC transport could not complete a call."""

    def __init__(
        self,
        message: str,
        method_name: Optional[str] = None,
        status_line: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.method_name = method_name
        self.status_line = status_line

    def __str__(self) -> str:
        text = super().__str__()
        if self.status_line:
            text += f" ({self.status_line})"
        return text


class RemoteError(FBAFileUtilError):
    """The server answered with a JSON-RPC error object."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Any = None,
        method_name: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data
        self.method_name = method_name

    def __str__(self) -> str:
        text = f"{self.method_name}: " if self.method_name else ""
        text += f"{self.message} (code {self.code})"
        if self.data:
            text += f"\n{self.data}"
        return text


class JobTimeoutError(FBAFileUtilError):
    """An async job did not finish before the caller's deadline."""

    def __init__(self, job_id: str, waited: float) -> None:
        super().__init__(f"Job {job_id} not finished after {waited:.1f}s")
        self.job_id = job_id
        self.waited = waited


class JobCancelledError(FBAFileUtilError):
    """The caller cancelled the wait on an async job."""

    def __init__(self, job_id: str) -> None:
        super().__init__(f"Wait on job {job_id} was cancelled")
        self.job_id = job_id


class ExternalCommandError(FBAFileUtilError):
    """An external converter did not complete successfully."""

    def __init__(self, message: str, command: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.command = command or []


class LaunchFailed(ExternalCommandError):
    """The external process could not be started."""


class KilledBySignal(ExternalCommandError):
    """The external process was terminated by a signal."""

    def __init__(
        self, signal: int, core_dumped: bool = False, command: Optional[List[str]] = None
    ) -> None:
        super().__init__(
            "command died with signal %d, %s coredump"
            % (signal, "with" if core_dumped else "without"),
            command,
        )
        self.signal = signal
        self.core_dumped = core_dumped


class NonZeroExit(ExternalCommandError):
    """The external process exited with a nonzero code."""

    def __init__(self, code: int, command: Optional[List[str]] = None) -> None:
        super().__init__(f"command exited with value {code}", command)
        self.code = code


class ResourceError(FBAFileUtilError):
    """A local resource such as a scratch directory could not be created."""


class UnexpectedOutputError(FBAFileUtilError):
    """A download converter produced zero or several files."""

    def __init__(self, files: List[str]) -> None:
        super().__init__(
            "Incorrect number of files was generated! Expected 1 file, got "
            f"{len(files)}: {files}"
        )
        self.files = list(files)


class NotFoundError(FBAFileUtilError):
    """A Workspace object lookup found nothing."""


class NotImplementedConversionError(FBAFileUtilError, NotImplementedError):
    """A declared conversion operation has no implementation."""

    def __init__(self, method_name: str) -> None:
        super().__init__(f"{method_name} is not implemented")
        self.method_name = method_name
