"""Runs external format converters inside per-call scratch directories."""

import os
import subprocess
import uuid
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from .base_utils import BaseUtils
from .errors import (
    KilledBySignal,
    LaunchFailed,
    NonZeroExit,
    ResourceError,
    UnexpectedOutputError,
)


class ExitKind(Enum):
    """How an external process ended."""
    EXITED = "exited"
    SIGNALED = "signaled"
    LAUNCH_FAILED = "launch_failed"


@dataclass(frozen=True)
class ExternalCommandResult:
    """Classified outcome of one external process run.

    Attributes:
        kind: exited normally, killed by a signal, or never started
        code: exit code when kind is EXITED
        signal: signal number when kind is SIGNALED
        core_dumped: whether the signal produced a core dump
        stdout: captured standard output
        stderr: captured standard error, or the launch error text
    """

    kind: ExitKind
    code: Optional[int] = None
    signal: Optional[int] = None
    core_dumped: bool = False
    stdout: str = ""
    stderr: str = ""

    @classmethod
    def from_returncode(
        cls, returncode: int, stdout: str = "", stderr: str = ""
    ) -> "ExternalCommandResult":
        """Classify a subprocess return code; negative means killed by a signal."""
        if returncode < 0:
            return cls(ExitKind.SIGNALED, signal=-returncode, stdout=stdout, stderr=stderr)
        return cls(ExitKind.EXITED, code=returncode, stdout=stdout, stderr=stderr)

    @classmethod
    def from_wait_status(cls, status: int) -> "ExternalCommandResult":
        """Classify a raw POSIX wait status as returned by system().

        -1 means the command could not be run, the low seven bits hold the
        terminating signal, bit 8 the core dump flag, the high byte the exit
        code.
        """
        if status == -1:
            return cls(ExitKind.LAUNCH_FAILED)
        if status & 127:
            return cls(
                ExitKind.SIGNALED, signal=status & 127, core_dumped=bool(status & 128)
            )
        return cls(ExitKind.EXITED, code=status >> 8)

    @classmethod
    def launch_failed(cls, reason: str) -> "ExternalCommandResult":
        return cls(ExitKind.LAUNCH_FAILED, stderr=reason)

    @property
    def succeeded(self) -> bool:
        return self.kind is ExitKind.EXITED and self.code == 0

    def check(self, command: Optional[List[str]] = None) -> "ExternalCommandResult":
        """Raise the matching error unless the process exited with code 0."""
        if self.kind is ExitKind.LAUNCH_FAILED:
            raise LaunchFailed(
                f"Failed to execute command. {self.stderr}".strip(), command
            )
        if self.kind is ExitKind.SIGNALED:
            raise KilledBySignal(self.signal, self.core_dumped, command)
        if self.code != 0:
            raise NonZeroExit(self.code, command)
        return self


@dataclass(frozen=True)
class ScratchWorkspace:
    """A uniquely named working directory owned by one conversion call."""

    id: str
    path: Path


class ConversionRunner(BaseUtils):
    """Executes one external conversion step and collects what it produced.

    Scratch directories are never reused and never removed here. The
    working directory of the converter is passed to the child process, the
    current directory of this process is left alone.
    """

    def __init__(self, scratch_root: Union[str, Path], **kwargs: Any) -> None:
        super().__init__(name="ConversionRunner", **kwargs)
        self.scratch_root = Path(scratch_root)

    def prepare_scratch_space(self) -> ScratchWorkspace:
        """Create a fresh ``<scratch>/<uuid>`` directory."""
        scratch_id = str(uuid.uuid4())
        path = self.scratch_root / scratch_id
        try:
            os.makedirs(path)
        except OSError as e:
            self.log_error(f"Could not create scratch directory {path}: {e}")
            raise ResourceError(f"Could not create scratch directory {path}: {e}") from e
        self.log_debug(f"Created scratch directory {path}")
        return ScratchWorkspace(id=scratch_id, path=path)

    def run_external_converter(
        self, command: Sequence[str], cwd: Optional[Union[str, Path]] = None
    ) -> ExternalCommandResult:
        """Run a converter to completion and fail unless it exited with 0.

        Output is captured and logged, not returned to callers as structure.

        Raises:
            LaunchFailed: the process could not be started
            KilledBySignal: the process was terminated by a signal
            NonZeroExit: the process exited with a nonzero code
        """
        command = [str(item) for item in command]
        self.log_info(f"Running: {' '.join(command)}")
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            self.log_error(f"Failed to execute command: {e}")
            return ExternalCommandResult.launch_failed(str(e)).check(command)

        if completed.stdout:
            self.log_info(f"{command[0]} stdout:\n{completed.stdout}")
        if completed.stderr:
            self.log_warning(f"{command[0]} stderr:\n{completed.stderr}")

        result = ExternalCommandResult.from_returncode(
            completed.returncode, completed.stdout, completed.stderr
        )
        if result.kind is ExitKind.SIGNALED:
            self.log_error(f"command died with signal {result.signal}")
        else:
            self.log_info(f"command exited with value {result.code}")
        return result.check(command)

    def collect_single_output_file(self, scratch: ScratchWorkspace) -> Path:
        """Return the one file a download converter left in its scratch directory.

        Raises:
            UnexpectedOutputError: zero or several entries were produced
        """
        files = sorted(os.listdir(scratch.path))
        if len(files) != 1:
            self.log_error(f"Generated : {files}")
            raise UnexpectedOutputError(files)
        return scratch.path / files[0]
