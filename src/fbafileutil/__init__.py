"""FBAFileUtil - file conversion between flat files and KBase FBA objects."""

from .base_utils import BaseUtils
from .shared_env_utils import SharedEnvUtils
from .errors import (
    ArgumentShapeError,
    ConfigurationError,
    ExternalCommandError,
    FBAFileUtilError,
    JobCancelledError,
    JobTimeoutError,
    KilledBySignal,
    LaunchFailed,
    NonZeroExit,
    NotFoundError,
    NotImplementedConversionError,
    RemoteError,
    ResourceError,
    TransportError,
    UnexpectedOutputError,
)
from .rpc_client import RpcClient
from .async_job_client import AsyncJobClient
from .data_file_util_client import DataFileUtilClient
from .kb_ws_utils import KBWSUtils, ObjectInfo, WorkspaceClient
from .conversion_runner import (
    ConversionRunner,
    ExitKind,
    ExternalCommandResult,
    ScratchWorkspace,
)
from .fba_file_util import FBAFileUtil

__all__ = [
    "ArgumentShapeError",
    "AsyncJobClient",
    "BaseUtils",
    "ConfigurationError",
    "ConversionRunner",
    "DataFileUtilClient",
    "ExitKind",
    "ExternalCommandError",
    "ExternalCommandResult",
    "FBAFileUtil",
    "FBAFileUtilError",
    "JobCancelledError",
    "JobTimeoutError",
    "KBWSUtils",
    "KilledBySignal",
    "LaunchFailed",
    "NonZeroExit",
    "NotFoundError",
    "NotImplementedConversionError",
    "ObjectInfo",
    "RemoteError",
    "ResourceError",
    "RpcClient",
    "ScratchWorkspace",
    "SharedEnvUtils",
    "TransportError",
    "UnexpectedOutputError",
    "WorkspaceClient",
]

__version__ = "0.0.1"
