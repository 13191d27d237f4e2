"""Client for the DataFileUtil service.

DataFileUtil contains utilities for saving and retrieving data to and from
KBase data services. Requires Shock 0.9.6+ and Workspace Service 0.4.1+.
"""

import threading
from typing import Any, Dict, List, Optional

from .async_job_client import DEFAULT_JOB_CHECK_TIME_MS, AsyncJobClient

DEFAULT_URL = "https://kbase.us/services/njs_wrapper"
DEFAULT_SERVICE_VERSION = "a47de0273593b2f9999f3506af179effab832220"


class DataFileUtilClient(AsyncJobClient):
    """Moves files between local disk and Shock by running DataFileUtil jobs.

    Each API method takes a single parameter structure and blocks until the
    remote job finishes. Pass ``timeout`` or ``cancel_event`` to bound the
    wait; by default it is unbounded.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        async_job_check_time_ms: float = DEFAULT_JOB_CHECK_TIME_MS,
        service_version: Optional[str] = None,
        async_version: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the client.

        Args:
            url: Service (or SDK callback) URL
            token: Authentication token
            async_job_check_time_ms: Interval between job status checks
            service_version: Service version requested for submitted jobs
            async_version: Older spelling of service_version, still accepted
            **kwargs: Passed to AsyncJobClient
        """
        super().__init__(
            url or DEFAULT_URL,
            "DataFileUtil",
            token=token,
            async_job_check_time_ms=async_job_check_time_ms,
            **kwargs,
        )
        if service_version is None and async_version is not None:
            self.log_warning(
                "async_version is deprecated, pass service_version instead"
            )
            service_version = async_version
        self.service_version = service_version or DEFAULT_SERVICE_VERSION

    def shock_to_file(
        self,
        *args: Any,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """Download a file from Shock.

        Params: shock_id, file_path (a directory means the Shock file name is
        used), unpack (optional). Returns node_file_name and attributes.
        """
        params = self.check_single_param("shock_to_file", args)
        return self._first(self.call("shock_to_file", [params], timeout, cancel_event))

    def file_to_shock(
        self,
        *args: Any,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """Load a file to Shock.

        Params: file_path, attributes, make_handle and gzip (all but
        file_path optional). Returns shock_id and handle (null unless
        make_handle was set).
        """
        params = self.check_single_param("file_to_shock", args)
        return self._first(self.call("file_to_shock", [params], timeout, cancel_event))

    def copy_shock_node(
        self,
        *args: Any,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """Copy a Shock node. Params: shock_id, make_handle (optional)."""
        params = self.check_single_param("copy_shock_node", args)
        return self._first(
            self.call("copy_shock_node", [params], timeout, cancel_event)
        )

    def versions(
        self,
        *args: Any,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[Any]:
        """Get the versions of the Workspace service and Shock service."""
        self.check_single_param("versions", args, expected=0)
        return self.call("versions", [], timeout, cancel_event)

    def version(self) -> str:
        """Version of the DataFileUtil module, fetched without a job."""
        return self.call_single("DataFileUtil.version", [])

    @staticmethod
    def _first(result: List[Any]) -> Any:
        return result[0] if result else None
