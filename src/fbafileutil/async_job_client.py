"""Submit-and-poll protocol for KBase services that run calls as async jobs.

Every remote operation ``op`` of service ``Svc`` is started with
``Svc._op_submit``, which returns a job id at once. The client then sleeps,
asks ``Svc._check_job`` for the job state and repeats until the state says
``finished``. Nothing is retried: an error from the submit or from any
single check ends the call.
"""

import threading
import time
from typing import Any, Callable, Dict, List, Optional

from .errors import ArgumentShapeError, JobCancelledError, JobTimeoutError, RemoteError
from .rpc_client import RpcClient

DEFAULT_JOB_CHECK_TIME_MS = 5000


class AsyncJobClient(RpcClient):
    """JSON-RPC client that runs every operation as a remote async job."""

    def __init__(
        self,
        url: str,
        service_name: str,
        token: Optional[str] = None,
        async_job_check_time_ms: float = DEFAULT_JOB_CHECK_TIME_MS,
        service_version: Optional[str] = None,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        **kwargs: Any,
    ) -> None:
        super().__init__(url, token=token, **kwargs)
        self.service_name = service_name
        self.async_job_check_time = async_job_check_time_ms / 1000.0
        self.service_version = service_version
        self._sleep = sleep
        self._clock = clock

    def _context(self) -> Optional[Dict[str, Any]]:
        if self.service_version:
            return {"service_ver": self.service_version}
        return None

    def _pause(self, cancel_event: Optional[threading.Event]) -> None:
        if self._sleep is not None:
            self._sleep(self.async_job_check_time)
        elif cancel_event is not None:
            cancel_event.wait(self.async_job_check_time)
        else:
            time.sleep(self.async_job_check_time)

    def submit(self, operation: str, params: List[Any]) -> str:
        """Start ``operation`` remotely and return the job id."""
        method = f"{self.service_name}._{operation}_submit"
        job_id = self.call_single(method, list(params), self._context())
        self.log_info(f"Submitted {self.service_name}.{operation} as job {job_id}")
        return job_id

    def check_job(self, job_id: str) -> Dict[str, Any]:
        """Fetch the current state record of a job."""
        if not isinstance(job_id, str):
            raise ArgumentShapeError(
                'Invalid type for argument 0 "job_id" (it should be a string)',
                method_name="_check_job",
            )
        return self.call_single(f"{self.service_name}._check_job", [job_id])

    def wait_for_job(
        self,
        job_id: str,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[Any]:
        """Block until the job finishes and return its result list.

        Each iteration sleeps for the check interval and then checks once.
        With no timeout and no cancel event this waits forever. Setting the
        cancel event wakes a sleeping wait at once.

        Args:
            job_id: id returned by submit
            timeout: seconds after which an unfinished job raises JobTimeoutError
            cancel_event: when set, the wait stops with JobCancelledError

        Returns:
            The job's result list, empty when the job reported none
        """
        start = self._clock()
        checks = 0
        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise JobCancelledError(job_id)
            self._pause(cancel_event)
            if cancel_event is not None and cancel_event.is_set():
                raise JobCancelledError(job_id)

            job_state = self.check_job(job_id)
            checks += 1
            if job_state.get("finished"):
                error = job_state.get("error")
                if error:
                    raise RemoteError(
                        error.get("message", "Job failed"),
                        code=error.get("code"),
                        data=error.get("error") or error.get("data"),
                        method_name=self.service_name,
                    )
                result = job_state.get("result")
                if result is None:
                    result = []
                self.log_info(f"Job {job_id} finished after {checks} checks")
                return result

            waited = self._clock() - start
            self.log_debug(f"Job {job_id} not finished after {waited:.1f}s")
            if timeout is not None and waited >= timeout:
                raise JobTimeoutError(job_id, waited)

    def call(
        self,
        operation: str,
        params: List[Any],
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[Any]:
        """Submit ``operation`` and wait for its result list."""
        job_id = self.submit(operation, params)
        return self.wait_for_job(job_id, timeout=timeout, cancel_event=cancel_event)
