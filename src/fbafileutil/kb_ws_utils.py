"""KBase Workspace utilities: object lookup and reference formatting."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .errors import NotFoundError
from .rpc_client import RpcClient
from .shared_env_utils import SharedEnvUtils


@dataclass(frozen=True)
class ObjectInfo:
    """Workspace object metadata, decoded from the service's info tuple."""

    objid: int
    name: str
    type: str
    save_date: str
    version: int
    saved_by: str
    wsid: int
    workspace: str
    chsum: str
    size: int
    meta: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_tuple(cls, info: Sequence[Any]) -> "ObjectInfo":
        meta = info[10] if len(info) > 10 and info[10] else {}
        return cls(
            objid=info[0],
            name=info[1],
            type=info[2],
            save_date=info[3],
            version=info[4],
            saved_by=info[5],
            wsid=info[6],
            workspace=info[7],
            chsum=info[8],
            size=info[9],
            meta=meta,
        )

    @property
    def ref(self) -> str:
        """Versioned reference ``wsid/objid/version``."""
        return f"{self.wsid}/{self.objid}/{self.version}"


class WorkspaceClient(RpcClient):
    """Synchronous client for the handful of Workspace calls used here."""

    def get_object_info_new(self, params: Dict[str, Any]) -> List[Optional[List[Any]]]:
        return self.call_single("Workspace.get_object_info_new", [params])


class KBWSUtils(SharedEnvUtils):
    """Utilities for looking up objects in the KBase Workspace service."""

    def __init__(
        self, workspace_url: Optional[str] = None, **kwargs: Any
    ) -> None:
        """Initialize KBase Workspace utilities."""
        super().__init__(**kwargs)
        self.workspace_url = workspace_url
        self._ws_client = None

    def ws_client(self) -> WorkspaceClient:
        """Get the Workspace client, creating it on first use."""
        if self._ws_client is None:
            url = self.workspace_url or self.get_config_value("workspace-url")
            self._ws_client = WorkspaceClient(url, token=self.get_token())
        return self._ws_client

    def set_ws_client(self, client: WorkspaceClient) -> None:
        """Use an externally created Workspace client."""
        self._ws_client = client

    def get_object_info(self, workspace_name: str, object_name: str) -> ObjectInfo:
        """Look up metadata for ``workspace_name/object_name``.

        Raises:
            NotFoundError: if the Workspace has no such object
        """
        ref = self.create_ref(object_name, workspace_name)
        infos = self.ws_client().get_object_info_new(
            {"objects": [{"ref": ref}], "ignoreErrors": 1}
        )
        if not infos or infos[0] is None:
            raise NotFoundError(f"No object found for reference {ref}")
        return ObjectInfo.from_tuple(infos[0])

    def resolve_workspace_reference(
        self, workspace_name: str, object_name: str
    ) -> str:
        """Return the versioned reference of a named object."""
        info = self.get_object_info(workspace_name, object_name)
        self.log_debug(f"{workspace_name}/{object_name} resolved to {info.ref}")
        return info.ref

    def create_ref(self, id_or_ref, ws=None):
        if isinstance(id_or_ref, int):
            id_or_ref = str(id_or_ref)
        if len(id_or_ref.split("/")) > 1:
            return id_or_ref
        if isinstance(ws, int):
            ws = str(ws)
        return ws + "/" + id_or_ref
