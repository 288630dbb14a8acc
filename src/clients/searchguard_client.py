from typing import Any, Dict, Optional

import httpx

from src import config
from src.clients.base import ServiceClient
from src.clients.result import CallResult


class SearchGuardClient(ServiceClient):
    """SearchGuard REST API의 역할(role) 엔드포인트 클라이언트."""

    def __init__(
        self,
        base_url: str = config.SEARCHGUARD_URL,
        username: str = config.LOGSDB_ADMIN_USER,
        password: str = config.LOGSDB_ADMIN_PASSWORD,
        client: Optional[httpx.Client] = None,
    ):
        super().__init__(base_url, client=client, auth=(username, password))

    def put_role(self, name: str, body: Dict[str, Any]) -> CallResult:
        return self.request("PUT", f"/roles/{name}", json=body)

    def delete_role(self, name: str) -> CallResult:
        return self.request("DELETE", f"/roles/{name}")
