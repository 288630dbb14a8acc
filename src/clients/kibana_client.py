from typing import Any, Dict, Optional

import httpx

from src import config
from src.clients.base import ServiceClient
from src.clients.result import CallResult


class KibanaClient(ServiceClient):
    """Kibana saved objects 및 테넌트 설정 API 클라이언트. 모든 호출은 테넌트 단위입니다."""

    def __init__(
        self,
        base_url: str = config.KIBANA_URL,
        username: str = config.LOGSDB_ADMIN_USER,
        password: str = config.LOGSDB_ADMIN_PASSWORD,
        client: Optional[httpx.Client] = None,
    ):
        super().__init__(base_url, client=client, auth=(username, password), headers={"kbn-xsrf": "true"})

    def create_index_pattern(self, pattern_id: str, attributes: Dict[str, Any], tenant: str) -> CallResult:
        return self.request(
            "POST",
            f"/saved_objects/index-pattern/{pattern_id}",
            json={"attributes": attributes},
            headers=self._tenant(tenant),
        )

    def get_settings(self, tenant: str) -> CallResult:
        return self.request("GET", "/kibana/settings", headers=self._tenant(tenant))

    def update_settings(self, changes: Dict[str, Any], tenant: str) -> CallResult:
        return self.request("POST", "/kibana/settings", json={"changes": changes}, headers=self._tenant(tenant))

    @staticmethod
    def _tenant(tenant: str) -> Dict[str, str]:
        return {"sgtenant": tenant, "kbn-xsrf": "true"}
