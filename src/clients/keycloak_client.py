import time
from typing import Optional

import httpx

from src import config
from src.clients.base import ServiceClient
from src.clients.result import CallResult, Outcome

# 그룹 검색 한 번에 받아 올 최대 결과 수
GROUP_SEARCH_MAX = 100


class KeycloakClient(ServiceClient):
    """Keycloak Admin REST API 중 그룹/멤버십 관련 기능만 다루는 클라이언트."""

    def __init__(
        self,
        base_url: str = config.KEYCLOAK_URL,
        realm: str = config.KEYCLOAK_REALM,
        username: str = config.KEYCLOAK_ADMIN_USER,
        password: str = config.KEYCLOAK_ADMIN_PASSWORD,
        client: Optional[httpx.Client] = None,
    ):
        super().__init__(base_url, client=client)
        self.realm = realm
        self._username = username
        self._password = password
        self._token = None
        self._token_expires_at = 0.0

    def create_group(self, name: str) -> CallResult:
        return self._admin("POST", "/groups", json={"name": name})

    def search_groups(self, search: str) -> CallResult:
        # exact는 부분 일치 결과를 줄이기 위한 힌트이며, 최종 비교는 호출자가 이름으로 합니다.
        return self._admin("GET", "/groups", params={"search": search, "exact": "true", "max": GROUP_SEARCH_MAX})

    def rename_group(self, group_id: str, name: str) -> CallResult:
        return self._admin("PUT", f"/groups/{group_id}", json={"name": name})

    def delete_group(self, group_id: str) -> CallResult:
        return self._admin("DELETE", f"/groups/{group_id}")

    def find_users(self, username: str) -> CallResult:
        return self._admin("GET", "/users", params={"username": username})

    def add_user_to_group(self, user_id: str, group_id: str) -> CallResult:
        return self._admin("PUT", f"/users/{user_id}/groups/{group_id}")

    def remove_user_from_group(self, user_id: str, group_id: str) -> CallResult:
        return self._admin("DELETE", f"/users/{user_id}/groups/{group_id}")

    def _admin(self, method: str, path: str, **kwargs) -> CallResult:
        token = self._access_token()
        if not token.ok:
            return token
        headers = {"Authorization": f"Bearer {token.data}"}
        return self.request(method, f"/admin/realms/{self.realm}{path}", headers=headers, **kwargs)

    def _access_token(self) -> CallResult:
        if self._token and time.monotonic() < self._token_expires_at:
            return CallResult(Outcome.SUCCESS, data=self._token)

        result = self.request(
            "POST",
            "/realms/master/protocol/openid-connect/token",
            data={
                "grant_type": "password",
                "client_id": "admin-cli",
                "username": self._username,
                "password": self._password,
            },
        )
        if not result.ok:
            # 토큰 발급 실패는 호출 종류와 무관하게 치명적입니다.
            return CallResult(Outcome.FATAL, error=result.error)

        body = result.data if isinstance(result.data, dict) else {}
        token = body.get("access_token")
        if not isinstance(token, str) or not token:
            return CallResult(Outcome.FATAL, error=ValueError(f"token response has no access_token: {result.data!r}"))
        try:
            expires_in = int(body.get("expires_in", 60))
        except (TypeError, ValueError):
            expires_in = 60

        self._token = token
        # 만료 직전 재사용을 피하기 위해 여유 시간을 둡니다.
        self._token_expires_at = time.monotonic() + expires_in - 10
        return CallResult(Outcome.SUCCESS, data=self._token)
