import logging
from typing import Optional

import httpx

from src import config
from src.clients.result import CallResult, Outcome

logger = logging.getLogger("provisioner.clients")


class ServiceClient:
    """
    외부 REST 서비스 호출을 감싸고, 응답을 CallResult로 분류하는 기본 클라이언트.

    호출은 예외를 던지지 않습니다. 실패 여부와 종류는 반환된 CallResult로 판단합니다.
    """

    def __init__(self, base_url: str, client: Optional[httpx.Client] = None, **client_kwargs):
        """
        Args:
            base_url: 서비스 API의 기본 URL.
            client: 주입할 httpx.Client (테스트용). 없으면 새로 생성합니다.
            client_kwargs: httpx.Client 생성 시 전달할 추가 인자 (auth, headers 등).
        """
        self.base_url = base_url.rstrip("/")
        self.http = client or httpx.Client(
            base_url=self.base_url, timeout=config.HTTP_TIMEOUT_SECONDS, **client_kwargs
        )

    def request(self, method: str, path: str, **kwargs) -> CallResult:
        try:
            response = self.http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 409:
                return CallResult(Outcome.CONFLICT, error=e)
            if status == 404:
                return CallResult(Outcome.NOT_FOUND, error=e)
            logger.debug(f"{method} {path} failed with status {status}")
            return CallResult(Outcome.FATAL, error=e)
        except httpx.RequestError as e:
            logger.debug(f"{method} {path} failed: {e}")
            return CallResult(Outcome.FATAL, error=e)

        return CallResult(Outcome.SUCCESS, data=self._decode(response))

    @staticmethod
    def _decode(response: httpx.Response):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def close(self):
        self.http.close()
