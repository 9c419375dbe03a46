# mantenimiento/common/http_client.py
import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from .exceptions import APIException

logger = logging.getLogger(__name__)


class RestClient:
    """
    Cliente base para los servicios REST externos.

    Mantiene un único httpx.AsyncClient perezoso, reintenta los errores de
    conexión con espera exponencial y traduce las respuestas >= 400 a
    APIException con el mensaje que envía el servicio.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, headers=self._headers())
        return self._client

    @staticmethod
    def _extract_error_detail(response: httpx.Response) -> str:
        try:
            error_data = response.json()
        except ValueError:
            return response.text or f"Error HTTP {response.status_code}"
        if isinstance(error_data, dict):
            return str(error_data.get("message") or error_data.get("detail") or error_data)
        return str(error_data)

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        json_data: Optional[Any] = None,
    ) -> Any:
        client = self._get_client()
        for attempt in range(self.max_retries):
            try:
                response = await client.request(method=method, url=endpoint, params=params, json=json_data)
            except httpx.RequestError as e:
                if attempt == self.max_retries - 1:
                    logger.error(f"Error de conexión con {self.base_url}{endpoint}: {e}")
                    raise APIException(f"Error de conexión: {str(e)}")
                logger.warning(f"Reintento {attempt + 1}/{self.max_retries} para {method} {endpoint}: {e}")
                await asyncio.sleep(2**attempt)
                continue

            if response.status_code >= 400:
                error_detail = self._extract_error_detail(response)
                raise APIException(message=f"Error en la API: {error_detail}", status_code=response.status_code)
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                return response.text

    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
