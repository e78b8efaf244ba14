"""Invocation of hosted server functions over HTTP."""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from selfsight.core.config import settings
from selfsight.services.http_client import HTTPClientManager, http_client_manager
from selfsight.services.llm import strip_code_fences
from selfsight.shared.correlation import propagate_correlation_headers
from selfsight.shared.errors import FunctionInvocationError

logger = logging.getLogger("SelfSight.Functions.Client")


class FunctionsClient:
    """
    Calls ``{base_url}/{function_name}`` with a JSON body.

    One request per invocation. Every failure (transport error, non-2xx,
    unparsable body) is raised as FunctionInvocationError so callers can pick
    their fallback.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        http: Optional[HTTPClientManager] = None,
    ):
        self.base_url = (base_url or settings.FUNCTIONS_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.FUNCTIONS_KEY
        self._http = http or http_client_manager

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
            headers["apikey"] = self.api_key
        return propagate_correlation_headers(headers)

    async def invoke(self, function_name: str, body: Dict[str, Any]) -> Any:
        """Invoke a function and return its decoded JSON reply."""
        client = await self._http.get_client()
        url = f"{self.base_url}/{function_name}"

        try:
            response = await client.post(url, json=body, headers=self._headers())
        except httpx.HTTPError as exc:
            raise FunctionInvocationError(
                f"Could not reach {function_name}: {exc}",
                function_name=function_name,
            ) from exc

        if response.status_code == 429:
            raise FunctionInvocationError(
                f"{function_name} rejected the call: quota exceeded",
                function_name=function_name,
                status_code=429,
                quota_exceeded=True,
            )
        if response.is_error:
            raise FunctionInvocationError(
                f"{function_name} returned HTTP {response.status_code}",
                function_name=function_name,
                status_code=response.status_code,
            )

        try:
            return json.loads(strip_code_fences(response.text))
        except ValueError as exc:
            logger.error("%s returned malformed JSON: %s", function_name, response.text[:200])
            raise FunctionInvocationError(
                f"{function_name} returned malformed JSON",
                function_name=function_name,
                status_code=response.status_code,
            ) from exc
