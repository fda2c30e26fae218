"""
Zilliqa JSON-RPC client for contract sub-state reads.

This module provides the async gateway the naming service uses to read
registry and resolver contract fields through ``GetSmartContractSubState``.

Failure classification:
- Transport errors, timeouts, non-success HTTP statuses and bodies that are
  not JSON become NamingServiceDownError
- Anything else propagates untouched
- No retries are performed
"""

import time
from typing import Any, Optional

import httpx

from .enums import LogLevel, NamingServiceName
from .exceptions import NamingServiceDownError
from .resolution_logger import NullLogger, ResolutionLogger


class ZilliqaRPCClient:
    """
    Async JSON-RPC client for a Zilliqa API node.

    Can be used as an async context manager; otherwise the underlying
    httpx client is created on first use and released by close().
    """

    METHOD = "GetSmartContractSubState"

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[ResolutionLogger] = None,
    ) -> None:
        """
        Initialize the RPC client.

        Args:
            url: JSON-RPC endpoint of the API node
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
            logger: Optional logger for request failures
        """
        self._url = url
        self._timeout = timeout
        self._transport = transport
        self._logger = logger or NullLogger()
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def url(self) -> str:
        return self._url

    async def __aenter__(self) -> "ZilliqaRPCClient":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    @staticmethod
    def build_payload(contract_address: str, field: str, keys: list[str]) -> dict:
        """JSON-RPC body for a sub-state read; the address goes without 0x."""
        return {
            "id": "1",
            "jsonrpc": "2.0",
            "method": ZilliqaRPCClient.METHOD,
            "params": [contract_address.replace("0x", ""), field, list(keys)],
        }

    async def fetch_sub_state(
        self,
        contract_address: str,
        field: str,
        keys: Optional[list[str]] = None,
    ) -> Optional[dict[str, Any]]:
        """
        Read ``field`` (optionally narrowed to ``keys``) of a contract.

        Args:
            contract_address: Hex address of the contract
            field: Contract field name, e.g. 'records'
            keys: Map keys to narrow the read to

        Returns:
            The ``result`` member of the response, a mapping or None

        Raises:
            NamingServiceDownError: If the node cannot be reached or answers
                with something other than JSON
        """
        client = self._ensure_client()
        payload = self.build_payload(contract_address, field, keys or [])
        start_time = time.perf_counter()

        try:
            response = await client.post(
                self._url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            self._logger.log_error(
                "rpc_client",
                "Naming service answered with an error status",
                error=e,
                request_url=self._url,
                additional_data={"status_code": e.response.status_code},
            )
            raise NamingServiceDownError(
                NamingServiceName.ZNS.value,
                reason=f"HTTP {e.response.status_code}",
                url=self._url,
            ) from e
        except httpx.TransportError as e:
            self._logger.log_error("rpc_client", "Naming service unreachable", error=e, request_url=self._url)
            raise NamingServiceDownError(
                NamingServiceName.ZNS.value,
                reason=type(e).__name__,
                url=self._url,
            ) from e
        except ValueError as e:
            self._logger.log_error("rpc_client", "Naming service returned non-JSON body", error=e, request_url=self._url)
            raise NamingServiceDownError(
                NamingServiceName.ZNS.value,
                reason="invalid JSON response",
                url=self._url,
            ) from e

        self._logger.log(
            LogLevel.DEBUG,
            "rpc_client",
            f"{self.METHOD} {field}",
            {
                "contract": contract_address,
                "keys": list(keys or []),
                "response_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )

        if not isinstance(body, dict):
            return None
        return body.get("result")

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
