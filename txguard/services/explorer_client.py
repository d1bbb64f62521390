"""
Block explorer API client.
Fetches contract verification status and address transaction history
from an Etherscan-compatible API. Never raises: every call returns
(value, StructuredError | None).
"""
import httpx
from typing import Optional, Dict, Any, List, Tuple
from txguard.core.config import settings
from txguard.core.enums import ErrorCode
from txguard.core.logger import get_logger
from txguard.core.models import StructuredError

logger = get_logger(__name__)

SOURCE = "etherscan"


class ExplorerClient:
    """Client for blockchain explorer APIs (Etherscan-like)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        chain_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url or settings.explorer_base_url
        self.api_key = settings.etherscan_api_key if api_key is None else api_key
        self.chain_id = chain_id or settings.chain_id
        self.timeout = timeout or settings.request_timeout_seconds

    async def get_contract_source(self, address: str) -> Tuple[Optional[Dict[str, Any]], Optional[StructuredError]]:
        """
        Fetch contract source code and verification status.
        Returns ({verified, source_code, contract_name, compiler_version}, None) when the
        explorer answered, or (None, error) when it failed or knows nothing about the address.
        """
        data, error = await self._get({
            "module": "contract",
            "action": "getsourcecode",
            "address": address,
        })
        if error:
            return None, error

        if data.get("status") != "1" or not data.get("result"):
            return None, StructuredError(
                code=ErrorCode.NOT_FOUND,
                message="Contract not verified or not found",
                source=SOURCE,
            )

        result = data["result"][0]
        if not isinstance(result, dict):
            return None, StructuredError(
                code=ErrorCode.PARSE_ERROR,
                message="Unexpected getsourcecode payload",
                source=SOURCE,
            )

        source_code = (result.get("SourceCode") or "").strip()
        return {
            "verified": bool(source_code),
            "source_code": source_code or None,
            "contract_name": result.get("ContractName"),
            "compiler_version": result.get("CompilerVersion"),
        }, None

    async def get_transactions(
        self,
        address: str,
        sort: str = "asc",
        page: int = 1,
        offset: int = 1,
        start_block: int = 0,
        end_block: int = 99999999,
    ) -> Tuple[Optional[List[Dict[str, Any]]], Optional[StructuredError]]:
        """
        List normal transactions of an address.
        Each entry exposes at least `from`, `to` and `blockNumber`.
        """
        data, error = await self._get({
            "module": "account",
            "action": "txlist",
            "address": address,
            "startblock": start_block,
            "endblock": end_block,
            "page": page,
            "offset": offset,
            "sort": sort,
        })
        if error:
            return None, error

        result = data.get("result")
        if data.get("status") != "1" or not isinstance(result, list):
            return None, StructuredError(
                code=ErrorCode.NOT_FOUND,
                message=f"No transactions returned: {data.get('message', 'unknown')}",
                source=SOURCE,
            )

        return result, None

    async def _get(self, params: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[StructuredError]]:
        if not self.api_key:
            return None, StructuredError(
                code=ErrorCode.MISSING_API_KEY,
                message="No explorer API key configured",
                source=SOURCE,
            )

        query = {"chainid": self.chain_id, **params, "apikey": self.api_key}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.base_url, params=query)
                response.raise_for_status()
                return response.json(), None

        except httpx.TimeoutException:
            logger.warning("explorer_timeout", action=params.get("action"))
            return None, StructuredError(
                code=ErrorCode.UPSTREAM_TIMEOUT,
                message="Explorer request timed out",
                source=SOURCE,
                retryable=True,
            )
        except httpx.HTTPError as e:
            logger.warning("explorer_http_error", action=params.get("action"), error=str(e))
            return None, StructuredError(
                code=ErrorCode.UPSTREAM_ERROR,
                message=f"HTTP error: {str(e)}",
                source=SOURCE,
                retryable=True,
            )
        except ValueError as e:
            return None, StructuredError(
                code=ErrorCode.PARSE_ERROR,
                message=f"Invalid JSON from explorer: {str(e)}",
                source=SOURCE,
            )
