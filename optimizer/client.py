import logging
import os
from typing import Optional

import httpx

from .errors import ErrorKind, NetworkFailure

logger = logging.getLogger(__name__)

OPTIMIZE_PATH = "/api/optimize"


class OptimizationClient:
    """Issues the optimize request against the resume optimizer service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or os.getenv("OPTIMIZER_API_URL", "http://localhost:8000")
        self.timeout = timeout if timeout is not None else float(os.getenv("OPTIMIZER_TIMEOUT", "120"))
        self.transport = transport

    async def optimize(self, content: str) -> str:
        """Return the optimized text; raise NetworkFailure for anything else."""
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.post(OPTIMIZE_PATH, json={"content": content})
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as e:
                raise NetworkFailure(
                    f"Optimize request returned {e.response.status_code}",
                    kind=_failure_kind(e.response),
                ) from e
            except httpx.RequestError as e:
                raise NetworkFailure(f"Optimize request failed: {e}") from e
            except ValueError as e:
                raise NetworkFailure("Optimize response was not JSON") from e

        optimized = data.get("optimizedContent") if isinstance(data, dict) else None
        if not isinstance(optimized, str) or not optimized.strip():
            error = data.get("error") if isinstance(data, dict) else None
            raise NetworkFailure(
                f"Optimize response carried no content (error={error!r})",
                kind=ErrorKind.GENERATION_FAILED if error else ErrorKind.NETWORK_FAILURE,
            )
        return optimized


def _failure_kind(response: httpx.Response) -> ErrorKind:
    """GENERATION_FAILED when the service reported its own error body."""
    try:
        body = response.json()
    except ValueError:
        return ErrorKind.NETWORK_FAILURE
    if isinstance(body, dict) and body.get("error"):
        return ErrorKind.GENERATION_FAILED
    return ErrorKind.NETWORK_FAILURE
