"""
Server boundary around the generation call.

Every failure is converted to a GatewayError carrying a stable status code
and a generic message; details only go to the log.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from .errors import ErrorKind
from .graph import create_optimization_agent
from .nodes import TextGenerator
from .state import OptimizationResult

logger = logging.getLogger(__name__)

MISSING_CONTENT_MESSAGE = "No content provided"
GENERATION_FAILED_MESSAGE = "Failed to optimize resume"


@dataclass(frozen=True)
class GatewayError:
    kind: ErrorKind
    status_code: int
    message: str


class OptimizationGateway:
    def __init__(self, generator: Optional[TextGenerator] = None):
        self.agent = create_optimization_agent(generator)

    def optimize(self, content: Optional[str]) -> Union[OptimizationResult, GatewayError]:
        if not content:
            return GatewayError(ErrorKind.MISSING_CONTENT, 400, MISSING_CONTENT_MESSAGE)

        try:
            final_state = self.agent.invoke({"content": content})
        except Exception:
            logger.error("Error in optimize gateway", exc_info=True)
            return GatewayError(ErrorKind.GENERATION_FAILED, 500, GENERATION_FAILED_MESSAGE)

        return OptimizationResult(text=final_state["optimized_content"])
