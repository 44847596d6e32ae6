import logging
import os
from typing import Callable, Optional, Protocol

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from .errors import GenerationError
from .state import OptimizationState

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama-3.3-70b-versatile"

PROMPT_TEMPLATE = """You are an expert resume optimizer and career coach. Analyze the following resume and improve it by:

1. Enhancing action verbs and impact statements
2. Quantifying achievements where possible
3. Improving formatting and structure
4. Making descriptions more concise and powerful
5. Highlighting key skills and accomplishments
6. Ensuring ATS (Applicant Tracking System) compatibility
7. Removing redundancies and weak language

Maintain the original format structure (sections, bullet points, etc.) but improve the content quality.

Original Resume:
{content}

Provide the optimized version:"""

# Lazy-loaded so the service can start without credentials
_llm = None


def get_llm():
    global _llm
    if _llm is None:
        from langchain_groq import ChatGroq

        _llm = ChatGroq(
            model=os.getenv("OPTIMIZER_MODEL", DEFAULT_MODEL),
            temperature=float(os.getenv("OPTIMIZER_TEMPERATURE", "0.3")),
        )
    return _llm


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str:
        """Return generated text for ``prompt`` or raise GenerationError."""


class ChatModelGenerator:
    """Runs a single prompt through a LangChain chat model."""

    def __init__(self, llm: Optional[BaseChatModel] = None):
        self._llm = llm

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = get_llm()
        return self._llm

    def generate(self, prompt: str) -> str:
        try:
            response = self.llm.invoke([HumanMessage(content=prompt)])
        except Exception as e:
            raise GenerationError(f"Chat model call failed: {e}") from e

        text = getattr(response, "content", None)
        if not isinstance(text, str) or not text.strip():
            raise GenerationError(f"Malformed chat model response: {response!r}")
        return text.strip()


def build_prompt(content: str) -> str:
    # str.format does not re-scan the substituted value, so braces in a
    # LaTeX resume come through untouched.
    return PROMPT_TEMPLATE.format(content=content)


def build_prompt_node(state: OptimizationState):
    """Interpolate the resume into the fixed instruction prompt."""
    return {"prompt": build_prompt(state["content"])}


def make_generate_node(generator: TextGenerator) -> Callable[[OptimizationState], dict]:
    def generate_node(state: OptimizationState):
        """Single call to the generation backend. Failures propagate to the gateway."""
        logger.info("Requesting optimization (%d prompt chars)", len(state["prompt"]))
        return {"optimized_content": generator.generate(state["prompt"])}

    return generate_node
