from typing import Optional

from langgraph.graph import StateGraph, END
from .state import OptimizationState
from .nodes import ChatModelGenerator, TextGenerator, build_prompt_node, make_generate_node


def create_optimization_agent(generator: Optional[TextGenerator] = None):
    """Two-step pipeline: compose the prompt, then one generation call. No retry edges."""
    workflow = StateGraph(OptimizationState)

    # Add Nodes
    workflow.add_node("build_prompt", build_prompt_node)
    workflow.add_node("generate", make_generate_node(generator or ChatModelGenerator()))

    # Set Entry Point
    workflow.set_entry_point("build_prompt")

    # Connect Nodes
    workflow.add_edge("build_prompt", "generate")
    workflow.add_edge("generate", END)

    return workflow.compile()
