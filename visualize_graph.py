"""Draw the optimization pipeline as Mermaid text or a PNG."""
import argparse

import requests

from optimizer.errors import GenerationError
from optimizer.graph import create_optimization_agent


class DiagramOnlyGenerator:
    """Stands in for the model while drawing; the graph is never run."""

    def generate(self, prompt):
        raise GenerationError("Diagram-only generator cannot produce text")


def optimization_graph():
    return create_optimization_agent(DiagramOnlyGenerator()).get_graph()


def mermaid_text() -> str:
    return optimization_graph().draw_mermaid()


def visualize(output_path="optimizer_graph.png", graph=None) -> bool:
    """Render through mermaid.ink (langchain's default draw method) into output_path."""
    graph = graph or optimization_graph()
    try:
        graph.draw_mermaid_png(output_file_path=output_path)
    except (ValueError, requests.RequestException) as e:
        print(f"Failed to render graph: {e}")
        return False
    print(f"Success: Graph visualization saved as '{output_path}'")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--output", default="optimizer_graph.png")
    parser.add_argument("--mermaid", action="store_true", help="print Mermaid text instead of a PNG")
    args = parser.parse_args()
    if args.mermaid:
        print(mermaid_text())
    else:
        visualize(args.output)
