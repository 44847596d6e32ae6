import requests

import visualize_graph


class RecordingGraph:
    def __init__(self, error=None):
        self.error = error
        self.paths = []

    def draw_mermaid_png(self, output_file_path=None):
        self.paths.append(output_file_path)
        if self.error is not None:
            raise self.error
        return b"\x89PNG"


def test_mermaid_text_lists_pipeline_nodes():
    text = visualize_graph.mermaid_text()
    assert "build_prompt" in text
    assert "generate" in text
    assert text.index("build_prompt") < text.rindex("generate")


def test_graph_builds_without_credentials(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    graph = visualize_graph.optimization_graph()
    assert {"build_prompt", "generate"} <= set(graph.nodes)


def test_visualize_writes_to_requested_path(tmp_path):
    graph = RecordingGraph()
    output = str(tmp_path / "graph.png")

    assert visualize_graph.visualize(output, graph=graph)
    assert graph.paths == [output]


def test_visualize_reports_render_failure(tmp_path):
    graph = RecordingGraph(error=requests.ConnectionError("mermaid.ink unreachable"))
    assert not visualize_graph.visualize(str(tmp_path / "graph.png"), graph=graph)

    graph = RecordingGraph(error=ValueError("Failed to reach https://mermaid.ink/"))
    assert not visualize_graph.visualize(str(tmp_path / "graph.png"), graph=graph)
