"""
Text and Sankey projections of the cost graph
"""

from dataclasses import dataclass, field
from typing import NamedTuple

import pandas as pd

from .exceptions import RenderError


class Link(NamedTuple):
    source: str
    target: str
    value: float


@dataclass
class GraphView:
    """Nodes and links that survive the threshold filter"""

    nodes: list = field(default_factory=list)
    links: list = field(default_factory=list)
    threshold: float = 0.0

    @property
    def node_set(self):
        return set(self.nodes)

    def node_index(self):
        """Map each node label to its position, as plotly links expect"""
        return {label: i for i, label in enumerate(self.nodes)}


def format_line(parent, child, amount):
    return f"{parent} [{amount:.2f}] {child}"


def emit_text(graph):
    """One "<parent> [<amount>] <child>" line per edge, in no particular order"""
    return [format_line(edge.source, edge.target, edge.amount) for edge in graph.edges()]


def emit_graph_view(graph, threshold=0.0):
    """
    Build the Sankey node/link view of the graph

    Args:
        graph: Fully aggregated CostGraph
        threshold: Edges with an amount below this are left out

    Returns:
        GraphView with only the nodes reachable through a surviving link
    """
    edges_df = graph.to_frame()
    surviving = edges_df[edges_df["amount"] >= threshold]

    links = [
        Link(row.source, row.target, float(row.amount))
        for row in surviving.itertuples(index=False)
    ]
    # Row-major ravel keeps each link's source ahead of its target
    nodes = list(pd.unique(surviving[["source", "target"]].to_numpy().ravel()))

    return GraphView(nodes=nodes, links=links, threshold=threshold)


def write_text(graph, output_file):
    """Write the text projection to output_file and return its lines"""
    lines = emit_text(graph)
    content = "".join(f"{line}\n" for line in lines)
    try:
        with open(output_file, "w") as f:
            f.write(content)
    except OSError as e:
        raise RenderError(f"failed to write {output_file}: {e}") from e
    return lines
