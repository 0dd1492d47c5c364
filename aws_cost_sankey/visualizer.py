"""
Interactive Plotly Sankey diagram for AWS cost analysis
"""

import plotly.graph_objects as go

from .base import GraphRenderer
from .exceptions import RenderError

# Constants
CHART_TITLE = "AWS Cost Analysis"
LABEL_FONT_SIZE = 12
NODE_PAD = 15
NODE_THICKNESS = 20


class SankeyVisualizer(GraphRenderer):
    """Handles Sankey chart creation"""

    def __init__(self, config):
        self.config = config

    def series_name(self, threshold):
        return f"{self.config.start_date}-{self.config.end_date} > ${threshold:.0f}"

    def build_figure(self, view):
        """Build the plotly figure for a GraphView"""
        index = view.node_index()
        node_values = self._node_values(view)

        fig = go.Figure(
            go.Sankey(
                node=dict(
                    label=[
                        f"{node_values[label]:,.0f} {label}" for label in view.nodes
                    ],
                    pad=NODE_PAD,
                    thickness=NODE_THICKNESS,
                    hovertemplate="%{label}<extra></extra>",
                ),
                link=dict(
                    source=[index[link.source] for link in view.links],
                    target=[index[link.target] for link in view.links],
                    value=[link.value for link in view.links],
                    hovertemplate=(
                        "%{source.label} → %{target.label}"
                        "<br>Cost: $%{value:,.2f}<extra></extra>"
                    ),
                ),
            )
        )

        fig.update_layout(
            title=dict(
                text=(
                    f"{CHART_TITLE}<br><sup>{self.series_name(view.threshold)}</sup>"
                ),
                font=dict(size=20),
            ),
            font=dict(size=LABEL_FONT_SIZE),
            template="plotly_white",
            autosize=True,
        )
        return fig

    def render(self, view, output_file):
        print("\nCreating Sankey chart...")

        fig = self.build_figure(view)
        try:
            fig.write_html(
                str(output_file),
                include_plotlyjs="cdn",
                full_html=True,
                default_width=self.config.width,
                default_height=self.config.height,
            )
        except OSError as e:
            raise RenderError(f"failed to write {output_file}: {e}") from e

        print(f"  Sankey chart saved to: {output_file}")
        return str(output_file)

    @staticmethod
    def _node_values(view):
        """Larger of each node's inflow and outflow"""
        inflow = {}
        outflow = {}
        for link in view.links:
            outflow[link.source] = outflow.get(link.source, 0.0) + link.value
            inflow[link.target] = inflow.get(link.target, 0.0) + link.value
        return {
            label: max(inflow.get(label, 0.0), outflow.get(label, 0.0))
            for label in view.nodes
        }
