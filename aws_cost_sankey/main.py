"""
Main orchestrator for AWS Cost Sankey
"""

from pathlib import Path

from .aggregator import CostAggregator
from .aws_client import SERVICE_DIMENSION, USAGE_TYPE_DIMENSION, AWSClient
from .emitter import emit_graph_view, write_text
from .exceptions import ConfigError
from .graph import CostGraph
from .replay import read_replay
from .summarizer import OpenAISummarizer
from .visualizer import SankeyVisualizer

OUTPUT_FORMATS = ("text", "chart", "text+ai")


class AWSCostSankey:
    """Runs one Source -> Aggregate -> Project -> Emit pass over its own graph"""

    def __init__(self, config, renderer=None, summarizer=None, client=None):
        """
        Initialize the pipeline

        Args:
            config: Loaded Config
            renderer: GraphRenderer, defaults to the plotly Sankey chart
            summarizer: TextSummarizer, created from config.llm on first use
            client: Record source, defaults to the AWS CLI client
        """
        self.config = config
        self.graph = CostGraph()
        self.aggregator = CostAggregator(self.graph, rounding=config.rounding)
        self.client = client or AWSClient(config)
        self.renderer = renderer or SankeyVisualizer(config)
        self._summarizer = summarizer

    @property
    def summarizer(self):
        if self._summarizer is None:
            self._summarizer = OpenAISummarizer(self.config.llm)
        return self._summarizer

    def fetch_from_aws(self, usage_type=False):
        """Fetch every configured account, one at a time, into the graph"""
        self.config.require_fetch_settings()
        dimension = USAGE_TYPE_DIMENSION if usage_type else SERVICE_DIMENSION

        for account in self.config.accounts:
            groups = self.client.fetch_cost_groups(account, dimension)
            self.aggregator.add_groups(account.name, groups)

        print(f"✓ Aggregated {len(self.graph)} edges, total ${self.graph.total():,.2f}")
        return self.graph

    def load_from_text(self, input_file):
        """Replay a text projection written by an earlier run"""
        read_replay(input_file, self.graph)
        return self.graph

    def generate_text(self, output_base):
        print("Generating text output...")
        output_file = Path(f"{output_base}.txt")
        write_text(self.graph, output_file)
        print(f"✓ Text output saved to: {output_file}")
        return output_file

    def generate_chart(self, output_base):
        print("Generating chart output...")
        output_file = Path(f"{output_base}.html")
        view = emit_graph_view(self.graph, self.config.threshold)
        print(
            f"  {len(view.links)} links and {len(view.nodes)} nodes at or above "
            f"${self.config.threshold:,.2f}"
        )
        self.renderer.render(view, output_file)
        return output_file

    def analyze(self, text_file):
        """Ask the summarizer for an analysis of a text projection"""
        text = Path(text_file).read_text()
        analysis = self.summarizer.summarize(text)
        print(f"OpenAI analysis:\n{analysis}")
        return analysis

    def run(self, output_base="output", output_format="chart", input_file=None, usage_type=False):
        """
        Run the whole pipeline

        Returns:
            Path of the written output file
        """
        if output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"unknown format: {output_format}")
        if output_format == "text+ai":
            # Missing LLM settings fail here, before anything is fetched
            self._summarizer = self.summarizer

        if input_file:
            self.load_from_text(input_file)
        else:
            self.fetch_from_aws(usage_type=usage_type)

        if output_format == "chart":
            return self.generate_chart(output_base)

        output_file = self.generate_text(output_base)
        if output_format == "text+ai":
            self.analyze(output_file)
        return output_file
