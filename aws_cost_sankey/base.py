"""
Capability interfaces for the pipeline's outward collaborators
"""

from abc import ABC, abstractmethod


class GraphRenderer(ABC):
    """Draws a GraphView to a file"""

    @abstractmethod
    def render(self, view, output_file):
        """
        Render the view

        Args:
            view: GraphView from emit_graph_view()
            output_file: Destination path

        Returns:
            str path to the written file
        """


class TextSummarizer(ABC):
    """Turns the text projection into a written analysis"""

    @abstractmethod
    def summarize(self, text):
        """Return the analysis for text"""

    def print_section_header(self, title):
        """Print a formatted section header"""
        print("\n" + "=" * 60)
        print(title)
        print("=" * 60)
