"""
AWS Cost Sankey

Breaks AWS costs down into an all -> account -> environment -> service flow:
- Cost Explorer fetch across several accounts
- Replay of earlier text output
- Plain-text edge list or interactive Sankey chart
- Optional OpenAI analysis of the edge list
"""

from .config import Config
from .graph import CostGraph
from .main import AWSCostSankey

__version__ = "1.0.0"
__all__ = ["AWSCostSankey", "Config", "CostGraph"]
