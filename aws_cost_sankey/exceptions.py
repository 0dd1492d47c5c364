"""
Error types for AWS Cost Sankey

Every error is fatal for the run. Nothing below the CLI catches them.
"""


class CostSankeyError(Exception):
    """Base class for all pipeline errors"""


class ConfigError(CostSankeyError):
    """Missing or invalid configuration"""


class SourceError(CostSankeyError):
    """The cost data source could not be read"""


class ParseError(CostSankeyError):
    """An amount or a replay line could not be parsed"""


class RenderError(CostSankeyError):
    """An output file could not be created or written"""


class SummaryError(CostSankeyError):
    """The LLM analysis call failed"""
