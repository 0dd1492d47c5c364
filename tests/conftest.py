"""
Shared pytest fixtures for the AWS Cost Sankey test suite.

Provides:
- Configs with and without LLM settings
- Fake record source, renderer and summarizer that record their inputs
- Cost Explorer payload factory
"""

import pytest

from aws_cost_sankey.aggregator import CostAggregator
from aws_cost_sankey.base import GraphRenderer, TextSummarizer
from aws_cost_sankey.config import Account, Config, LLMSettings
from aws_cost_sankey.utils import RoundingPolicy


def ce_group(tag, category, amount):
    return {
        "Keys": [tag, category],
        "Metrics": {"AmortizedCost": {"Amount": amount, "Unit": "USD"}},
    }


def ce_results(*periods):
    """Build a ResultsByTime list, one entry per list of groups"""
    return [
        {
            "TimePeriod": {"Start": f"2024-{i + 1:02d}-01", "End": f"2024-{i + 2:02d}-01"},
            "Groups": groups,
        }
        for i, groups in enumerate(periods)
    ]


class FakeClient:
    """Record source serving canned ResultsByTime per account"""

    def __init__(self, results_by_account):
        self.results_by_account = results_by_account
        self.calls = []

    def fetch_cost_groups(self, account, dimension="SERVICE"):
        self.calls.append((account.name, dimension))
        return CostAggregator.groups_from_results(self.results_by_account[account.name])


class FakeRenderer(GraphRenderer):
    def __init__(self):
        self.rendered = []

    def render(self, view, output_file):
        self.rendered.append((view, output_file))
        return str(output_file)


class FakeSummarizer(TextSummarizer):
    def __init__(self, reply="Top 10 Contributor"):
        self.reply = reply
        self.texts = []

    def summarize(self, text):
        self.texts.append(text)
        return self.reply


@pytest.fixture(autouse=True)
def no_openai_env(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_MODEL", raising=False)


@pytest.fixture
def config():
    return Config(
        accounts=[
            Account(name="account1", key="key1", secret="secret1", token="token1"),
            Account(name="account2", key="key2", secret="secret2", token=""),
        ],
        start_date="2024-10-01",
        end_date="2024-10-31",
        threshold=100.0,
        rounding=RoundingPolicy.WHOLE,
    )


@pytest.fixture
def llm_config(config):
    config.llm = LLMSettings(
        api_key="sk-test", model="gpt-4o", max_tokens=3000, prompt="You are an architect."
    )
    return config


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def fake_summarizer():
    return FakeSummarizer()


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config and return its path"""

    def _write(content):
        path = tmp_path / "configs.yaml"
        path.write_text(content)
        return path

    return _write
