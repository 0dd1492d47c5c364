"""
Tests for the plotly Sankey renderer and the OpenAI summarizer.
"""

from unittest.mock import MagicMock

import pytest
import requests

from aws_cost_sankey.config import LLMSettings
from aws_cost_sankey.emitter import GraphView, Link
from aws_cost_sankey.exceptions import ConfigError, RenderError, SummaryError
from aws_cost_sankey.summarizer import OPENAI_CHAT_URL, OpenAISummarizer
from aws_cost_sankey.visualizer import SankeyVisualizer


@pytest.fixture
def view():
    return GraphView(
        nodes=["all", "account1", "prod", "EC2"],
        links=[
            Link("all", "account1", 200.0),
            Link("account1", "prod", 200.0),
            Link("prod", "EC2", 150.0),
        ],
        threshold=100.0,
    )


class TestSankeyVisualizer:
    def test_build_figure(self, config, view):
        fig = SankeyVisualizer(config).build_figure(view)
        sankey = fig.data[0]

        assert list(sankey.node.label) == [
            "200 all",
            "200 account1",
            "200 prod",
            "150 EC2",
        ]
        assert list(sankey.link.source) == [0, 1, 2]
        assert list(sankey.link.target) == [1, 2, 3]
        assert list(sankey.link.value) == [200.0, 200.0, 150.0]
        assert "2024-10-01-2024-10-31 > $100" in fig.layout.title.text

    def test_render_writes_html(self, config, view, tmp_path):
        output_file = tmp_path / "output.html"
        SankeyVisualizer(config).render(view, output_file)

        html = output_file.read_text()
        assert "AWS Cost Analysis" in html
        assert "1500px" in html

    def test_render_to_missing_directory(self, config, view, tmp_path):
        with pytest.raises(RenderError):
            SankeyVisualizer(config).render(view, tmp_path / "missing" / "output.html")


class TestOpenAISummarizer:
    @pytest.fixture
    def settings(self):
        return LLMSettings(api_key="sk-test", model="gpt-4o", max_tokens=3000, prompt="Be brief.")

    def _session(self, body):
        response = MagicMock()
        response.json.return_value = body
        session = MagicMock()
        session.post.return_value = response
        return session

    def test_requires_api_key(self):
        with pytest.raises(ConfigError):
            OpenAISummarizer(None)
        with pytest.raises(ConfigError):
            OpenAISummarizer(LLMSettings(api_key=""))

    def test_summarize(self, settings):
        session = self._session({"choices": [{"message": {"content": "Cut EC2."}}]})

        result = OpenAISummarizer(settings, session=session).summarize("all [1.00] a")

        assert result == "Cut EC2."
        call = session.post.call_args
        assert call.args[0] == OPENAI_CHAT_URL
        assert call.kwargs["headers"]["Authorization"] == "Bearer sk-test"
        payload = call.kwargs["json"]
        assert payload["model"] == "gpt-4o"
        assert payload["max_tokens"] == 3000
        assert payload["messages"] == [
            {"role": "system", "content": "Be brief."},
            {"role": "user", "content": "all [1.00] a"},
        ]

    @pytest.mark.parametrize(
        "body",
        [{}, {"choices": []}, {"choices": [{}]}, {"choices": [{"message": {}}]}],
    )
    def test_unexpected_response(self, settings, body):
        with pytest.raises(SummaryError):
            OpenAISummarizer(settings, session=self._session(body)).summarize("x")

    def test_http_error(self, settings):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("down")
        with pytest.raises(SummaryError, match="down"):
            OpenAISummarizer(settings, session=session).summarize("x")
