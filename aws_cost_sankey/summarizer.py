"""
OpenAI analysis of the text projection
"""

import requests

from .base import TextSummarizer
from .exceptions import ConfigError, SummaryError

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
REQUEST_TIMEOUT = 120


class OpenAISummarizer(TextSummarizer):
    """Sends the edge list to the chat completions API"""

    def __init__(self, llm_settings, session=None, url=OPENAI_CHAT_URL):
        if llm_settings is None or not llm_settings.api_key:
            raise ConfigError("OpenAI analysis requires openaiKey in the config")
        self.settings = llm_settings
        self.session = session or requests.Session()
        self.url = url

    def build_payload(self, text):
        return {
            "messages": [
                {"role": "system", "content": self.settings.prompt},
                {"role": "user", "content": text},
            ],
            "model": self.settings.model,
            "max_tokens": self.settings.max_tokens,
        }

    def summarize(self, text):
        self.print_section_header("ANALYZING WITH OPENAI")
        print(f"Model: {self.settings.model}, max tokens: {self.settings.max_tokens}")

        try:
            response = self.session.post(
                self.url,
                json=self.build_payload(text),
                headers={"Authorization": f"Bearer {self.settings.api_key}"},
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise SummaryError(f"OpenAI request failed: {e}") from e
        except ValueError as e:
            raise SummaryError(f"failed to decode OpenAI response: {e}") from e

        return self._extract_content(body)

    @staticmethod
    def _extract_content(body):
        choices = body.get("choices") if isinstance(body, dict) else None
        if not choices:
            raise SummaryError("no choices in OpenAI response")

        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise SummaryError("no message in first choice")

        content = message.get("content")
        if not isinstance(content, str):
            raise SummaryError("no content in message")
        return content
