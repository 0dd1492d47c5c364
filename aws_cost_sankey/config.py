"""
Configuration management for AWS Cost Sankey
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError
from .utils import RoundingPolicy

# Load environment variables
load_dotenv()

DEFAULT_CONFIG_FILE = "configs/configs.yaml"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_TOKENS = 3000
DEFAULT_WIDTH = "1500px"
DEFAULT_HEIGHT = "1300px"
DATE_FORMAT = "%Y-%m-%d"


def default_config_path():
    return os.getenv("AWS_COST_SANKEY_CONFIG", DEFAULT_CONFIG_FILE)


@dataclass(frozen=True)
class Account:
    """One AWS account; credentials are handed to the AWS CLI untouched"""

    name: str
    key: str = ""
    secret: str = field(default="", repr=False)
    token: str = field(default="", repr=False)


@dataclass(frozen=True)
class LLMSettings:
    api_key: str = field(default="", repr=False)
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    prompt: str = ""


@dataclass
class Config:
    """Configuration settings for AWS Cost Sankey"""

    accounts: list = field(default_factory=list)
    start_date: str = ""
    end_date: str = ""
    threshold: float = 0.0
    width: str = DEFAULT_WIDTH
    height: str = DEFAULT_HEIGHT
    rounding: RoundingPolicy = RoundingPolicy.WHOLE
    llm: LLMSettings = None

    @classmethod
    def load(cls, config_file=None):
        """Read and validate a YAML config file"""
        path = Path(config_file or default_config_path())
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"failed to read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"error parsing YAML file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"config file {path} must contain a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data):
        start_date = _date_field(data, "startDate")
        end_date = _date_field(data, "endDate")
        if start_date and end_date and start_date >= end_date:
            raise ConfigError("startDate must be before endDate")

        return cls(
            accounts=_accounts(data.get("accounts")),
            start_date=start_date,
            end_date=end_date,
            threshold=_number(data.get("threshold", 0), "threshold", float),
            width=str(data.get("width") or DEFAULT_WIDTH),
            height=str(data.get("height") or DEFAULT_HEIGHT),
            rounding=RoundingPolicy.from_name(data.get("rounding", "whole")),
            llm=_llm_settings(data),
        )

    def require_fetch_settings(self):
        """Raise ConfigError unless the config can drive a live fetch"""
        if not self.accounts:
            raise ConfigError("no accounts configured")
        if not self.start_date or not self.end_date:
            raise ConfigError("startDate and endDate are required to fetch costs")


def _accounts(raw):
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigError("'accounts' must be a list")

    accounts = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or not item.get("name"):
            raise ConfigError(f"account #{i + 1} needs a 'name'")
        accounts.append(
            Account(
                name=str(item["name"]),
                key=str(item.get("key") or ""),
                secret=str(item.get("secret") or ""),
                token=str(item.get("token") or ""),
            )
        )
    return accounts


def _date_field(data, key):
    value = data.get(key)
    if value in (None, ""):
        return ""
    # YAML turns unquoted dates into date objects
    value = str(value)
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError as e:
        raise ConfigError(f"'{key}' must be in YYYY-MM-DD format, got {value!r}") from e
    return value


def _number(value, key, cast):
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a number")
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{key}' must be a number, got {value!r}") from e


def _llm_settings(data):
    api_key = data.get("openaiKey") or os.getenv("OPENAI_API_KEY", "")
    if not api_key:
        return None
    return LLMSettings(
        api_key=str(api_key),
        model=str(data.get("model") or os.getenv("OPENAI_MODEL", DEFAULT_MODEL)),
        max_tokens=_number(data.get("maxTokens", DEFAULT_MAX_TOKENS), "maxTokens", int),
        prompt=str(data.get("prompt") or ""),
    )
