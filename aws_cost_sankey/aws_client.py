"""
AWS Cost Explorer client for fetching billing data
"""

import json
import os
import subprocess

from .aggregator import COST_METRIC, CostAggregator
from .exceptions import SourceError

# Cost Explorer is a global service served from us-east-1
CE_REGION = "us-east-1"
GRANULARITY = "MONTHLY"
SERVICE_DIMENSION = "SERVICE"
USAGE_TYPE_DIMENSION = "USAGE_TYPE"


class AWSClient:
    """Handles AWS CLI interactions and data fetching"""

    def __init__(self, config, tag_key="environment", runner=subprocess.run):
        self.config = config
        self.tag_key = tag_key
        self.runner = runner

    def account_env(self, account):
        """Environment for one account's AWS CLI calls"""
        env = dict(os.environ)
        env.update(
            {
                "AWS_ACCESS_KEY_ID": account.key,
                "AWS_SECRET_ACCESS_KEY": account.secret,
                "AWS_SESSION_TOKEN": account.token,
                "AWS_DEFAULT_REGION": CE_REGION,
            }
        )
        if not account.token:
            env.pop("AWS_SESSION_TOKEN")
        # A profile would override the explicit keys
        env.pop("AWS_PROFILE", None)
        return env

    def build_command(self, dimension=SERVICE_DIMENSION, next_token=None):
        cmd = [
            "aws",
            "ce",
            "get-cost-and-usage",
            "--time-period",
            f"Start={self.config.start_date},End={self.config.end_date}",
            "--granularity",
            GRANULARITY,
            "--metrics",
            COST_METRIC,
            "--group-by",
            f"Type=TAG,Key={self.tag_key}",
            f"Type=DIMENSION,Key={dimension}",
            "--region",
            CE_REGION,
            "--output",
            "json",
        ]
        if next_token:
            cmd.extend(["--next-page-token", next_token])
        return cmd

    def fetch_cost_groups(self, account, dimension=SERVICE_DIMENSION):
        """Fetch one account's costs as CostGroup entries"""
        return CostAggregator.groups_from_results(
            self.fetch_results(account, dimension)
        )

    def fetch_results(self, account, dimension=SERVICE_DIMENSION):
        """
        Fetch grouped cost data for one account

        Args:
            account: Account with the credentials to use
            dimension: SERVICE or USAGE_TYPE

        Returns:
            list: ResultsByTime entries across all result pages
        """
        print(f"Fetching data for {account.name}")

        env = self.account_env(account)
        results_by_time = []
        next_token = None

        while True:
            cmd = self.build_command(dimension, next_token)
            page = self._run(cmd, env, account.name)
            results_by_time.extend(page.get("ResultsByTime", []))
            next_token = page.get("NextPageToken")
            if not next_token:
                break

        for result in results_by_time:
            period = result.get("TimePeriod", {})
            print(
                f"  Processing data for {account.name} from "
                f"{period.get('Start')} to {period.get('End')}"
            )

        print(f"✓ Fetched {len(results_by_time)} periods for {account.name}")
        return results_by_time

    def _run(self, cmd, env, account_name):
        try:
            result = self.runner(
                cmd, capture_output=True, text=True, check=True, env=env
            )
        except FileNotFoundError as e:
            raise SourceError("AWS CLI not found. Please install AWS CLI first.") from e
        except subprocess.CalledProcessError as e:
            raise SourceError(
                f"failed to get cost data for {account_name}: "
                f"{(e.stderr or '').strip() or e}"
            ) from e

        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise SourceError(
                f"invalid Cost Explorer response for {account_name}: {e}"
            ) from e
