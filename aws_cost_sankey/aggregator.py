"""
Aggregation of grouped Cost Explorer entries into the cost graph
"""

from dataclasses import dataclass

from .exceptions import SourceError
from .graph import ROOT_LABEL
from .utils import DEFAULT_TAG_KEY, RoundingPolicy, normalize_environment, parse_amount

# Constants
COST_METRIC = "AmortizedCost"


@dataclass(frozen=True)
class CostGroup:
    """One grouped entry as returned by the record source"""

    environment_tag_raw: str
    category: str
    amount_raw: str


class CostAggregator:
    """Builds the all -> account -> environment -> category graph"""

    def __init__(self, graph, rounding=RoundingPolicy.WHOLE, tag_key=DEFAULT_TAG_KEY):
        self.graph = graph
        self.rounding = rounding
        self.tag_key = tag_key

    def add_group(self, account_name, environment_tag_raw, category, amount_raw):
        """Add a single grouped entry to all three tiers"""
        environment, amount = self._prepare(account_name, environment_tag_raw, amount_raw)
        self._write(account_name, environment, category, amount)

    def add_groups(self, account_name, groups):
        """
        Add every entry of one source to the graph

        Args:
            account_name: Account the entries belong to
            groups: Iterable of CostGroup

        Returns:
            int: Number of entries added

        All amounts are parsed before the first write, so a malformed amount
        raises ParseError and leaves the graph untouched.
        """
        prepared = []
        for group in groups:
            environment, amount = self._prepare(
                account_name, group.environment_tag_raw, group.amount_raw
            )
            prepared.append((environment, group.category, amount))

        for environment, category, amount in prepared:
            self._write(account_name, environment, category, amount)
        return len(prepared)

    def add_results(self, account_name, results_by_time):
        """Add a Cost Explorer ResultsByTime payload; time buckets accumulate"""
        return self.add_groups(account_name, self.groups_from_results(results_by_time))

    @staticmethod
    def groups_from_results(results_by_time):
        """Flatten ResultsByTime into CostGroup entries"""
        groups = []
        for result in results_by_time:
            for group in result.get("Groups", []):
                try:
                    keys = group["Keys"]
                    groups.append(
                        CostGroup(
                            environment_tag_raw=keys[0],
                            category=keys[1],
                            amount_raw=group["Metrics"][COST_METRIC]["Amount"],
                        )
                    )
                except (KeyError, IndexError, TypeError) as e:
                    raise SourceError(
                        f"unexpected Cost Explorer group: {group!r}"
                    ) from e
        return groups

    def _prepare(self, account_name, environment_tag_raw, amount_raw):
        environment = normalize_environment(
            environment_tag_raw, account_name, tag_key=self.tag_key
        )
        amount = self.rounding.apply(parse_amount(amount_raw))
        return environment, amount

    def _write(self, account_name, environment, category, amount):
        self.graph.add(ROOT_LABEL, account_name, amount)
        self.graph.add(account_name, environment, amount)
        self.graph.add(environment, category, amount)
