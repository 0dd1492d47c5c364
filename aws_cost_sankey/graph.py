"""
Weighted multi-level cost graph
"""

from dataclasses import dataclass

import pandas as pd

ROOT_LABEL = "all"
FRAME_COLUMNS = ["source", "target", "amount"]


@dataclass(frozen=True)
class CostRecord:
    """One (parent, child, amount) edge"""

    source: str
    target: str
    amount: float


class CostGraph:
    """Maps a parent label to its children and their accumulated amounts

    Tiers (all -> account -> environment -> category) are a naming convention
    only. A label can be a child in one tier and a parent in the next.
    """

    def __init__(self):
        self._edges = {}

    def add(self, parent, child, amount):
        """Accumulate amount onto the parent -> child edge"""
        children = self._edges.setdefault(parent, {})
        children[child] = children.get(child, 0.0) + amount

    def set(self, parent, child, amount):
        """Overwrite the parent -> child edge"""
        self._edges.setdefault(parent, {})[child] = amount

    def edges(self):
        for parent, children in self._edges.items():
            for child, amount in children.items():
                yield CostRecord(parent, child, amount)

    def total(self):
        """Total amount under the root label"""
        return sum(self._edges.get(ROOT_LABEL, {}).values())

    def to_frame(self):
        """Edges as a DataFrame with source, target and amount columns"""
        rows = [
            {"source": edge.source, "target": edge.target, "amount": edge.amount}
            for edge in self.edges()
        ]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

    def __getitem__(self, parent):
        return self._edges[parent]

    def __len__(self):
        return sum(len(children) for children in self._edges.values())

    def __repr__(self):
        return f"CostGraph(parents={len(self._edges)}, edges={len(self)})"
