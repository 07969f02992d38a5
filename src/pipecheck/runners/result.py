from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from pipecheck.core.errors import AggregatorRetrievalError


@dataclass
class RunResult:
    """Result handle for engines that collect aggregates in memory."""

    aggregators: Dict[str, Any] = field(default_factory=dict)

    def get_aggregator_value(self, name: str) -> Any:
        if name not in self.aggregators:
            raise AggregatorRetrievalError(
                message=f"Aggregator not registered in this run: {name}",
                name=name,
                context={"available": sorted(self.aggregators)},
            )
        return self.aggregators[name]
