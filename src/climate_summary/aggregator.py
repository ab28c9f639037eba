import logging

from .errors import TooManyDistinctKeys
from .models import Observation, StateAggregate

logger = logging.getLogger(__name__)


class Aggregator:
    """
    Owns the per-state aggregates for one run.

    Aggregates live in an insertion-ordered mapping, so iteration follows the
    order in which each state code was first seen. An optional capacity
    bounds the number of distinct state codes, e.g. 50 for the US states.
    """

    def __init__(self, max_states: int | None = None) -> None:
        if max_states is not None and max_states < 1:
            raise ValueError("max_states must be at least 1")
        self.max_states = max_states
        self._states: dict[str, StateAggregate] = {}

    def fold(self, obs: Observation) -> StateAggregate:
        """Fold an observation into its state's aggregate, creating it on first sighting."""
        aggregate = self._states.get(obs.state_code)
        if aggregate is not None:
            aggregate.fold(obs)
            return aggregate

        if self.max_states is not None and len(self._states) >= self.max_states:
            raise TooManyDistinctKeys(self.max_states, obs.state_code)

        aggregate = StateAggregate.from_observation(obs)
        self._states[obs.state_code] = aggregate
        logger.debug(f"New state found: {obs.state_code}")
        return aggregate

    def all(self) -> list[StateAggregate]:
        return list(self._states.values())

    def codes(self) -> list[str]:
        return list(self._states)

    def get(self, code: str) -> StateAggregate | None:
        return self._states.get(code)

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, code: object) -> bool:
        return code in self._states
