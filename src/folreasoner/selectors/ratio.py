"""Weight/age ratio selector."""

from typing import Optional

from folreasoner.proofs.state import ProofState
from .base import ClauseSelector
from .fifo import FIFOSelector
from .smallest import SmallestSelector


class RatioSelector(ClauseSelector):
    """Pick the smallest clause ``ratio`` times, then the oldest once.

    The age picks keep large early clauses from starving.
    """

    def __init__(self, ratio: int = 4):
        super().__init__()
        if ratio < 1:
            raise ValueError(f"pick-given ratio must be positive, got {ratio}")
        self.ratio = ratio
        self._by_weight = SmallestSelector()
        self._by_age = FIFOSelector()
        self._counter = 0

    def select(self, proof_state: ProofState) -> Optional[int]:
        if not proof_state.unprocessed:
            return None
        self._counter += 1
        if self._counter > self.ratio:
            self._counter = 0
            return self._by_age.select(proof_state)
        return self._by_weight.select(proof_state)

    @property
    def name(self) -> str:
        return "ratio"
