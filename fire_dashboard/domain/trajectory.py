from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    ACCUMULATING = "accumulating"
    DECUMULATING = "decumulating"


@dataclass
class SimulationState:
    """
    Assets plus the current phase, carried across simulated years.

    The phase only ever moves ACCUMULATING -> DECUMULATING.
    """

    assets: float
    phase: Phase
    target: float

    @classmethod
    def start(cls, assets: float, target: float) -> "SimulationState":
        phase = Phase.DECUMULATING if assets >= target else Phase.ACCUMULATING
        return cls(assets=assets, phase=phase, target=target)

    @property
    def depleted(self) -> bool:
        return self.phase is Phase.DECUMULATING and self.assets <= 0

    def advance_month(
        self,
        monthly_rate: float,
        monthly_contribution: float,
        annual_withdrawal_rate: float,
    ) -> None:
        if self.phase is Phase.ACCUMULATING:
            self.assets = self.assets * (1 + monthly_rate) + monthly_contribution
            if self.assets >= self.target:
                self.phase = Phase.DECUMULATING
            return

        withdrawal = self.assets * annual_withdrawal_rate / 12
        self.assets = self.assets * (1 + monthly_rate) - withdrawal
        if self.assets <= 0:
            self.assets = 0.0
