import logging
import numpy as np

logger = logging.getLogger(__name__)


class UnweightingController:
    def __init__(self, w_max: float, safety_factor: float = 1.2):
        if w_max <= 0.0:
            raise ValueError(f"w_max must be positive, got {w_max}")
        self.w_max = w_max * safety_factor
        self.safety_factor = safety_factor
        self.accepted = 0
        self.rejected = 0
        self.overflows = 0

    def accept(self, weight: float, rng: np.random.Generator) -> bool:
        if weight > self.w_max:
            # the estimate was too low; raise it so later samples stay unbiased
            self.overflows += 1
            logger.warning(f"Weight {weight:.4e} exceeds w_max {self.w_max:.4e}, raising maximum")
            self.w_max = weight * self.safety_factor
        r = rng.uniform(0.0, self.w_max)
        if r < weight:
            self.accepted += 1
            return True
        else:
            self.rejected += 1
            return False

    @property
    def efficiency(self) -> float:
        total = self.accepted + self.rejected
        return self.accepted / total if total > 0 else 0.0
