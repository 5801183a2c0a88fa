from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class RNG:
  seed: Optional[int] = None

  def __post_init__(self):
    self.np = np.random.default_rng(self.seed)

  def integers(self, high: int) -> int:
    # Uniform pick in [0, high)
    return int(self.np.integers(0, high))
