"""Result container for readout training runs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


@dataclass
class TrainingResult:
    """Per-epoch history of one training run.

    ``loss_history[e]`` is the mean pre-update cross-entropy over the samples
    of epoch ``e``; ``lr_history[e]`` is the learning rate used during it.
    Trained weights are not part of the result.
    """

    config: Dict[str, Any]
    loss_history: List[float] = field(default_factory=list)
    lr_history: List[float] = field(default_factory=list)
    n_samples: int = 0
    seed: int | None = None

    @property
    def final_learning_rate(self) -> float | None:
        return self.lr_history[-1] if self.lr_history else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-serialisable dictionary."""
        return {
            "config": self.config,
            "loss_history": [float(v) for v in self.loss_history],
            "lr_history": [float(v) for v in self.lr_history],
            "n_samples": int(self.n_samples),
            "seed": self.seed,
        }

    def save_json(self, path: str | Path) -> None:
        """Save the result to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)


__all__ = ["TrainingResult"]
