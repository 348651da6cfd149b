from __future__ import annotations
"""Record types shared by training, prediction and the interactive session."""
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from core.records import UserQuery


@dataclass(frozen=True)
class Prediction:
    intent: str
    scores: Tuple[float, ...]  # trainer class order, not sorted

    @property
    def max_score(self) -> float:
        return max(self.scores) if self.scores else 0.0


@dataclass(frozen=True)
class LowConfidenceEntry:
    timestamp: datetime
    text: str
    intent: str
    confidence: float

    def to_line(self) -> str:
        ts = self.timestamp.strftime('%Y-%m-%d %H:%M:%S')
        return f"{ts}\t{self.text}\t{self.intent}\t{self.confidence:.2f}\n"


__all__ = ['UserQuery', 'Prediction', 'LowConfidenceEntry']
