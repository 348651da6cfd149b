from __future__ import annotations
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from .models import LowConfidenceEntry, Prediction


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LowConfidenceLog:
    """Append-only tab-separated sink for predictions below the threshold.

    The file is opened in append mode for every entry and never read back.
    """
    def __init__(self, path: str | Path, threshold: float = 0.6, clock: Optional[Callable[[], datetime]] = None):
        self.path = Path(path)
        self.threshold = threshold
        self._clock = clock or _utcnow

    def is_low(self, prediction: Prediction) -> bool:
        return prediction.max_score < self.threshold

    def append(self, text: str, prediction: Prediction) -> LowConfidenceEntry:
        entry = LowConfidenceEntry(timestamp=self._clock(), text=text, intent=prediction.intent,
                                   confidence=prediction.max_score)
        with self.path.open('a', encoding='utf-8', errors='backslashreplace') as f:
            f.write(entry.to_line())
        return entry

    def record_if_low(self, text: str, prediction: Prediction) -> Optional[LowConfidenceEntry]:
        if not self.is_low(prediction):
            return None
        return self.append(text, prediction)


__all__ = ['LowConfidenceLog']
