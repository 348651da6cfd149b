from __future__ import annotations
"""Resubstitution / held-out accuracy for a prediction engine."""
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Sequence

from .engine import PredictionEngine
from .models import UserQuery


@dataclass
class EvaluationReport:
    samples: int = 0
    correct: int = 0
    per_intent: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def accuracy(self) -> float:
        return self.correct / self.samples if self.samples else 0.0

    def to_dict(self) -> Dict[str, object]:
        return {
            'samples': self.samples,
            'correct': self.correct,
            'accuracy': round(self.accuracy, 3),
            'per_intent': self.per_intent,
        }


def evaluate(engine: PredictionEngine, queries: Sequence[UserQuery]) -> EvaluationReport:
    counts: Dict[str, Dict[str, int]] = defaultdict(lambda: {'correct': 0, 'total': 0})
    report = EvaluationReport()
    for q in queries:
        if q.intent is None:
            continue
        pred = engine.predict(UserQuery(text=q.text))
        counts[q.intent]['total'] += 1
        report.samples += 1
        if pred.intent == q.intent:
            counts[q.intent]['correct'] += 1
            report.correct += 1
    report.per_intent = dict(counts)
    return report


__all__ = ['EvaluationReport', 'evaluate']
