from __future__ import annotations
"""Single-row prediction over a TrainedIntentModel.

PredictionEngine.predict never mutates the model, so repeated calls with the
same query return identical score vectors.

Label resolution for score breakdowns tries, in order:
  1. key values recorded by the label encoder
  2. the classifier's class slots decoded through the encoder
  3. distinct intents of the raw training rows
and returns None when no source yields a list matching the score length.
"""
from typing import Callable, List, Optional, Sequence, Tuple
import warnings

import numpy as np

from core.errors import LabelsUnavailable
from .models import Prediction, UserQuery
from .pipeline import IntentKeyEncoder, TrainedIntentModel


class PredictionEngine:
    def __init__(self, model: TrainedIntentModel):
        self._model = model

    @property
    def model(self) -> TrainedIntentModel:
        return self._model

    def predict(self, query: UserQuery) -> Prediction:
        probs = self._model.score(query.text or '')
        idx = int(np.argmax(probs))  # first maximum on ties
        return Prediction(intent=self._model.decode(idx), scores=tuple(float(p) for p in probs))


def _key_values(model: TrainedIntentModel) -> Optional[List[str]]:
    return model.encoder.key_values or None


def _slot_names(model: TrainedIntentModel) -> Optional[List[str]]:
    try:
        return model.slot_names() or None
    except (AttributeError, IndexError, RuntimeError):
        return None


def resolve_labels(model: TrainedIntentModel, training_rows: Optional[Sequence[UserQuery]] = None,
                   key_order: str = 'occurrence') -> Optional[List[str]]:
    expected = model.class_count
    sources: List[Callable[[], Optional[List[str]]]] = [
        lambda: _key_values(model),
        lambda: _slot_names(model),
    ]
    for source in sources:
        labels = source()
        if labels and len(labels) == expected:
            return labels
    if training_rows:
        warnings.warn("could not read label key values; falling back to distinct labels from training data",
                      RuntimeWarning, stacklevel=2)
        labels = IntentKeyEncoder(key_order).fit([q.intent or '' for q in training_rows]).key_values
        if len(labels) == expected:
            return labels
    return None


def ranked_scores(prediction: Prediction, labels: Optional[Sequence[str]]) -> List[Tuple[str, float]]:
    """Pair labels with scores, highest score first."""
    if labels is None or len(labels) != len(prediction.scores):
        raise LabelsUnavailable(len(labels) if labels is not None else 0, len(prediction.scores))
    pairs = list(zip(labels, prediction.scores))
    pairs.sort(key=lambda kv: kv[1], reverse=True)
    return pairs


__all__ = ['PredictionEngine', 'resolve_labels', 'ranked_scores']
