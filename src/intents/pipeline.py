"""Training pipeline: label keys -> text features -> max-entropy classifier.

Stages:
  A. IntentKeyEncoder maps each distinct intent string to a dense key 0..K-1
     (first-occurrence order by default, sorted when key_order='value').
  B. Text featurizer turns raw text into a fixed-width sparse vector. Two
     implementations:
       * tfidf   - word 1-2 gram TF-IDF + char_wb 3-5 gram TF-IDF (FeatureUnion)
       * hashing - HashingVectorizer + TfidfTransformer (constant memory)
  C. Multinomial LogisticRegression fitted with the stochastic 'saga' solver.
     Unseeded unless IntentConfig.seed is set.
  D. Predicted keys are decoded back through the encoder.

The resulting TrainedIntentModel is immutable and only ever read after
training; nothing here writes it to disk.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence
import warnings

import numpy as np
from scipy import sparse
from sklearn.base import BaseEstimator
from sklearn.feature_extraction.text import HashingVectorizer, TfidfTransformer, TfidfVectorizer
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import FeatureUnion, Pipeline

from core.config import IntentConfig
from core.errors import TrainingError
from .models import UserQuery


class IntentKeyEncoder(BaseEstimator):
    """Bijective mapping between intent strings and integer keys.

    Unlike sklearn's LabelEncoder the key order is the order in which labels
    first appear, unless key_order='value'.
    """
    def __init__(self, key_order: str = 'occurrence'):
        self.key_order = key_order

    def fit(self, y: Sequence[str]):
        seen: dict[str, None] = {}
        for label in y:
            if label not in seen:
                seen[label] = None
        labels = list(seen)
        if self.key_order == 'value':
            labels.sort()
        self.classes_ = np.array(labels, dtype=object)
        self.index_ = {lab: i for i, lab in enumerate(labels)}
        return self

    def transform(self, y: Sequence[str]) -> np.ndarray:
        if not hasattr(self, 'index_'):
            raise RuntimeError("Encoder not fitted")
        try:
            return np.array([self.index_[lab] for lab in y], dtype=int)
        except KeyError as e:
            raise ValueError(f"Unknown intent label {e.args[0]!r}") from e

    def fit_transform(self, y: Sequence[str]) -> np.ndarray:
        return self.fit(y).transform(y)

    def inverse_transform(self, keys: Sequence[int]) -> List[str]:
        if not hasattr(self, 'classes_'):
            raise RuntimeError("Encoder not fitted")
        return [str(self.classes_[int(k)]) for k in keys]

    @property
    def key_values(self) -> List[str]:
        return [str(c) for c in getattr(self, 'classes_', [])]


def build_featurizer(cfg: IntentConfig):
    if cfg.featurizer == 'hashing':
        return Pipeline([
            ("hash", HashingVectorizer(n_features=cfg.hash_features, ngram_range=(1, 2), lowercase=True,
                                       strip_accents='unicode', token_pattern=r"(?u)\b\w+\b")),
            ("tfidf", TfidfTransformer()),
        ])
    return FeatureUnion([
        ("word", TfidfVectorizer(ngram_range=(1, 2), lowercase=True, strip_accents='unicode',
                                 token_pattern=r"(?u)\b\w+\b")),
        ("char", TfidfVectorizer(analyzer="char_wb", ngram_range=(3, 5), lowercase=True)),
    ])


@dataclass(frozen=True)
class TrainedIntentModel:
    encoder: IntentKeyEncoder
    featurizer: Any
    classifier: LogisticRegression
    training_size: int

    @property
    def class_count(self) -> int:
        return len(self.classifier.classes_)

    def slot_names(self) -> List[str]:
        """Intent names in the classifier's score order."""
        return self.encoder.inverse_transform(self.classifier.classes_)

    def score(self, text: str) -> np.ndarray:
        X = self.featurizer.transform([text])
        return self.classifier.predict_proba(X)[0]

    def decode(self, score_index: int) -> str:
        key = self.classifier.classes_[score_index]
        return self.encoder.inverse_transform([key])[0]


def _row_nonzero_counts(X) -> np.ndarray:
    return sparse.csr_matrix(X).getnnz(axis=1)


def train_intent_model(queries: Sequence[UserQuery], cfg: IntentConfig = IntentConfig()) -> TrainedIntentModel:
    if not queries:
        raise TrainingError("Training data is empty")
    texts = [q.text or '' for q in queries]
    intents = [q.intent if q.intent is not None else '' for q in queries]

    encoder = IntentKeyEncoder(key_order=cfg.key_order)
    y = encoder.fit_transform(intents)
    if len(encoder.classes_) < 2:
        raise TrainingError(
            f"Need at least 2 distinct intents to train a classifier, found {len(encoder.classes_)}: {encoder.key_values}"
        )

    featurizer = build_featurizer(cfg)
    try:
        X = featurizer.fit_transform(texts)
    except ValueError as e:  # empty vocabulary
        raise TrainingError(f"Text featurization produced no features: {e}") from e
    nnz = _row_nonzero_counts(X)
    empty_rows = int((nnz == 0).sum())
    if empty_rows == len(texts):
        raise TrainingError("Every training row featurized to an all-zero vector")
    if empty_rows:
        warnings.warn(f"{empty_rows} of {len(texts)} training rows have no features", RuntimeWarning, stacklevel=2)

    clf = LogisticRegression(solver='saga', max_iter=cfg.max_iter, C=cfg.c, random_state=cfg.seed)
    try:
        clf.fit(X, y)
    except ValueError as e:
        raise TrainingError(f"Classifier fit failed: {e}") from e
    return TrainedIntentModel(encoder=encoder, featurizer=featurizer, classifier=clf, training_size=len(texts))


__all__ = ['IntentKeyEncoder', 'build_featurizer', 'TrainedIntentModel', 'train_intent_model']
