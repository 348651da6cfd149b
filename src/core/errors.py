"""Exception hierarchy for the intent classifier.

Startup failures (dataset, config, training) are fatal and turned into a
non-zero exit by the CLI. LabelsUnavailable is recoverable: the session
reports it and keeps reading input.
"""
from __future__ import annotations


class IntentClassifierError(Exception):
    pass


class DatasetError(IntentClassifierError):
    """Training file missing, unreadable or not decodable."""


class ConfigError(IntentClassifierError):
    pass


class TrainingError(IntentClassifierError):
    """Dataset cannot produce a usable model."""


class LabelsUnavailable(IntentClassifierError):
    def __init__(self, label_count: int, score_count: int):
        self.label_count = label_count
        self.score_count = score_count
        super().__init__(
            f"labels.Length = {label_count}, scores.Length = {score_count}"
        )


__all__ = [
    'IntentClassifierError', 'DatasetError', 'ConfigError', 'TrainingError', 'LabelsUnavailable',
]
