from core.errors import (
    IntentClassifierError,
    DatasetError,
    ConfigError,
    TrainingError,
    LabelsUnavailable,
)
from .models import UserQuery, Prediction, LowConfidenceEntry
from .pipeline import IntentKeyEncoder, TrainedIntentModel, train_intent_model
from .engine import PredictionEngine, resolve_labels, ranked_scores
from .low_confidence import LowConfidenceLog
from .session import InteractiveSession, SessionState, is_exit_sentinel

__all__ = [
    'IntentClassifierError','DatasetError','ConfigError','TrainingError','LabelsUnavailable',
    'UserQuery','Prediction','LowConfidenceEntry',
    'IntentKeyEncoder','TrainedIntentModel','train_intent_model',
    'PredictionEngine','resolve_labels','ranked_scores',
    'LowConfidenceLog','InteractiveSession','SessionState','is_exit_sentinel',
]
