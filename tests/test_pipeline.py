import pytest

from core.config import IntentConfig
from core.errors import TrainingError
from intents.models import UserQuery
from intents.pipeline import IntentKeyEncoder, train_intent_model

ROWS = [
    UserQuery("book a flight to paris", "BookFlight"),
    UserQuery("i need a plane ticket to london", "BookFlight"),
    UserQuery("what is my balance", "CheckBalance"),
    UserQuery("show my account balance", "CheckBalance"),
    UserQuery("cancel my flight reservation", "CancelBooking"),
    UserQuery("please cancel my trip to rome", "CancelBooking"),
]


def test_encoder_occurrence_order_round_trip():
    enc = IntentKeyEncoder().fit(['b', 'a', 'b', 'c'])
    assert enc.key_values == ['b', 'a', 'c']
    keys = enc.transform(['c', 'b'])
    assert keys.tolist() == [2, 0]
    assert enc.inverse_transform(keys) == ['c', 'b']


def test_encoder_value_order():
    enc = IntentKeyEncoder(key_order='value').fit(['b', 'a', 'c'])
    assert enc.key_values == ['a', 'b', 'c']


def test_encoder_rejects_unseen_label():
    enc = IntentKeyEncoder().fit(['a', 'b'])
    with pytest.raises(ValueError):
        enc.transform(['z'])


def test_trained_model_class_order_follows_keys():
    model = train_intent_model(ROWS, IntentConfig(seed=0))
    assert model.class_count == 3
    assert model.training_size == len(ROWS)
    assert model.slot_names() == ['BookFlight', 'CheckBalance', 'CancelBooking']


def test_single_intent_is_fatal():
    rows = [UserQuery("hello", "Greet"), UserQuery("hi there", "Greet")]
    with pytest.raises(TrainingError, match='at least 2 distinct intents'):
        train_intent_model(rows)


def test_empty_dataset_is_fatal():
    with pytest.raises(TrainingError):
        train_intent_model([])


def test_all_empty_text_is_fatal():
    rows = [UserQuery("", "A"), UserQuery("", "B")]
    with pytest.raises(TrainingError):
        train_intent_model(rows)


def test_some_empty_rows_warn():
    rows = ROWS + [UserQuery("", "BookFlight")]
    with pytest.warns(RuntimeWarning, match='no features'):
        model = train_intent_model(rows, IntentConfig(seed=0))
    assert model.class_count == 3


def test_hashing_featurizer_trains():
    model = train_intent_model(ROWS, IntentConfig(featurizer='hashing', hash_features=2**10, seed=0))
    assert model.class_count == 3
    assert len(model.score("book a flight")) == 3
