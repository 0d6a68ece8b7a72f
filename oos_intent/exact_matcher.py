"""
Exact-match shortcut: an utterance seen verbatim at training time is assigned
its intent with full confidence, ignoring case, punctuation, symbols and diacritics.
"""
import logging
import unicodedata
from typing import Dict, Optional, Sequence

from ._utils import strip_diacritics
from .constants import NONE_INTENT, SPECIAL_CHARACTERS
from .errors import ModelLoadingError, TrainingDataError, UntrainedClassifierError
from .schema import ExactMatchModel
from .state import ClassifierState, Trained, Untrained
from .svm import ProgressCallback
from .types import Intent, IntentPrediction, IntentPredictions, TrainInput, Utterance

logger = logging.getLogger(__name__)

ExactMatchIndex = Dict[str, str]

EXTRACTOR = "exact-matcher"


def normalize_text(text: str) -> str:
    """
    Case-folds, strips diacritics and replaces punctuation, symbols and
    ``SPECIAL_CHARACTERS`` by spaces.

    >>> normalize_text("Hello   There!")
    'hello there'
    """
    text = "".join(" " if ch in SPECIAL_CHARACTERS else ch for ch in text)
    text = strip_diacritics(text).casefold()
    text = "".join(" " if unicodedata.category(ch)[0] in "PS" else ch for ch in text)
    return " ".join(text.split())


def build_exact_match_index(intents: Sequence[Intent]) -> ExactMatchIndex:
    """
    Maps every normalized training utterance to its intent.

    The synthetic none intent is ignored. The same text may appear several times
    in one intent, but not in two different intents.

    :raises TrainingDataError: If two intents share a normalized utterance.
    """
    index: ExactMatchIndex = {}
    for intent in intents:
        if intent.name == NONE_INTENT:
            continue
        for utterance in intent.utterances:
            key = normalize_text(utterance.to_string())
            if not key:
                continue
            owner = index.get(key)
            if owner is not None and owner != intent.name:
                raise TrainingDataError(
                    f"Utterance '{utterance}' of intent '{intent.name}' is already an utterance "
                    f"of intent '{owner}' (compared as '{key}')."
                )
            index[key] = intent.name
    return index


def find_exact_intent(index: ExactMatchIndex, utterance: Utterance) -> Optional[IntentPrediction]:
    name = index.get(normalize_text(utterance.to_string()))
    if name is None:
        return None
    return IntentPrediction(name, 1.0, EXTRACTOR)


class ExactIntentClassifier:
    """
    Standalone intent classifier based on the exact-match index alone.

    Predicts a one-hot confidence vector over every trained intent, or all zeros
    when the utterance was not seen at training time.
    """
    name = "Exact Intent Classifier"

    def __init__(self):
        self.state: ClassifierState = Untrained()

    async def train(self, train_input: TrainInput, progress: Optional[ProgressCallback] = None) -> None:
        intents = [i for i in train_input.intents if i.name != NONE_INTENT]
        self.state = Trained(ExactMatchModel(
            intent_names=[i.name for i in intents],
            exact_match_index=build_exact_match_index(intents),
        ))
        if progress:
            progress(1.0)

    def serialize(self) -> str:
        if isinstance(self.state, Untrained):
            raise UntrainedClassifierError(self.name, "serialize")
        return self.state.model.model_dump_json()

    def load(self, serialized: str) -> None:
        try:
            self.state = Trained(ExactMatchModel.model_validate_json(serialized))
        except ValueError as e:
            raise ModelLoadingError(self.name, e) from e

    def predict(self, utterance: Utterance) -> IntentPredictions:
        if isinstance(self.state, Untrained):
            raise UntrainedClassifierError(self.name, "predict")
        model = self.state.model
        match = find_exact_intent(model.exact_match_index, utterance)
        return IntentPredictions([
            IntentPrediction(name, 1.0 if match and match.name == name else 0.0, EXTRACTOR)
            for name in model.intent_names
        ])
