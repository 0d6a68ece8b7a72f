"""
Out-of-scope aware intent classifier.

Training synthesizes a none intent, then trains two support vector machines
concurrently: a multiclass in-scope classifier over the real intents plus a
sample of none utterances, and a binary scorer telling in-scope utterances from
synthetic out-of-scope ones. An exact-match index completes the model.

At prediction time the in-scope ranking is overridden by an exact match, if any,
and paired with the out-of-scope score. The two signals are independent: the
confidence of the none intent and the ``oos`` score are not reconciled.
::

    classifier = OOSIntentClassifier(make_default_tools(config), config)
    await classifier.train(train_input, progress=print)
    classifier.save("models/smalltalk.json")
    classifier.predict_text("where is my order?")
"""
import asyncio
import logging
import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence

from ._utils import round_half_up
from .config import Config, load_config
from .constants import MIN_NB_UTTERANCES, MIN_NONE_WORDS, NONE_INTENT, NONE_UTTERANCE_RATIO, OOS_LABEL_PREFIX
from .errors import ModelLoadingError, UntrainedClassifierError
from .exact_matcher import ExactMatchIndex, build_exact_match_index, find_exact_intent
from .featurizers import (featurize_in_scope_utterances, featurize_oos_utterances, get_intent_features,
                          get_utterance_features)
from .none_intent import make_none_intent
from .point_cloud import PointCloudClassifier
from .schema import OOSIntentModel
from .state import ClassifierState, Loaded, Trained, Untrained
from .svm import ProgressCallback, SVMOptions
from .svm_classifier import SvmIntentClassifier
from .tools import Tools, make_default_tools
from .types import Intent, NoneableIntentPredictions, TrainInput, Utterance

logger = logging.getLogger(__name__)


def _noop(progress: float) -> None:
    pass


def get_vocab(utterances: Sequence[Utterance]) -> List[str]:
    """Lowercase tokens of every utterance, in order, duplicates kept."""
    return [t.value for u in utterances for t in u.tokens]


class CombinedProgress:
    """
    Averages the progress of independent channels into a single callback.

    Each channel only moves forward, so the combined value never decreases and
    reaches exactly 1.0 once every channel has reported 1.0.
    """

    def __init__(self, callback: ProgressCallback, nb_channels: int):
        self._callback = callback
        self._values = [0.0] * nb_channels

    def channel(self, index: int) -> ProgressCallback:
        def report(progress: float) -> None:
            progress = min(max(progress, 0.0), 1.0)
            if progress <= self._values[index]:
                return
            self._values[index] = progress
            self._callback(sum(self._values) / len(self._values))
        return report


@dataclass(frozen=True)
class Predictors:
    base_intent_clf: SvmIntentClassifier
    oos_svm: Optional[PointCloudClassifier]
    training_vocab: FrozenSet[str]
    exact_match_index: ExactMatchIndex


class OOSIntentClassifier:
    """
    Intent classifier that also scores how likely an utterance is out of scope.

    :param tools: The capability bag (lexicon, junk words, utterance builder, optimizer, random).
    :type tools: Tools
    :param config: Training and serving settings. Defaults to ``Config()``.
    :type config: Config, optional
    """
    name = "OOS Intent Classifier"

    def __init__(self, tools: Tools, config: Optional[Config] = None):
        self.tools = tools
        self.config = config or Config()
        self.state: ClassifierState = Untrained()

    async def train(self, train_input: TrainInput, progress: Optional[ProgressCallback] = None) -> None:
        """
        Trains every sub-model and stores the combined model.

        :param train_input: Intents, utterances, entities and seed.
        :type train_input: TrainInput
        :param progress: Called with a non-decreasing value that ends at 1.0.
        :type progress: Callable[[float], None], optional
        :raises TrainingDataError: If two intents share an utterance.
        """
        exact_match_index = build_exact_match_index(train_input.intents)
        none_intent = make_none_intent(train_input.all_utterances, train_input.language, self.tools,
                                       self.tools.random.get_seeded(train_input.seed))

        combined = CombinedProgress(progress or _noop, nb_channels=2)
        oos_model, in_scope_model = await asyncio.gather(
            self._train_oos_svm(train_input, none_intent, combined.channel(0)),
            self._train_in_scope_svm(train_input, none_intent, combined.channel(1)),
        )

        self.state = Trained(OOSIntentModel(
            training_vocab=get_vocab(train_input.all_utterances),
            base_intent_clf_model=in_scope_model,
            oos_svm_model=oos_model,
            exact_match_index=exact_match_index,
        ))
        logger.info(f"{self.name} trained on {len(train_input.intents)} intents "
                    f"(out-of-scope scorer {'trained' if oos_model else 'skipped'}).")

    async def _train_oos_svm(self, train_input: TrainInput, none_intent: Intent,
                             progress: ProgressCallback) -> Optional[str]:
        none_utts = none_intent.utterances
        if not self.tools.lexicon.is_pos_available(train_input.language) or not none_utts:
            logger.info(f"Skipping out-of-scope training for language '{train_input.language}' "
                        f"({len(none_utts)} none utterances).")
            progress(1.0)
            return None

        vocab = frozenset(get_vocab(train_input.all_utterances))
        in_scope_utts = [u for i in train_input.intents if i.name != NONE_INTENT for u in i.utterances]
        points = featurize_in_scope_utterances(in_scope_utts, vocab) + featurize_oos_utterances(none_utts, vocab)

        svm = PointCloudClassifier(self.tools.optimizer, name=f"{self.name} (out-of-scope)")
        await svm.train(points, SVMOptions(c=self.config.oos_c, seed=train_input.seed), progress=progress)
        return svm.serialize()

    async def _train_in_scope_svm(self, train_input: TrainInput, none_intent: Intent,
                                  progress: ProgressCallback) -> str:
        none_utts = [u for u in none_intent.utterances if len(u.words) >= MIN_NONE_WORDS]
        trainable = [i for i in train_input.intents
                     if i.name != NONE_INTENT and len(i.utterances) >= MIN_NB_UTTERANCES]
        trainable_names = {i.name for i in trainable}
        excluded = [i.name for i in train_input.intents if i.name not in trainable_names]
        if excluded:
            logger.info(f"Intents with less than {MIN_NB_UTTERANCES} utterances left to exact match: {excluded}")

        n_avg_utts = math.ceil(sum(len(i.utterances) for i in trainable) / len(trainable)) if trainable else 0
        rng = self.tools.random.get_seeded(train_input.seed)
        n_none = min(len(none_utts), round_half_up(n_avg_utts * NONE_UTTERANCE_RATIO))
        none_sample = rng.shuffle(none_utts)[:n_none]

        contexts = list(train_input.intents[0].contexts) if train_input.intents else []
        intents = trainable + [Intent(NONE_INTENT, none_sample, contexts, [])]

        base_intent_clf = SvmIntentClassifier(self.tools, get_intent_features, c=self.config.in_scope_c)
        await base_intent_clf.train(replace(train_input, intents=intents), progress)
        return base_intent_clf.serialize()

    def serialize(self) -> str:
        if isinstance(self.state, Untrained):
            raise UntrainedClassifierError(self.name, "serialize")
        return self.state.model.model_dump_json(exclude_none=True)

    def load(self, serialized: str) -> None:
        """
        Loads a serialized model and builds its predictors.

        :raises ModelLoadingError: If the model, or one of its sub-models, is malformed.
        """
        try:
            model = OOSIntentModel.model_validate_json(serialized)
        except ValueError as e:
            raise ModelLoadingError(self.name, e) from e
        self.state = Loaded(model, self._make_predictors(model))

    def _make_predictors(self, model: OOSIntentModel) -> Predictors:
        base_intent_clf = SvmIntentClassifier(self.tools, get_intent_features, c=self.config.in_scope_c)
        base_intent_clf.load(model.base_intent_clf_model)

        oos_svm = None
        if model.oos_svm_model:
            oos_svm = PointCloudClassifier(self.tools.optimizer, name=f"{self.name} (out-of-scope)")
            oos_svm.load(model.oos_svm_model)

        return Predictors(
            base_intent_clf=base_intent_clf,
            oos_svm=oos_svm,
            training_vocab=frozenset(model.training_vocab),
            exact_match_index=model.exact_match_index,
        )

    def _get_predictors(self) -> Predictors:
        if isinstance(self.state, Untrained):
            raise UntrainedClassifierError(self.name, "predict")
        if isinstance(self.state, Trained):
            self.state = Loaded(self.state.model, self._make_predictors(self.state.model))
        return self.state.predictors

    def predict(self, utterance: Utterance) -> NoneableIntentPredictions:
        """
        Ranks the intents and scores the utterance as out of scope.

        An exact match moves its intent to the front with confidence 1.0; the
        other confidences are left as the in-scope classifier produced them.

        :raises UntrainedClassifierError: If neither ``train`` nor ``load`` was called.
        """
        predictors = self._get_predictors()

        intents = predictors.base_intent_clf.predict(utterance).intents
        exact = find_exact_intent(predictors.exact_match_index, utterance)
        if exact is not None:
            intents = [exact] + [p for p in intents if p.name != exact.name]

        oos = 0.0
        if predictors.oos_svm is not None:
            try:
                features = get_utterance_features(utterance, predictors.training_vocab)
                preds = predictors.oos_svm.predict(features)
                oos = max((p.confidence for p in preds if p.label.startswith(OOS_LABEL_PREFIX)), default=0.0)
            except Exception as e:
                logger.warning(f"Out-of-scope prediction failed, score set to 0: {e}")

        return NoneableIntentPredictions(intents=intents, oos=oos)

    def predict_text(self, text: str) -> NoneableIntentPredictions:
        """Builds an utterance from raw text, tagging the trained entities, and predicts it."""
        predictors = self._get_predictors()
        list_entities, pattern_entities = predictors.base_intent_clf.entities
        utterance = self.tools.utterance_builder.build([text], self.config.language,
                                                       list_entities, pattern_entities)[0]
        return self.predict(utterance)

    def save(self, path: str) -> None:
        """
        Saves the serialized model and its config.

        The config is saved next to the model with a ``_config.yml`` suffix
        (e.g. ``models/smalltalk.json`` and ``models/smalltalk_config.yml``).
        """
        model_path = Path(path)
        model_path.parent.mkdir(parents=True, exist_ok=True)
        model_path.write_text(self.serialize(), encoding="utf-8")
        self.config.save(str(config_path_for(model_path)))
        logger.info(f"Model saved to {model_path}.")

    @classmethod
    def from_path(cls, path: str, tools: Optional[Tools] = None) -> "OOSIntentClassifier":
        """Loads a model saved by :meth:`save`, along with its config when present."""
        model_path = Path(path)
        config_path = config_path_for(model_path)
        config = load_config(str(config_path)) if config_path.exists() else Config()
        classifier = cls(tools or make_default_tools(config), config)
        classifier.load(model_path.read_text(encoding="utf-8"))
        logger.info(f"Loaded model from {model_path}.")
        return classifier


def config_path_for(model_path: Path) -> Path:
    return model_path.with_name(f"{model_path.stem}_config.yml")
