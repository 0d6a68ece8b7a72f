"""
Intent classifier over a pluggable featurizer and a :class:`PointCloudClassifier`.
"""
import logging
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import ModelLoadingError, UntrainedClassifierError
from .point_cloud import PointCloudClassifier
from .schema import ListEntity, PatternEntity, SvmIntentModel
from .state import ClassifierState, Loaded, Trained, Untrained
from .svm import Point, ProgressCallback, SVMOptions
from .types import IntentPrediction, IntentPredictions, TrainInput, Utterance

logger = logging.getLogger(__name__)

Featurizer = Callable[[Utterance, Sequence[str]], np.ndarray]


class SvmIntentClassifier:
    """
    Multiclass intent classifier.

    :param tools: The capability bag; only its optimizer is used.
    :type tools: Tools
    :param featurizer: Turns an utterance and the entity names into a feature vector.
    :type featurizer: Featurizer
    :param c: Regularization constant of the support vector machine.
    :type c: float, optional
    """
    name = "SVM Intent Classifier"
    extractor = "svm-classifier"

    def __init__(self, tools, featurizer: Featurizer, c: float = 1.0):
        self.tools = tools
        self.featurizer = featurizer
        self.c = c
        self.state: ClassifierState = Untrained()

    async def train(self, train_input: TrainInput, progress: Optional[ProgressCallback] = None) -> None:
        names = train_input.entity_names
        points = [
            Point(intent.name, self.featurizer(utterance, names))
            for intent in train_input.intents
            for utterance in intent.utterances
        ]
        point_cloud = PointCloudClassifier(self.tools.optimizer, name=self.name)
        await point_cloud.train(points, SVMOptions(c=self.c, seed=train_input.seed),
                                labels=[i.name for i in train_input.intents], progress=progress)
        self.state = Trained(SvmIntentModel(
            classifier=point_cloud.model,
            list_entities=list(train_input.list_entities),
            pattern_entities=list(train_input.pattern_entities),
        ))

    def serialize(self) -> str:
        if isinstance(self.state, Untrained):
            raise UntrainedClassifierError(self.name, "serialize")
        return self.state.model.model_dump_json(exclude_none=True)

    def load(self, serialized: str) -> None:
        try:
            model = SvmIntentModel.model_validate_json(serialized)
        except ValueError as e:
            raise ModelLoadingError(self.name, e) from e
        self.state = Loaded(model, self._make_predictors(model))

    def _make_predictors(self, model: SvmIntentModel) -> PointCloudClassifier:
        point_cloud = PointCloudClassifier(self.tools.optimizer, name=self.name)
        point_cloud.load_model(model.classifier)
        return point_cloud

    @property
    def entities(self) -> Tuple[List[ListEntity], List[PatternEntity]]:
        """The list and pattern entities the classifier was trained with."""
        if isinstance(self.state, Untrained):
            return [], []
        return self.state.model.list_entities, self.state.model.pattern_entities

    def predict(self, utterance: Utterance) -> IntentPredictions:
        if isinstance(self.state, Untrained):
            raise UntrainedClassifierError(self.name, "predict")
        if isinstance(self.state, Trained):
            self.state = Loaded(self.state.model, self._make_predictors(self.state.model))

        model, point_cloud = self.state.model, self.state.predictors
        features = self.featurizer(utterance, model.entity_names)
        predictions = point_cloud.predict(features)
        return IntentPredictions([IntentPrediction(p.label, p.confidence, self.extractor) for p in predictions])
