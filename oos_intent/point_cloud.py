"""
Generic multiclass/binary classifier over labeled feature vectors.

The heavy lifting is delegated to an :class:`~oos_intent.tools.Optimizer`. This
wrapper filters unusable points, handles the degenerate cases where fewer than
two classes are available, and owns the persisted form of the result.
"""
import logging
from typing import List, Optional, Sequence

import numpy as np

from .errors import ModelLoadingError, UntrainedClassifierError
from .schema import PointCloudModel
from .state import ClassifierState, Loaded, Trained, Untrained
from .svm import Point, ProgressCallback, SVMOptions, SVMPrediction

logger = logging.getLogger(__name__)


def _noop(progress: float) -> None:
    pass


def to_numeric(coordinates: Sequence[float]) -> Optional[np.ndarray]:
    """
    Converts coordinates to a float vector.

    :return: The vector, or None if any coordinate is not a number.
    :rtype: np.ndarray, optional
    """
    try:
        vector = np.asarray(coordinates, dtype=float)
    except (TypeError, ValueError):
        return None
    if vector.ndim != 1 or np.isnan(vector).any():
        return None
    return vector


class PointCloudClassifier:
    """
    Turns labeled points into a serializable predictor.

    :param optimizer: The optimizer used to fit and load support vector machines.
    :type optimizer: Optimizer
    :param name: Name reported in errors, to identify the owning component.
    :type name: str, optional
    """

    def __init__(self, optimizer, name: str = "Point Cloud Classifier"):
        self.optimizer = optimizer
        self.name = name
        self.state: ClassifierState = Untrained()

    @property
    def model(self) -> PointCloudModel:
        if isinstance(self.state, Untrained):
            raise UntrainedClassifierError(self.name, "serialize")
        return self.state.model

    async def train(self, points: Sequence[Point], options: SVMOptions,
                    labels: Optional[Sequence[str]] = None,
                    progress: Optional[ProgressCallback] = None) -> Optional[str]:
        """
        Trains on ``points``, dropping those with non-numeric coordinates.

        When fewer than two distinct labels remain, no optimizer is involved: the
        classifier only remembers ``labels`` and reports completion right away.

        :param points: The labeled point cloud.
        :param options: Optimizer options.
        :param labels: Names to remember. Defaults to the labels found in ``points``.
        :param progress: Called with values in [0, 1]; always ends with 1.
        :return: The optimizer blob, or None when training was skipped.
        """
        progress = progress or _noop
        kept = []
        for point in points:
            vector = to_numeric(point.coordinates)
            if vector is not None:
                kept.append(Point(point.label, vector))
        if len(kept) < len(points):
            logger.debug(f"{self.name}: dropped {len(points) - len(kept)} point(s) with non-numeric coordinates.")

        classes = list(dict.fromkeys(p.label for p in kept))
        names = list(labels) if labels is not None else classes

        if len(classes) < 2:
            logger.debug(f"{self.name}: no SVM to train because there is less than two classes.")
            if classes:
                # the single trainable class is the one reported at prediction time
                names = classes + [n for n in names if n != classes[0]]
            self.state = Trained(PointCloudModel(svm_model=None, labels=names))
            progress(1.0)
            return None

        svm_model = await self.optimizer.train(kept, options, progress)
        self.state = Trained(PointCloudModel(svm_model=svm_model, labels=names))
        progress(1.0)
        return svm_model

    def serialize(self) -> str:
        return self.model.model_dump_json(exclude_none=True)

    def load(self, serialized: str) -> None:
        try:
            model = PointCloudModel.model_validate_json(serialized)
        except ValueError as e:
            raise ModelLoadingError(self.name, e) from e
        self.load_model(model)

    def load_model(self, model: PointCloudModel) -> None:
        try:
            predictor = self.optimizer.load(model.svm_model) if model.svm_model else None
        except Exception as e:
            raise ModelLoadingError(self.name, e) from e
        self.state = Loaded(model, predictor)

    def predict(self, features: Sequence[float]) -> List[SVMPrediction]:
        """
        Ranks the labels for a feature vector.

        :raises UntrainedClassifierError: If neither ``train`` nor ``load`` was called.
        """
        if isinstance(self.state, Untrained):
            raise UntrainedClassifierError(self.name, "predict")
        if isinstance(self.state, Trained):
            self.load_model(self.state.model)

        model, predictor = self.state.model, self.state.predictors
        if predictor is None:
            if not model.labels:
                return []
            return [SVMPrediction(model.labels[0], 1.0)]
        return predictor.predict(features)
