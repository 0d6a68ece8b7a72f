"""
Default support vector machine optimizer, backed by scikit-learn.

Trained models are exchanged as opaque strings (base64 of a joblib dump) so they
can be embedded in the JSON form of the classifiers.
"""
import asyncio
import base64
import io
import logging
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Sequence

import joblib
import numpy as np
from sklearn.svm import SVC

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


@dataclass(frozen=True)
class Point:
    """A labeled feature vector."""
    label: str
    coordinates: Sequence[float]


@dataclass(frozen=True)
class SVMOptions:
    c: float = 1.0
    kernel: str = "linear"
    seed: int = 0


class SVMPrediction(NamedTuple):
    label: str
    confidence: float


class SklearnSVMPredictor:
    """Predicts from a blob produced by :meth:`SklearnSVMOptimizer.train`."""

    def __init__(self, model: str):
        raw = base64.b64decode(model.encode("ascii"), validate=True)
        self.clf: SVC = joblib.load(io.BytesIO(raw))
        self.labels = [str(c) for c in self.clf.classes_]

    def predict(self, features: Sequence[float]) -> List[SVMPrediction]:
        """
        Scores every label for a single feature vector.

        Confidences are a softmax over the one-vs-rest decision scores: they are
        non-negative, sum to 1 and are sorted from highest to lowest.
        """
        x = np.asarray(features, dtype=float).reshape(1, -1)
        scores = np.atleast_1d(self.clf.decision_function(x)[0])
        if len(self.labels) == 2:
            # binary decision_function is a single signed distance towards classes_[1]
            scores = np.array([-scores[0], scores[0]])
        exp = np.exp(scores - scores.max())
        probs = exp / exp.sum()
        ranked = sorted(zip(self.labels, probs), key=lambda p: -p[1])
        return [SVMPrediction(label, float(conf)) for label, conf in ranked]


class SklearnSVMOptimizer:
    """Default :class:`~oos_intent.tools.Optimizer`."""

    async def train(self, points: Sequence[Point], options: SVMOptions,
                    progress: Optional[ProgressCallback] = None) -> str:
        X = np.vstack([np.asarray(p.coordinates, dtype=float) for p in points])
        y = np.array([p.label for p in points])
        if progress:
            progress(0.0)
        clf = await asyncio.to_thread(self._fit, X, y, options)
        buffer = io.BytesIO()
        joblib.dump(clf, buffer)
        if progress:
            progress(1.0)
        return base64.b64encode(buffer.getvalue()).decode("ascii")

    def load(self, model: str) -> SklearnSVMPredictor:
        return SklearnSVMPredictor(model)

    @staticmethod
    def _fit(X: np.ndarray, y: np.ndarray, options: SVMOptions) -> SVC:
        logger.debug(f"Fitting {options.kernel} SVC (C={options.c}) on {X.shape[0]} points of dim {X.shape[1]}.")
        clf = SVC(kernel=options.kernel, C=options.c, decision_function_shape="ovr",
                  random_state=options.seed)
        clf.fit(X, y)
        return clf
