"""
Lifecycle of a classifier: untrained, trained (model only) or loaded (model and
predictors ready). Predictors are built lazily from a trained model.
"""
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Untrained:
    pass


@dataclass(frozen=True)
class Trained:
    model: Any


@dataclass(frozen=True)
class Loaded:
    model: Any
    predictors: Any


ClassifierState = Union[Untrained, Trained, Loaded]
