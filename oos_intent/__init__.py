"""
Out-of-scope aware intent classification.

::

    from oos_intent import OOSIntentClassifier, load_config, load_training_data, make_default_tools

    config = load_config("models/smalltalk_config.yml")
    tools = make_default_tools(config)
    classifier = OOSIntentClassifier(tools, config)
    await classifier.train(load_training_data("data/smalltalk.yml", config, tools))
    classifier.predict_text("hello there")
"""
from .config import Config, load_config
from .errors import ModelLoadingError, OOSIntentError, TrainingDataError, UntrainedClassifierError
from .exact_matcher import ExactIntentClassifier, build_exact_match_index, find_exact_intent, normalize_text
from .none_intent import make_none_intent
from .oos_classifier import OOSIntentClassifier
from .point_cloud import PointCloudClassifier
from .svm_classifier import SvmIntentClassifier
from .tools import Tools, make_default_tools
from .training_data import load_training_data, parse_training_data
from .types import (Intent, IntentPrediction, IntentPredictions, NoneableIntentPredictions, TrainInput, Token,
                    Utterance)

__all__ = [
    "Config",
    "ExactIntentClassifier",
    "Intent",
    "IntentPrediction",
    "IntentPredictions",
    "ModelLoadingError",
    "NoneableIntentPredictions",
    "OOSIntentClassifier",
    "OOSIntentError",
    "PointCloudClassifier",
    "SvmIntentClassifier",
    "Token",
    "TrainInput",
    "TrainingDataError",
    "Tools",
    "UntrainedClassifierError",
    "Utterance",
    "build_exact_match_index",
    "find_exact_intent",
    "load_config",
    "load_training_data",
    "make_default_tools",
    "make_none_intent",
    "normalize_text",
    "parse_training_data",
]
