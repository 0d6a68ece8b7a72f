"""
Configuration for training and serving the out-of-scope aware classifier.

A config can be written as YAML::

    dataset_name: smalltalk
    language: en
    seed: 42
    stop_words_file: data/stop_words_en.txt

and loaded with :func:`load_config`.
"""
import logging
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_POS_LANGUAGES = ["ar", "de", "en", "es", "fr", "he", "it", "ja", "nl", "pl", "pt", "ru"]


@dataclass
class Config:
    """
    A dataclass to hold all configuration parameters for the OOSIntentClassifier.

    This object stores settings related to the dataset, the lexical resources
    and the two support vector machines.
    """
    dataset_name: str = "undefined"
    """Name of the dataset, used for logging and model naming."""
    language: str = "en"
    """Language code of the training data."""
    seed: int = 42
    """Seed of every pseudorandom draw made during training."""
    stop_words_file: Optional[str] = None
    """Path to a text file containing stopwords, one per line. Overrides the built-in list."""
    pos_languages: List[str] = field(default_factory=lambda: list(DEFAULT_POS_LANGUAGES))
    """Languages for which part-of-speech support is available. Out-of-scope training is skipped for others."""
    in_scope_c: float = 1.0
    """Regularization constant of the in-scope classifier."""
    oos_c: float = 10.0
    """Regularization constant of the out-of-scope classifier. Fixed, there is no grid search."""
    junk_words_per_word: int = 2
    """Number of junk words generated for each distinct vocabulary word."""

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(yaml.safe_dump(asdict(self), sort_keys=False))
        logger.info(f"Config saved to {path}.")


def load_config(config: Optional[Union[str, Config]]) -> Config:
    """
    Loads the configuration from a file path or a Config object.

    :param config: A path to a YAML config file or a Config object.
    :type config: str, Config, optional
    :return: The loaded configuration.
    :rtype: Config
    :raises ValueError: If config is not provided.
    :raises TypeError: If config is of an invalid type or the YAML file has unknown keys.
    """
    if isinstance(config, str):
        with open(config, "r", encoding="utf-8") as f:
            loaded = Config(**(yaml.safe_load(f) or {}))
        logger.info(f"Loaded config from {config}.")
        return loaded
    if isinstance(config, Config):
        return config
    if config is None:
        raise ValueError("A 'config' must be provided, either as a file path or a Config object.")
    raise TypeError(f"Unsupported config type: {type(config)}")
