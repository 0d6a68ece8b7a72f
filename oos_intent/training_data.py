"""
Loading of training data from YAML.

Two layouts are accepted. A bare list of intents::

    - intent: greet
      examples:
        - hello there
        - good morning

or a mapping that also declares the language and the entities::

    language: en
    intents:
      - intent: order_status
        contexts: [global]
        examples: [where is my order, has my parcel shipped]
    list_entities:
      - name: color
        synonyms: {red: [crimson], blue: []}
    pattern_entities:
      - name: order_id
        pattern: "[A-Z]{2}-\\d{4}"
"""
import logging
from typing import Any, List, Optional

import yaml
from pydantic import ValidationError

from .config import Config
from .constants import NONE_INTENT
from .errors import TrainingDataError
from .schema import ListEntity, PatternEntity
from .types import Intent, TrainInput
from .utterance import compute_term_weights

logger = logging.getLogger(__name__)

DEFAULT_CONTEXTS = ["global"]


def load_training_data(path: str, config: Config, tools, seed: Optional[int] = None) -> TrainInput:
    """
    Reads a YAML training file into a :class:`TrainInput`.

    :param path: Path to the YAML file.
    :type path: str
    :param config: Provides the default language and seed.
    :type config: Config
    :param tools: Provides the utterance builder.
    :type tools: Tools
    :param seed: Overrides ``config.seed``.
    :type seed: int, optional
    """
    logger.info(f"Loading intents from {path}...")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return parse_training_data(raw, config.language, config.seed if seed is None else seed, tools)


def parse_training_data(raw: Any, language: str, seed: int, tools) -> TrainInput:
    """
    Validates raw training data and builds the utterances of every intent.

    Term weights are computed across the intents before returning.

    :raises TrainingDataError: On malformed data, reserved or duplicate intent names.
    """
    if isinstance(raw, list):
        raw = {"intents": raw}
    if not isinstance(raw, dict):
        raise TrainingDataError(f"Training data must be a list or a mapping, got {type(raw).__name__}.")

    language = raw.get("language", language)
    try:
        list_entities = [ListEntity.model_validate(e) for e in raw.get("list_entities") or []]
        pattern_entities = [PatternEntity.model_validate(e) for e in raw.get("pattern_entities") or []]
    except ValidationError as e:
        raise TrainingDataError(f"Invalid entity definition: {e}") from e

    intents: List[Intent] = []
    seen = set()
    for item in raw.get("intents") or []:
        if not isinstance(item, dict) or not isinstance(item.get("intent"), str):
            raise TrainingDataError(f"Each intent needs an 'intent' name, got {item!r}.")
        name = item["intent"]
        if name == NONE_INTENT:
            raise TrainingDataError(f"Intent name '{NONE_INTENT}' is reserved.")
        if name in seen:
            raise TrainingDataError(f"Intent '{name}' is defined more than once.")
        seen.add(name)

        examples = item.get("examples") or []
        if not all(isinstance(e, str) for e in examples):
            raise TrainingDataError(f"Examples of intent '{name}' must be strings.")
        utterances = tools.utterance_builder.build(examples, language, list_entities, pattern_entities)
        intents.append(Intent(name, utterances, list(item.get("contexts") or DEFAULT_CONTEXTS)))

    intents = compute_term_weights(intents)
    all_utterances = [u for intent in intents for u in intent.utterances]
    logger.info(f"Loaded {len(intents)} intents and {len(all_utterances)} utterances ({language}).")
    return TrainInput(
        language=language,
        intents=intents,
        all_utterances=all_utterances,
        seed=seed,
        list_entities=list_entities,
        pattern_entities=pattern_entities,
    )
