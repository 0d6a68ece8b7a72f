from typing import Dict
from datetime import datetime, timezone
from pathlib import Path
from oos_intent import OOSIntentClassifier
from app.schema import IntentScore, SinglePrediction, PredictionResponse
import logging

logger = logging.getLogger(__name__)


def load_all_classifiers(model_paths_str: str) -> Dict[str, OOSIntentClassifier]:
    """
    Loads every model listed in the MODEL_PATHS environment variable.
    The model name is the file name without its extension.
    """
    models = {}
    model_paths = [p.strip() for p in model_paths_str.split(',') if p.strip()]
    logger.info(f"Loading {len(model_paths)} model(s)...")
    for path in model_paths:
        model_name = Path(path).stem
        try:
            logger.info(f"Loading model '{model_name}' from {path}")
            models[model_name] = OOSIntentClassifier.from_path(path)
        except Exception as e:
            logger.error(f"Failed to load model from '{path}': {e}")
            # Stop the app startup if a model cannot be loaded.
            raise Exception(f"Failed to load model from '{path}': {e}")
    return models


def predict_intent(text: str, models: Dict[str, OOSIntentClassifier]) -> Dict:
    """
    1. Runs every model on the text.
    2. Formats the result.
    """
    predictions = {}
    for model_name, model in models.items():
        result = model.predict_text(text)
        predictions[model_name] = SinglePrediction(
            top_intent=result.top.name if result.top else None,
            intents=[IntentScore(name=p.name, confidence=p.confidence, extractor=p.extractor) for p in result.intents],
            oos=result.oos,
        )
    response = PredictionResponse(text=text,
                                  predictions=predictions,
                                  timestamp=int(datetime.now(timezone.utc).timestamp()))
    return response.model_dump()
