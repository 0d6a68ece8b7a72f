"""
Command line interface.
::

    oos-intent train \
        --config="models/smalltalk_config.yml" \
        --training_data="data/smalltalk.yml" \
        --save_model="models/smalltalk.json"

    oos-intent predict \
        --load_model="models/smalltalk.json" \
        --input_text="where is my order?"
"""
import asyncio
import logging
from dataclasses import asdict
from pprint import pprint
from typing import Optional

import dotenv
import fire

from .config import load_config
from .oos_classifier import OOSIntentClassifier
from .tools import make_default_tools
from .training_data import load_training_data

logger = logging.getLogger(__name__)


def train(config: str, training_data: str, save_model: str, seed: Optional[int] = None):
    """
    Train the model with the given configuration and examples.

    :param config: Path to the YAML configuration file.
    :type config: str
    :param training_data: Path to the YAML file with training examples.
    :type training_data: str
    :param save_model: Path to save the trained model (e.g., "model.json").
    :type save_model: str
    :param seed: Overrides the seed of the configuration.
    :type seed: int, optional
    """
    cfg = load_config(config)
    if seed is not None:
        cfg.seed = seed
    tools = make_default_tools(cfg)
    train_input = load_training_data(training_data, cfg, tools)

    def report(progress: float) -> None:
        logger.info(f"Training progress: {progress:.0%}")

    classifier = OOSIntentClassifier(tools, cfg)
    asyncio.run(classifier.train(train_input, progress=report))
    classifier.save(save_model)
    print("Training completed successfully!")


def predict(load_model: str, input_text: str):
    """
    Make predictions using a trained model.

    :param load_model: Path to the saved model file.
    :type load_model: str
    :param input_text: The input text string to classify.
    :type input_text: str
    """
    classifier = OOSIntentClassifier.from_path(load_model)
    predictions = classifier.predict_text(input_text)
    pprint(asdict(predictions))


def main():
    dotenv.load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    fire.Fire({
        "train": train,
        "predict": predict,
    }, serialize=False)


if __name__ == "__main__":
    main()
