import pytest
import yaml

from conftest import CORPUS
from oos_intent import OOSIntentClassifier, cli


@pytest.mark.integration
def test_train_then_predict(tmp_path, capsys):
    config_path = tmp_path / "config.yml"
    config_path.write_text(yaml.safe_dump({"dataset_name": "smalltalk", "language": "en", "seed": 3}),
                           encoding="utf-8")
    data_path = tmp_path / "smalltalk.yml"
    data_path.write_text(yaml.safe_dump(CORPUS), encoding="utf-8")
    model_path = tmp_path / "models" / "smalltalk.json"

    cli.train(config=str(config_path), training_data=str(data_path), save_model=str(model_path), seed=11)
    assert "Training completed successfully!" in capsys.readouterr().out
    assert model_path.exists()
    assert (tmp_path / "models" / "smalltalk_config.yml").exists()

    classifier = OOSIntentClassifier.from_path(str(model_path))
    assert classifier.config.seed == 11
    assert classifier.config.dataset_name == "smalltalk"

    cli.predict(load_model=str(model_path), input_text="hello there")
    out = capsys.readouterr().out
    assert "'greet'" in out
    assert "'exact-matcher'" in out
    assert "'oos'" in out
