import pytest
import yaml

from oos_intent import Config, load_config
from oos_intent.config import DEFAULT_POS_LANGUAGES


def test_defaults():
    config = Config()
    assert config.language == "en"
    assert config.seed == 42
    assert config.pos_languages == DEFAULT_POS_LANGUAGES
    assert config.pos_languages is not DEFAULT_POS_LANGUAGES


def test_load_from_yaml(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(yaml.safe_dump({"dataset_name": "smalltalk", "language": "fr", "seed": 7}), encoding="utf-8")

    config = load_config(str(path))
    assert (config.dataset_name, config.language, config.seed) == ("smalltalk", "fr", 7)
    assert config.oos_c == Config().oos_c


def test_load_empty_yaml(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == Config()


def test_save_and_reload(tmp_path):
    config = Config(dataset_name="smalltalk", pos_languages=["en"], in_scope_c=0.5)
    path = tmp_path / "config.yml"
    config.save(str(path))
    assert load_config(str(path)) == config


def test_config_object_passes_through():
    config = Config(seed=1)
    assert load_config(config) is config


def test_missing_config():
    with pytest.raises(ValueError):
        load_config(None)


def test_unsupported_type():
    with pytest.raises(TypeError):
        load_config(42)


def test_unknown_key(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("not_a_setting: 1\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(str(path))
