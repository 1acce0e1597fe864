# tests/test_config.py
import pytest

from xyhd.config import XYHDConfig, load_config


def test_defaults():
    cfg = XYHDConfig()
    assert cfg.WORLD_SIZE == (5, 5)
    assert cfg.MATS == ["Empty", "Wall"]
    assert cfg.ACTS == ["Left", "Right", "Forward"]
    assert cfg.ANG_INC == 90
    assert cfg.pos_min == pytest.approx(1 / 3)


def test_explicit_pos_min_wins():
    assert XYHDConfig(POS_MIN=0.0).pos_min == 0.0
    assert XYHDConfig(WORLD_SIZE=(12, 12)).pos_min == pytest.approx(0.1)


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(str(tmp_path / "nope.yaml"))
    assert cfg == XYHDConfig()


def test_yaml_overrides_and_unknown_keys(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "WORLD_SIZE: [9, 7]\n"
        "ANG_INC: 45\n"
        "TRIAL_MAX: 50\n"
        "SEED: 3\n"
        "MATS: [Empty, Wall, Food]\n"
        "NOT_A_FIELD: 12\n"
    )
    cfg = load_config(str(path))
    assert cfg.WORLD_SIZE == (9, 7)
    assert isinstance(cfg.WORLD_SIZE, tuple)
    assert cfg.ANG_INC == 45
    assert cfg.TRIAL_MAX == 50
    assert cfg.SEED == 3
    assert cfg.MATS == ["Empty", "Wall", "Food"]
    assert not hasattr(cfg, "NOT_A_FIELD")


def test_empty_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(str(path)) == XYHDConfig()
