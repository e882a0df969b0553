"""Tests for configuration, presets and parameter descriptors."""
import numpy as np
import pytest
from pydantic import ValidationError

from flowfield.config import DEFAULT_CONFIG, FlowFieldConfig
from flowfield.params import PARAMETERS, get_parameter, parameter_groups
from flowfield.presets import get_preset, list_presets, randomize_config


def test_defaults():
    config = DEFAULT_CONFIG
    assert config.animate is True
    assert config.wraparound is True
    assert config.cells == 100
    assert config.octaves == 4
    assert config.falloff == 0.65
    assert config.count == 1000
    assert config.alpha == 7.0


@pytest.mark.parametrize("field, value", [
    ("cells", 0),
    ("cells", 201),
    ("count", 0),
    ("count", 5001),
    ("octaves", 11),
    ("falloff", 1.5),
    ("xy_increment", -0.1),
    ("alpha", 0.5),
    ("max_speed", 30.0),
])
def test_out_of_range_values_rejected(field, value):
    with pytest.raises(ValidationError):
        FlowFieldConfig(**{field: value})


def test_unknown_field_rejected():
    with pytest.raises(ValidationError):
        FlowFieldConfig(gravity=1.0)


def test_config_is_frozen():
    config = FlowFieldConfig()
    with pytest.raises(ValidationError):
        config.cells = 5


def test_replace_returns_validated_copy():
    config = FlowFieldConfig()
    changed = config.replace(cells=20)
    assert changed.cells == 20
    assert config.cells == 100
    with pytest.raises(ValidationError):
        config.replace(cells=-1)


def test_presets_produce_valid_configs():
    for preset in list_presets():
        config = preset.apply(DEFAULT_CONFIG)
        assert isinstance(config, FlowFieldConfig)


def test_classic_preset_restores_defaults():
    config = DEFAULT_CONFIG.replace(cells=3, fancy_colors=True, animate=False)
    restored = get_preset("classic").apply(config)
    assert restored.cells == DEFAULT_CONFIG.cells
    assert restored.fancy_colors is False
    assert restored.animate is False


def test_unknown_preset_raises():
    with pytest.raises(ValueError):
        get_preset("nonexistent")


def test_randomize_stays_in_rolled_ranges():
    base = FlowFieldConfig(count=321, seed=5, show_diagnostics=True)
    rng = np.random.RandomState(0)
    for _ in range(200):
        config = randomize_config(base, rng)
        assert 3 <= config.cells < 100
        assert 2 <= config.octaves < 8
        assert 0.1 <= config.falloff <= 0.75
        assert 0.01 <= config.xy_increment <= 0.2
        assert config.z_increment == 0.0 or 0.0001 <= config.z_increment <= 0.001
        assert 1 <= config.point_size < 4
        assert config.min_speed <= config.max_speed <= config.min_speed + 10.0
        assert config.min_life_seconds <= config.max_life_seconds
        assert 5.0 <= config.alpha <= 15.0
        assert 20 <= config.fancy_color_range <= 100
        assert config.count == 321
        assert config.seed == 5
        assert config.show_diagnostics is True


def test_randomize_is_reproducible():
    a = randomize_config(DEFAULT_CONFIG, np.random.RandomState(4))
    b = randomize_config(DEFAULT_CONFIG, np.random.RandomState(4))
    assert a == b


def test_every_descriptor_names_a_config_field():
    for param in PARAMETERS:
        assert param.name in FlowFieldConfig.model_fields
        assert isinstance(getattr(DEFAULT_CONFIG, param.name), param.kind)


def test_descriptor_ranges_come_from_config():
    assert get_parameter("cells").valid_range == (1, 200)
    assert get_parameter("falloff").valid_range == (0.0, 1.0)
    assert get_parameter("animate").valid_range == (None, None)


def test_restart_parameters():
    restarting = {p.name for p in PARAMETERS if p.restarts}
    assert restarting == {"wraparound", "cells", "octaves", "falloff", "count", "fancy_colors"}


def test_parameter_groups_in_panel_order():
    groups = parameter_groups()
    assert list(groups) == ["General", "Flow Field", "Particles"]
    assert [p.name for p in groups["General"]] == ["animate", "show_diagnostics", "draw_flowfield"]


def test_unknown_parameter_raises():
    with pytest.raises(ValueError):
        get_parameter("gravity")
