import pytest

from bezier3d.config import SurfaceSettings, parse_color
from bezier3d.errors import InvalidArgument


def test_defaults():
    settings = SurfaceSettings()
    assert settings.accuracy == 5
    assert settings.kd == 0.8
    assert settings.ks == 0.5
    assert settings.specular_exponent == 32.0
    assert settings.light_color == (1.0, 1.0, 1.0)
    assert not settings.show_grid


def test_parse_color():
    assert parse_color("#ff0000") == (1.0, 0.0, 0.0)
    assert parse_color("#0f0") == (0.0, 1.0, 0.0)
    assert parse_color((0.1, 0.2, 0.3)) == (0.1, 0.2, 0.3)


@pytest.mark.parametrize("value", ["#12", "#gggggg", (0.1, 0.2), (2.0, 0.0, 0.0), 5])
def test_parse_color_rejects(value):
    with pytest.raises(InvalidArgument):
        parse_color(value)


@pytest.mark.parametrize(
    "changes",
    [
        {"accuracy": 0},
        {"accuracy": -1},
        {"accuracy": 2.5},
        {"kd": 1.5},
        {"ks": -0.1},
        {"specular_exponent": -1.0},
        {"specular_exponent": float("nan")},
        {"specular_exponent": float("inf")},
        {"kd": float("nan")},
        {"kd": "high"},
        {"light_color": "#xyz"},
    ],
)
def test_invalid_settings(changes):
    with pytest.raises(InvalidArgument):
        SurfaceSettings().updated(**changes)


def test_merged_strict_and_lenient():
    settings = SurfaceSettings()
    with pytest.raises(InvalidArgument):
        settings.merged({"accuracy": 3, "wobble": 1})
    lenient = settings.merged({"accuracy": 3, "wobble": 1}, strict=False)
    assert lenient.accuracy == 3


def test_from_mapping_and_to_dict():
    settings = SurfaceSettings.from_mapping({"object_color": "#ff8000", "show_grid": True})
    data = settings.to_dict()
    assert data["object_color"] == [1.0, 128 / 255.0, 0.0]
    assert data["show_grid"] is True
    assert SurfaceSettings.from_mapping(data) == settings
