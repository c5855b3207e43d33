import json

import pytest

from mandelbrot_view.settings import SETTINGS_ENV_VAR, Settings, load_settings


def test_defaults():
    s = Settings()
    assert (s.width, s.height) == (800, 600)
    assert s.max_iterations == 512
    assert s.zoom_sensitivity == 0.1
    assert s.palette == "Classic"


def test_constructor_rejects_bad_values():
    with pytest.raises(ValueError):
        Settings(width=0)
    with pytest.raises(ValueError):
        Settings(palette="Nope")
    with pytest.raises(ValueError):
        Settings(colour="red")
    with pytest.raises(ValueError):
        Settings(min_scale=10.0, max_scale=1.0)


def test_missing_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
    assert load_settings().as_dict() == Settings().as_dict()


def test_explicit_missing_path_warns(tmp_path, caplog):
    s = load_settings(str(tmp_path / "absent.json"))
    assert s.as_dict() == Settings().as_dict()
    assert "Could not load" in caplog.text


def test_loads_values_from_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"width": 1024, "max_iterations": 256, "palette": "Grayscale"}))
    s = load_settings(str(path))
    assert s.width == 1024
    assert s.max_iterations == 256
    assert s.palette == "Grayscale"
    assert s.height == 600


def test_env_var_points_at_file(tmp_path, monkeypatch):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"height": 480}))
    monkeypatch.setenv(SETTINGS_ENV_VAR, str(path))
    assert load_settings().height == 480


def test_malformed_file_falls_back(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(str(path)).as_dict() == Settings().as_dict()
    assert "Could not load" in caplog.text


def test_non_object_file_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2, 3]")
    assert load_settings(str(path)).as_dict() == Settings().as_dict()


def test_invalid_values_keep_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "width": -5,
        "zoom_sensitivity": "fast",
        "palette": "Neon",
        "bogus": 1,
        "height": 300,
    }))
    s = load_settings(str(path))
    assert s.width == 800
    assert s.zoom_sensitivity == 0.1
    assert s.palette == "Classic"
    assert s.height == 300
    assert "bogus" in caplog.text


def test_inverted_scale_bounds_fall_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"min_scale": 5.0, "max_scale": 1.0}))
    s = load_settings(str(path))
    assert s.min_scale < s.max_scale


def test_overrides_skip_none():
    s = Settings().with_overrides(width=640, height=None)
    assert s.width == 640
    assert s.height == 600
