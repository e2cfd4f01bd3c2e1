import yaml

from autotest_tools.common.config_loader import ConfigLoader, get_ui_config


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"ui": {"browser": "firefox", "headless": True, "viewport": {"width": 800}}}),
        encoding="utf-8",
    )
    monkeypatch.delenv("UI_HEADLESS", raising=False)

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.browser") == "firefox"
    assert loader.get("ui.viewport.width") == 800
    assert loader.get("ui.viewport.height", 720) == 720

    ConfigLoader.reset()
    monkeypatch.setenv("UI_HEADLESS", "false")
    monkeypatch.setenv("UI_VIEWPORT_WIDTH", "1024")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.headless", True) is False
    assert loader.get("ui.viewport.width", 1280) == 1024

    ConfigLoader.reset()


def test_reload_updates_values(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"ui": {"slow_mo": 5}}), encoding="utf-8")

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.slow_mo") == 5

    config_path.write_text(yaml.dump({"ui": {"slow_mo": 15}}), encoding="utf-8")
    loader.reload()
    assert get_ui_config("slow_mo") == 15

    ConfigLoader.reset()


def test_missing_file_falls_back_to_defaults(tmp_path):
    ConfigLoader.reset()
    loader = ConfigLoader(config_path=tmp_path / "absent.yaml")

    assert loader.get("ui.trace_dir", "traces/") == "traces/"
    assert loader.get_section("ui") == {}

    ConfigLoader.reset()


def test_env_override_takes_yaml_type_when_no_default(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"ui": {"default_timeout": 30000, "headless": True, "browser": "chromium"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("UI_DEFAULT_TIMEOUT", "5000")
    monkeypatch.setenv("UI_HEADLESS", "no")
    monkeypatch.setenv("UI_BROWSER", "webkit")

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)

    assert loader.get("ui.default_timeout") == 5000
    assert isinstance(loader.get("ui.default_timeout"), int)
    assert loader.get("ui.headless") is False
    assert loader.get("ui.browser") == "webkit"

    ConfigLoader.reset()


def test_env_override_keeps_string_that_does_not_parse(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"ui": {"slow_mo": 0}}), encoding="utf-8")
    monkeypatch.setenv("UI_SLOW_MO", "fast")

    ConfigLoader.reset()
    assert ConfigLoader(config_path=config_path).get("ui.slow_mo") == "fast"
    ConfigLoader.reset()
