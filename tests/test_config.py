import pytest
from jsonschema.exceptions import ValidationError

from habprov.config import (
    load_config,
    load_config_file,
    getinit_data,
    HandlerConfig,
    ProvisionerSettings,
)


def test_defaults():
    config = load_config({})
    assert config["hab_version"] == "latest"
    assert config["hab_channel"] == "stable"
    assert config["channel"] == "stable"
    assert config["package_origin"] == "core"
    assert config["hab_sup_peer"] == []
    assert config["user_toml_name"] == "user.toml"
    assert config["hab_sup_ring"] is None


def test_defaults_do_not_override():
    config = load_config({"hab_channel": "unstable", "kitchen_root": "/kroot"})
    assert config["hab_channel"] == "unstable"
    assert config["kitchen_root"] == "/kroot"


def test_defaults_are_not_shared():
    first = load_config({})
    first["hab_sup_peer"].append("10.0.0.1")
    assert load_config({})["hab_sup_peer"] == []


def test_input_is_not_modified():
    original = {"hab_version": "1.5.29"}
    load_config(original)
    assert original == {"hab_version": "1.5.29"}


def test_unknown_keys_pass_through():
    assert load_config({"name": "habitat"})["name"] == "habitat"


def test_invalid():
    with pytest.raises(ValidationError):
        load_config({"service_topology": "mesh"})
    with pytest.raises(ValidationError):
        load_config({"hab_sup_peer": "10.0.0.1"})


def test_invalid_accepted_without_validation():
    config = load_config({"service_topology": "mesh"}, validate=False)
    assert config["service_topology"] == "mesh"
    assert config["channel"] == "stable"


def test_load_config_file():
    config = load_config_file(
        "tests/testconfigs/basic.yml", ["hab_sup_ring=prod", "hab_sup_peer=[a, b]"]
    )
    assert config["hab_version"] == "1.5.29"
    assert config["hab_sup_listen_ctl"] == "0.0.0.0:9632"
    assert config["hab_sup_ring"] == "prod"
    assert config["hab_sup_peer"] == ["a", "b"]


def test_load_invalid_config_file():
    with pytest.raises(ValidationError):
        load_config_file("tests/testconfigs/invalid.yml")


def test_getinit_data_override_with_equals():
    data = getinit_data([], ["depot_url=https://bldr.example.com/?a=b"])
    assert data == {"depot_url": "https://bldr.example.com/?a=b"}


def test_handler_config():
    config = HandlerConfig(install={"hab-cli": "windows"})
    assert config.get_impl("install", "hab-cli") == "windows"
    assert config.get_impl("install", "hab-service") == "default"
    assert config.get_impl("run", "package", "linux") == "linux"


def test_settings_env(monkeypatch):
    settings = ProvisionerSettings({"logging_level": "DEBUG", "log_directory": "/logs"})
    assert settings.stream_loglevel() == "DEBUG"
    assert settings.log_directory() == "/logs"
    assert not settings.disable_logging()

    monkeypatch.setenv("HABPROV_LOGGING_STREAM_LEVEL", "WARNING")
    monkeypatch.setenv("HABPROV_LOGGING_DISABLE", "true")
    monkeypatch.setenv("HABPROV_LOGDIR", "/var/log/habprov")
    assert settings.stream_loglevel() == "WARNING"
    assert settings.disable_logging()
    assert settings.log_directory() == "/var/log/habprov"
