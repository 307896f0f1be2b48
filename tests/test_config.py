"""Tests for configuration values and YAML loading."""

import dataclasses

import pytest
import yaml

from pelco_send.config import (
    SendConfig,
    SerialConfig,
    device_name,
    get_camera_config,
    get_serial_config,
    load_config,
)
from pelco_send.errors import ArgumentError


def test_device_name_windows():
    assert device_name(3, platform="win32") == "\\\\.\\COM3"


def test_device_name_posix():
    assert device_name(0, platform="linux") == "/dev/ttyS0"


def test_device_name_custom_prefix():
    assert device_name(1, prefix="/dev/ttyUSB") == "/dev/ttyUSB1"


def test_device_name_url_and_simulator_ignore_port():
    assert device_name(7, prefix="loop://") == "loop://"
    assert device_name(7, prefix="SIMULATOR") == "SIMULATOR"


def test_serial_config_timeouts():
    cfg = SerialConfig(device="COM3")
    assert cfg.inter_byte_timeout == pytest.approx(0.05)
    assert cfg.write_timeout(7) == pytest.approx(0.12)
    assert cfg.read_timeout(7) == pytest.approx(0.12)
    assert (cfg.bytesize, cfg.stopbits, cfg.parity) == (8, 1, "N")


def test_serial_config_accepts_any_positive_baudrate():
    assert SerialConfig(device="COM3", baudrate=12345).baudrate == 12345


def test_serial_config_rejects_non_positive_baudrate():
    with pytest.raises(ArgumentError):
        SerialConfig(device="COM3", baudrate=0)


def test_configs_are_frozen():
    cfg = SendConfig(preset=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.preset = 2


def test_send_config_defaults():
    cfg = SendConfig(preset=4, device_prefix="/dev/ttyS")
    assert (cfg.camera_address, cfg.baudrate, cfg.port_number) == (1, 2400, 3)
    assert cfg.device == "/dev/ttyS3"
    assert cfg.port_label == "COM3"
    assert cfg.serial_config() == SerialConfig(device="/dev/ttyS3", baudrate=2400)


def test_load_config_file(tmp_path):
    path = tmp_path / "pelco.yaml"
    path.write_text("serial:\n  baudrate: 9600\n  port: 5\ncamera:\n  address: 2\n")

    cfg = load_config(str(path))

    assert get_serial_config(cfg) == {"baudrate": 9600, "port": 5}
    assert get_camera_config(cfg) == {"address": 2}


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == {}


def test_load_config_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_load_config_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("serial: [unclosed\n")
    with pytest.raises(yaml.YAMLError):
        load_config(str(path))


def test_load_config_standard_location(tmp_path, monkeypatch):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "pelco_send.yaml").write_text("camera:\n  address: 9\n")
    monkeypatch.chdir(tmp_path)
    assert get_camera_config(load_config()) == {"address": 9}


def test_load_config_no_file_anywhere(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config() == {}


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ArgumentError, match="mapping"):
        load_config(str(path))


def test_section_must_be_a_mapping():
    with pytest.raises(ArgumentError, match="serial"):
        get_serial_config({"serial": 5})
    with pytest.raises(ArgumentError, match="camera"):
        get_camera_config({"camera": [1]})
    assert get_serial_config({"serial": None}) == {}
