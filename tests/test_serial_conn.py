"""Tests for the pyserial-backed connection, using pyserial's loop:// device."""

import logging

import pytest
import serial

from pelco_send.config import SerialConfig
from pelco_send.connection import SerialConnection
from pelco_send.errors import ConfigFailed, PortUnavailable, WriteCallFailed
from pelco_send.protocol import encode
from pelco_send.sender import send_packet


@pytest.fixture
def loop_config():
    return SerialConfig(device="loop://", baudrate=9600)


def test_open_missing_device():
    conn = SerialConnection(SerialConfig(device="/dev/pelco-send-no-such-port"))
    with pytest.raises(PortUnavailable):
        conn.open()
    assert not conn.is_open()


def test_configure_applies_settings(loop_config):
    with SerialConnection(loop_config) as conn:
        conn.configure()
        port = conn._serial
        assert port.baudrate == 9600
        assert port.bytesize == serial.EIGHTBITS
        assert port.stopbits == serial.STOPBITS_ONE
        assert port.parity == serial.PARITY_NONE
        assert port.inter_byte_timeout == pytest.approx(0.05)
        assert port.timeout == pytest.approx(0.12)
        assert port.write_timeout == pytest.approx(0.12)
    assert not conn.is_open()


def test_configure_keeps_unrelated_settings(loop_config):
    with SerialConnection(loop_config) as conn:
        conn._serial.rtscts = True
        conn.configure()
        assert conn._serial.rtscts is True


def test_configure_rejected_baudrate():
    with SerialConnection(SerialConfig(device="loop://", baudrate=2 ** 32)) as conn:
        with pytest.raises(ConfigFailed):
            conn.configure()


def test_configure_state_read_failure(loop_config, monkeypatch):
    with SerialConnection(loop_config) as conn:
        def broken():
            raise serial.SerialException("GetCommState failed")
        monkeypatch.setattr(conn._serial, "get_settings", broken)
        with pytest.raises(ConfigFailed, match="getting device state"):
            conn.configure()


def test_send_writes_packet(loop_config):
    packet = bytes(encode(2, 16))
    with SerialConnection(loop_config) as conn:
        conn.configure()
        assert conn.send(packet) == 7
        assert conn._serial.read(7) == packet
        conn.flush()


def test_write_call_failure(loop_config, monkeypatch):
    with SerialConnection(loop_config) as conn:
        def broken(data):
            raise serial.SerialException("WriteFile failed")
        monkeypatch.setattr(conn._serial, "write", broken)
        with pytest.raises(WriteCallFailed):
            conn.send(b"\xff")


def test_write_timeout_is_a_short_write(loop_config, monkeypatch, caplog):
    with SerialConnection(loop_config) as conn:
        def slow(data):
            raise serial.SerialTimeoutException("Write timeout")
        monkeypatch.setattr(conn._serial, "write", slow)
        with caplog.at_level(logging.WARNING):
            assert conn.send(bytes(encode(1, 1))) == 0
    assert "timed out, partial count unknown" in caplog.text


def test_send_when_closed(loop_config):
    with pytest.raises(WriteCallFailed):
        SerialConnection(loop_config).send(b"\xff")


def test_close_is_idempotent(loop_config):
    conn = SerialConnection(loop_config)
    conn.open()
    conn.close()
    conn.close()
    assert not conn.is_open()


def test_send_packet_over_loop(loop_config):
    result = send_packet(encode(1, 1), loop_config)
    assert result.complete
    assert result.device == "loop://"
