"""
pelco-send
==========
Move a PTZ camera to a stored preset with one Pelco D packet.

  1.  Reads defaults from YAML (if present), then CLI overrides
  2.  Encodes a "call preset" packet for the camera
  3.  Opens the serial port, writes the packet, flushes and closes
  4.  Exits 1 on any argument, open, configuration or write error

Example
--------
    pelco-send 1 --camera 2 --port 4
    pelco-send 1 /camera 2 /com4
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .config import (
    DEFAULT_BAUDRATE,
    DEFAULT_CAMERA,
    DEFAULT_PORT,
    SIMULATOR_DEVICE,
    SendConfig,
    get_camera_config,
    get_serial_config,
    load_config,
)
from .errors import ArgumentError, PelcoSendError
from .protocol import encode
from .sender import send_packet

log = logging.getLogger("pelco_send")

LOG_FORMAT = "%(asctime)s %(levelname)-8s| %(message)s"


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format=LOG_FORMAT,
                        stream=sys.stderr)


# ─────────────────────────── argument parsing ─────────────────────────────
class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message):
        raise ArgumentError(message)


def _int_in_range(name: str, low: int, high: Optional[int] = None):
    def convert(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid {name}: {text!r}")
        if value < low or (high is not None and value > high):
            bounds = f"{low}-{high}" if high is not None else f">= {low}"
            raise argparse.ArgumentTypeError(f"{name} must be {bounds}, got {value}")
        return value
    return convert


preset_number = _int_in_range("preset", 1, 255)
camera_address = _int_in_range("camera ID", 1, 255)
baud_rate = _int_in_range("baud rate", 1)
port_number = _int_in_range("port number", 0)


def normalize_legacy_args(argv: Sequence[str]) -> List[str]:
    """
    Translate '/camera ID', '/baudrate BAUD' and '/comN' into long options.

    Raises:
        ArgumentError: If a '/com' token carries no port number
    """
    result: List[str] = []
    for token in argv:
        if token.startswith("/baud"):
            result.append("--baudrate")
        elif token.startswith("/com"):
            suffix = token[4:]
            if not suffix:
                raise ArgumentError("Com Port number error")
            result.extend(["--port", suffix])
        elif token == "/camera":
            result.append("--camera")
        else:
            result.append(token)
    return result


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="pelco-send",
        description="Send a Pelco D 'call preset' packet to a PTZ camera",
        epilog=f"Example: pelco-send 1 --camera 2 --port {DEFAULT_PORT}  (or: 1 /camera 2 /com{DEFAULT_PORT})",
    )
    p.add_argument("preset", type=preset_number, help="Preset number (1-255)")
    p.add_argument("--camera", type=camera_address,
                   help=f"Pelco D camera address (1-255, default {DEFAULT_CAMERA})")
    p.add_argument("--baudrate", type=baud_rate,
                   help=f"Baud rate (default {DEFAULT_BAUDRATE})")
    p.add_argument("--port", type=port_number,
                   help=f"Serial port number, e.g. 3 for COM3 (default {DEFAULT_PORT})")
    p.add_argument("--device",
                   help="Device prefix, e.g. /dev/ttyUSB, or a pyserial URL such as loop://")
    p.add_argument("--config", help="YAML file (default: config/pelco_send.yaml)")
    p.add_argument("--simulate", action="store_true",
                   help="Send to a simulated camera instead of a serial port")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def _from_file(section: Dict[str, Any], key: str, convert, default):
    if key not in section or section[key] is None:
        return default
    try:
        return convert(str(section[key]))
    except argparse.ArgumentTypeError as exc:
        raise ArgumentError(f"config file: {exc}") from exc


def resolve_config(args: argparse.Namespace, file_cfg: Dict[str, Any]) -> SendConfig:
    """Merge command line, config file and built-in defaults (in that order)."""
    serial_cfg = get_serial_config(file_cfg)
    camera_cfg = get_camera_config(file_cfg)

    baudrate = args.baudrate or _from_file(serial_cfg, "baudrate", baud_rate, DEFAULT_BAUDRATE)
    port = args.port if args.port is not None else _from_file(serial_cfg, "port", port_number, DEFAULT_PORT)
    camera = args.camera or _from_file(camera_cfg, "address", camera_address, DEFAULT_CAMERA)
    prefix = args.device or serial_cfg.get("device_prefix")
    if args.simulate:
        prefix = SIMULATOR_DEVICE

    return SendConfig(preset=args.preset, camera_address=camera, baudrate=baudrate,
                      port_number=port, device_prefix=prefix)


# ─────────────────────────── main routine ────────────────────────────────
def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()

    try:
        args = parser.parse_args(normalize_legacy_args(argv))
    except ArgumentError as exc:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return 1

    setup_logging(args.verbose)

    try:
        file_cfg = load_config(args.config)
        cfg = resolve_config(args, file_cfg)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        log.error("Failed to load configuration: %s", exc)
        return 1
    except ArgumentError as exc:
        log.error("%s", exc)
        return 1

    packet = encode(cfg.camera_address, cfg.preset)
    serial_cfg = cfg.serial_config()

    log.info("Set preset (%d) on camera (%d) via %s (%s), baud rate (%d)",
             cfg.preset, cfg.camera_address, cfg.port_label, serial_cfg.device, cfg.baudrate)

    try:
        send_packet(packet, serial_cfg)
    except PelcoSendError as exc:
        log.error("%s", exc)
        return 1

    return 0


def run() -> None:
    sys.exit(main())
