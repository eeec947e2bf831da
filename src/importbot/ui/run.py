from __future__ import annotations

import logging
import os
import socket
from typing import Optional

from nicegui import app as ngapp
from nicegui import ui

from ..config import load_config
from ..utils.logging_setup import setup_logging
from .constants import DEFAULT_PORT, PORT_ENV_VARS, default_output_base
from .controller import UiController
from .views import build_main_view


def _cleanup_logging() -> None:
    root = logging.getLogger()
    for h in list(root.handlers):
        h.flush()
        h.close()
        root.removeHandler(h)


def _get_preferred_port() -> int:
    for var in PORT_ENV_VARS:
        val = os.getenv(var)
        if val:
            try:
                return int(val)
            except ValueError:
                continue
    return DEFAULT_PORT


def _port_free(p: int) -> bool:
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind(("0.0.0.0", p))
            return True
    except OSError:
        return False


def _run_server(port: int) -> None:
    ngapp.on_shutdown(_cleanup_logging)
    ui.run(title="Import Bot", reload=False, port=port)


def main() -> None:
    setup_logging(default_output_base() / "ui_logs")

    controller = UiController(cfg=load_config(None))
    build_main_view(controller)

    # Choose port with fallbacks if busy
    start_port = _get_preferred_port()
    attempts = 10
    last_error: Optional[BaseException] = None

    for i in range(attempts):
        port = start_port + i
        if not _port_free(port):
            print(f"Port {port} is busy; trying next...")
            continue
        print(f"Starting UI at http://127.0.0.1:{port}")
        try:
            _run_server(port)
            return  # server exited cleanly
        except KeyboardInterrupt:
            print("Shutting down UI gracefully...")
            _cleanup_logging()
            return
        except OSError as e:  # pragma: no cover
            last_error = e
            continue

    if last_error is not None:
        raise SystemExit(
            f"Failed to start UI after {attempts} attempts starting at {start_port}: {last_error}"
        )


if __name__ in {"__main__", "__mp_main__"}:
    main()
