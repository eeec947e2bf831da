from __future__ import annotations

import os
from pathlib import Path

DEFAULT_PORT = 8080
PORT_ENV_VARS = ("IMPORTBOT_UI_PORT", "UI_PORT", "PORT")


def default_output_base() -> Path:
    # Workspace-local runs directory, beside the CLI's default output
    return Path(os.getenv("IMPORTBOT_OUT", str(Path.cwd() / "runs")))
