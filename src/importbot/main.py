from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import Config, load_config
from .types import ConfigOverrides
from .app.container import build_container
from .app.orchestrator import Orchestrator


logger = logging.getLogger(__name__)


def _make_orchestrator(cfg: Config) -> Orchestrator:
    container = build_container("importbot", cfg)
    return Orchestrator(container=container, cfg=cfg, logger=logging.getLogger("importbot.main"))


def run_pipeline(
    input_path: Path,
    out_dir: Path,
    cfg: Config | None = None,
    overrides: dict[int, str] | None = None,
) -> int:
    orch = _make_orchestrator(cfg or Config())
    return orch.run(input_path, out_dir, overrides)


def parse_override(text: str) -> tuple[int, str]:
    """Parse ``COL=FIELD`` (0-based column index); an empty FIELD ignores the column."""
    col, sep, field_path = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected COL=FIELD, got '{text}'")
    try:
        return int(col.strip()), field_path.strip()
    except ValueError:
        raise argparse.ArgumentTypeError(f"column must be an integer index, got '{col}'")


def main() -> int:
    ap = argparse.ArgumentParser(description="ImportBot CLI: import prospects from a CSV file")
    ap.add_argument("--input", required=True, type=Path, help="Path to the CSV file (UTF-8)")
    ap.add_argument(
        "--out", required=False, type=Path, default=Path("runs"), help="Output base dir"
    )
    ap.add_argument("--config", required=False, type=Path, help="Optional YAML config file")
    ap.add_argument(
        "--rules", required=False, type=Path, help="Optional YAML auto-map rule table"
    )
    ap.add_argument(
        "--map",
        dest="overrides",
        action="append",
        type=parse_override,
        default=[],
        metavar="COL=FIELD",
        help="Manual mapping override, e.g. --map 2=prospect.nom (repeatable)",
    )
    ap.add_argument(
        "--yield-every",
        required=False,
        type=int,
        help="Rows between cooperative yields of the import loop (default from config)",
    )
    ap.add_argument(
        "--max-errors", required=False, type=int, help="Max errors to log (default from config)"
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Map and validate rows only; create nothing",
    )
    args = ap.parse_args()

    overrides: ConfigOverrides = {}
    # Optional overrides only when provided
    if args.max_errors is not None:
        overrides["max_errors"] = int(args.max_errors)
    if args.yield_every is not None:
        overrides["yield_every"] = int(args.yield_every)
    if args.rules is not None:
        overrides["rules_path"] = str(args.rules)
    if args.dry_run:
        overrides["dry_run"] = True
    cfg = load_config(args.config, overrides=overrides)

    try:
        return run_pipeline(args.input, args.out, cfg, dict(args.overrides))
    except Exception as exc:  # pragma: no cover
        logging.basicConfig(level=logging.ERROR)
        logging.exception("Unhandled exception: %s", exc)
        return 3


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
