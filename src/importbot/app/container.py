from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..config import Config
from ..services.import_service import ImportService
from ..services.io_csv import IOService
from ..services.mapping_service import MappingService
from ..services.validate_service import ValidateService


@dataclass(frozen=True)
class Container:
    io: IOService
    mapping: MappingService
    validate: ValidateService
    importer: ImportService


def build_container(base_logger_name: str, cfg: Config) -> Container:
    base = logging.getLogger(base_logger_name)
    io = IOService(base.getChild("io"))
    mapping = MappingService(base.getChild("mapping"))
    if cfg.rules_path:
        mapping.load_rules(Path(cfg.rules_path))
    validate = ValidateService(base.getChild("validate"))
    importer = ImportService(
        base.getChild("import"), yield_every=cfg.yield_every, max_errors=cfg.max_errors
    )
    return Container(io=io, mapping=mapping, validate=validate, importer=importer)
