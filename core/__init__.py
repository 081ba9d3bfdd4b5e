"""Core shared utilities: logging context, configuration and run artifacts."""

from core.structured_logging import (
    configure_structured_logging,
    database_scope,
    get_run_id,
    phase_scope,
    set_run_id,
)
from core.tree_config import (
    ConfigValidationError,
    TreeConfig,
    load_config_payload,
    load_tree_config,
)
from core.run_artifacts import write_records_jsonl, write_run_report

__all__ = [
    "configure_structured_logging",
    "database_scope",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "ConfigValidationError",
    "TreeConfig",
    "load_config_payload",
    "load_tree_config",
    "write_records_jsonl",
    "write_run_report",
]
