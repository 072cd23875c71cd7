"""
Environment configuration.

ARREAR_RATES_FILE  JSON file with the default DA/HRA/NPA/TA rate tables
LOG_LEVEL          logging level name (default INFO)
CORS_ORIGINS       comma separated allowed origins (default *)
PORT               port for uvicorn when run as a script (default 8000)
"""
import json
import logging
import os
from typing import List, Optional

from pydantic import ValidationError

from schemas import RateTables

logger = logging.getLogger(__name__)


class RateTablesConfigError(Exception):
    pass


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def port() -> int:
    return int(os.getenv("PORT", 8000))


def load_rate_tables(path: Optional[str] = None) -> RateTables:
    """Rate tables from ``path`` (or ARREAR_RATES_FILE); empty tables when neither is set."""
    path = path or os.getenv("ARREAR_RATES_FILE")
    if not path:
        return RateTables()

    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise RateTablesConfigError(f"Could not read rate tables from {path}: {e}") from e

    try:
        tables = RateTables.model_validate(data)
    except ValidationError as e:
        raise RateTablesConfigError(f"Invalid rate tables in {path}: {e}") from e

    logger.info(
        "Loaded rate tables from %s (DA=%d, HRA=%d, NPA=%d, TA=%d)",
        path, len(tables.da), len(tables.hra), len(tables.npa), len(tables.ta),
    )
    return tables
