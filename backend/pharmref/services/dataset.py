"""
Bundled dataset loading.

The drug and rule catalogs ship as JSON files in the data directory:
- drugs.json:  {"version": ..., "last_updated": ..., "drugs": [...]}
- alerts.json: {"version": ..., "alerts": [...]}
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from pharmref.config import get_settings
from pharmref.exceptions import DatasetLoadError
from pharmref.schemas import DataBundle

logger = logging.getLogger(__name__)

DRUGS_FILE = "drugs.json"
ALERTS_FILE = "alerts.json"


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise DatasetLoadError(f"Dataset file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetLoadError(f"Invalid JSON in {path.name}: {exc}") from exc


def _check_unique(ids: Iterable[str], kind: str) -> None:
    seen = set()
    for record_id in ids:
        if record_id in seen:
            raise DatasetLoadError(f"Duplicate {kind} id '{record_id}' in dataset")
        seen.add(record_id)


def parse_bundle(payload: Dict[str, Any]) -> DataBundle:
    """Validate a {"drugs": [...], "alerts": [...]} payload."""
    try:
        bundle = DataBundle.model_validate(payload)
    except PydanticValidationError as exc:
        raise DatasetLoadError(f"Dataset failed validation: {exc.error_count()} errors") from exc

    _check_unique((d.id for d in bundle.drugs), "drug")
    _check_unique((a.id for a in bundle.alerts), "alert")
    return bundle


def load_dataset(data_dir: Optional[str] = None) -> DataBundle:
    """
    Load and validate the bundled drug and alert catalogs.

    Raises:
        DatasetLoadError: if a file is missing, malformed or has duplicate ids
    """
    base = Path(data_dir or get_settings().DATA_DIR)
    drugs_doc = _read_json(base / DRUGS_FILE)
    alerts_doc = _read_json(base / ALERTS_FILE)

    bundle = parse_bundle({
        "drugs": drugs_doc.get("drugs", []),
        "alerts": alerts_doc.get("alerts", []),
    })
    logger.info(
        f"Loaded dataset v{drugs_doc.get('version', '?')}: "
        f"{len(bundle.drugs)} drugs, {len(bundle.alerts)} alert rules"
    )
    return bundle
