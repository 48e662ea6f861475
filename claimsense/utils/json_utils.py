import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from claimsense.exceptions import StoreLoadError

logger = logging.getLogger(__name__)


def load_json_records(path: Union[str, Path], items_key: str) -> List[Dict[str, Any]]:
    """
    Load a list of records stored under ``items_key`` in a JSON document.

    Accepts either ``{"<items_key>": [...]}`` or a bare top-level list.
    Raises StoreLoadError when the file is missing, is not valid JSON,
    or does not contain a list of objects.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise StoreLoadError("Data file not found", file_path)

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise StoreLoadError(f"Invalid JSON at line {e.lineno}", file_path) from e

    if isinstance(data, dict):
        data = data.get(items_key)

    if not isinstance(data, list):
        raise StoreLoadError(f"Expected a list of records under '{items_key}'", file_path)

    records = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise StoreLoadError(f"Record {index} under '{items_key}' is not an object", file_path)
        records.append(item)

    logger.debug(f"Loaded {len(records)} '{items_key}' records from {file_path}")
    return records
