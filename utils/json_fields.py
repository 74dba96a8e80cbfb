import json
import logging
from typing import Any, Dict, Iterable, List

logger = logging.getLogger(__name__)


def encode_string_list(values: Iterable[str]) -> str:
    return json.dumps([str(value) for value in values])


def decode_string_list(raw: Any) -> List[str]:
    """Decode a persisted JSON string list; malformed input degrades to []."""
    if raw is None or raw == "":
        return []
    values = raw
    if isinstance(raw, (str, bytes)):
        try:
            values = json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding malformed JSON list: {raw!r}")
            return []
    if not isinstance(values, (list, tuple)):
        logger.warning(f"Expected a JSON list, got {type(values).__name__}; using empty list")
        return []
    return [str(value) for value in values]


def encode_records(records: Iterable[Dict[str, Any]]) -> str:
    return json.dumps(list(records), default=str)


def decode_records(raw: Any) -> List[Dict[str, Any]]:
    """Decode a persisted JSON list of objects; malformed input degrades to []."""
    if raw is None or raw == "":
        return []
    values = raw
    if isinstance(raw, (str, bytes)):
        try:
            values = json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding malformed JSON records: {raw!r}")
            return []
    if not isinstance(values, list) or not all(isinstance(value, dict) for value in values):
        logger.warning("Expected a JSON list of objects; using empty list")
        return []
    return values
