"""
Snapshot loading for drivesweep.

Turns raw file-listing payloads (JSON, JSONL or CSV exports of the Drive
``files.list`` API) into validated FileRecord objects. The detection core
assumes well-formed input; this is the layer that rejects or coerces bad
records before they reach it.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from drivesweep.core.models import FileRecord
from drivesweep.utils.exceptions import SnapshotError, ValidationError

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("json", "jsonl", "csv")

_REQUIRED_FIELDS = ("id", "name")


def _coerce_size(value: Any, record_id: str) -> int:
    """Coerce a raw size to a non-negative int, defaulting to 0."""
    if value is None:
        return 0
    try:
        size = int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            size = int(float(value))
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Record {record_id}: non-numeric size {value!r}, using 0")
            return 0
    if size < 0:
        logger.warning(f"Record {record_id}: negative size {size}, using 0")
        return 0
    return size


def _coerce_parents(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [p.strip() for p in value.replace(",", ";").split(";") if p.strip()]
    return [str(p) for p in value]


def normalize_record(raw: Mapping[str, Any], strict: bool = False) -> Optional[FileRecord]:
    """Validate a single raw record.

    Records missing ``id``, ``name`` or a modification time are rejected.
    A non-numeric or negative ``size`` is coerced to 0.

    Args:
        raw: Raw record (Drive API field names or model field names)
        strict: Raise instead of skipping rejected records

    Returns:
        FileRecord, or None if the record was rejected in lenient mode

    Raises:
        ValidationError: If the record is rejected in strict mode
    """
    data: Dict[str, Any] = {k: v for k, v in raw.items() if v is not None}

    for field in _REQUIRED_FIELDS:
        value = data.get(field)
        if value is None or not str(value).strip():
            return _reject(f"Record is missing required field '{field}'", field, raw, strict)

    record_id = str(data["id"])
    data["id"] = record_id
    data["name"] = str(data["name"])
    data["size"] = _coerce_size(data.get("size"), record_id)
    data["parents"] = _coerce_parents(data.get("parents"))

    if "modifiedTime" not in data and "modified_time" not in data:
        return _reject("Record is missing its modification time", "modifiedTime", raw, strict)

    try:
        return FileRecord.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first.get("loc", ())) or None
        return _reject(f"Invalid record {record_id}: {first.get('msg')}", field, raw, strict)


def _reject(
    message: str, field: Optional[str], raw: Mapping[str, Any], strict: bool
) -> Optional[FileRecord]:
    if strict:
        raise ValidationError(message, field=field, record_id=raw.get("id"))
    logger.warning(f"Skipping record: {message}")
    return None


def load_records(raw_records: Iterable[Mapping[str, Any]], strict: bool = False) -> List[FileRecord]:
    """Validate a sequence of raw records, preserving their order."""
    records = []
    skipped = 0

    for raw in raw_records:
        if not isinstance(raw, Mapping):
            if strict:
                raise ValidationError("Record is not an object", record=repr(raw)[:80])
            skipped += 1
            continue
        record = normalize_record(raw, strict=strict)
        if record is None:
            skipped += 1
        else:
            records.append(record)

    if skipped:
        logger.warning(f"Skipped {skipped} invalid record(s)")
    logger.info(f"Loaded {len(records)} file record(s)")
    return records


def detect_format(path: Path) -> str:
    """Infer snapshot format from the file suffix."""
    suffix = path.suffix.lower().lstrip(".")
    if suffix in SUPPORTED_FORMATS:
        return suffix
    raise SnapshotError(
        f"Unsupported snapshot format: {path.suffix or '(none)'} (use .json, .jsonl or .csv)",
        path=path,
    )


def load_snapshot(
    path: Union[str, Path], format: str = "auto", strict: bool = False
) -> List[FileRecord]:
    """Load a file-metadata snapshot from disk.

    JSON snapshots may be a list of records or an object with a ``files``
    key, as returned by the Drive API.

    Args:
        path: Snapshot file
        format: One of auto, json, jsonl, csv
        strict: Raise on the first invalid record instead of skipping it

    Returns:
        List of FileRecord in file order

    Raises:
        SnapshotError: If the file cannot be read or parsed
        ValidationError: If a record is invalid in strict mode
    """
    path = Path(path)
    if not path.exists():
        raise SnapshotError("Snapshot file not found", path=path)

    fmt = detect_format(path) if format == "auto" else format.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise SnapshotError(f"Unsupported snapshot format: {fmt}", path=path)

    try:
        if fmt == "json":
            raw_records = _read_json(path)
        elif fmt == "jsonl":
            raw_records = _read_jsonl(path)
        else:
            raw_records = _read_csv(path)
    except (OSError, ValueError) as e:
        raise SnapshotError(f"Could not parse snapshot: {e}", path=path) from e

    return load_records(raw_records, strict=strict)


def _read_json(path: Path) -> List[Any]:
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        payload = payload.get("files")
    if not isinstance(payload, list):
        raise SnapshotError("JSON snapshot must be a list or an object with a 'files' list", path=path)
    return payload


def _read_jsonl(path: Path) -> List[Any]:
    records = []
    with open(path, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise SnapshotError(f"Invalid JSON at line {line_num}: {e.msg}", path=path) from e
    return records


def _read_csv(path: Path) -> List[Dict[str, Any]]:
    # Read everything as text so ids and checksums keep leading zeros.
    df = pd.read_csv(path, dtype=str)
    records = []
    for _, row in df.iterrows():
        data = row.to_dict()
        records.append({k: (v if pd.notna(v) else None) for k, v in data.items()})
    return records
