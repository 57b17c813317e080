"""
JSON ingestion and export for the precomputed catalog.

Catalog files hold a JSON array of {"name", "vector", "category"} records.
Item source files hold {"<category>": ["item name", ...]}.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from .catalog import VectorCatalog, load_catalog
from ..core.errors import SchemaError

PathLike = Union[str, Path]


def read_catalog_file(path: PathLike) -> VectorCatalog:
    """Read a precomputed catalog file and build the catalog from it."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except OSError as e:
        raise SchemaError(f"Cannot read catalog file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaError(f"Catalog file {path} is not valid JSON: {e}") from e

    if not isinstance(records, list):
        raise SchemaError(f"Catalog file {path} must contain a JSON array of records")

    return load_catalog(records)


def write_catalog_file(path: PathLike, records: List[Dict[str, Any]]) -> Path:
    """Write catalog records as JSON, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    serializable = [
        {
            "name": record["name"],
            "vector": [float(v) for v in record["vector"]],
            "category": str(getattr(record["category"], "value", record["category"])),
        }
        for record in records
    ]

    with open(path, "w", encoding="utf-8") as f:
        json.dump(serializable, f, indent=2, ensure_ascii=False)
    return path


def read_items_file(path: PathLike) -> Dict[str, List[str]]:
    """Read the raw {category: [item names]} source file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            items = json.load(f)
    except OSError as e:
        raise SchemaError(f"Cannot read items file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaError(f"Items file {path} is not valid JSON: {e}") from e

    if not isinstance(items, dict) or not all(isinstance(v, list) for v in items.values()):
        raise SchemaError(f"Items file {path} must map category names to lists of item names")
    return items
