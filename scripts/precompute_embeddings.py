#!/usr/bin/env python3
"""
Catalog precompute utility.
Encodes every item of the {category: [names]} source file and writes the catalog JSON the API loads at startup.
"""

import argparse
import sys
from collections import Counter
from pathlib import Path

# Load environment variables from .env file first
import dotenv
dotenv.load_dotenv()

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from shelfsense.core.config import get_items_path, get_catalog_path, get_text_encoder
from shelfsense.core.errors import EncoderUnavailable, SchemaError
from shelfsense.vector.catalog import load_catalog
from shelfsense.vector.catalog_io import read_items_file, write_catalog_file
from shelfsense.vector.types import Category
from shelfsense.util.logging import logger

PROGRESS_EVERY = 50


def precompute(items_path: Path, output_path: Path, encoder) -> list:
    """Encode all items and write the catalog file. Returns the written records."""
    items = read_items_file(items_path)
    total = sum(len(names) for names in items.values())
    logger.info(f"Loaded {total} items in {len(items)} categories from {items_path}")

    unknown = [name for name in items if name not in {c.value for c in Category}]
    if unknown:
        raise SchemaError(f"Unknown categories in {items_path}: {unknown}")

    records = []
    processed = 0
    for category, names in items.items():
        for name in names:
            try:
                vector = encoder.encode(name)
            except EncoderUnavailable as e:
                logger.log_encoder_failure("precompute", e, name)
                continue

            records.append({"name": name, "vector": vector.tolist(), "category": category})
            processed += 1
            if processed % PROGRESS_EVERY == 0:
                logger.info(f"Processed {processed}/{total} items...")

    if not records:
        raise SchemaError("No items could be encoded")

    # Validate before writing so a broken catalog never reaches disk
    catalog = load_catalog(records)
    write_catalog_file(output_path, records)
    logger.log_catalog_load(str(output_path), len(catalog), catalog.dimension, details={"skipped": total - len(records)})
    return records


def print_summary(records: list) -> None:
    counts = Counter(record["category"] for record in records)
    print("\nSummary by category:")
    for category, count in counts.items():
        print(f"  {category}: {count} items")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Precompute catalog embeddings for ShelfSense")
    parser.add_argument(
        "--items",
        default=None,
        help="Source items JSON (default: ITEMS_PATH)"
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Catalog JSON to write (default: CATALOG_PATH)"
    )
    args = parser.parse_args(argv)

    items_path = Path(args.items) if args.items else get_items_path()
    output_path = Path(args.output) if args.output else get_catalog_path()

    try:
        records = precompute(items_path, output_path, get_text_encoder())
    except (OSError, SchemaError, EncoderUnavailable) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(f"\nGenerated {len(records)} embeddings")
    print(f"Vector dimension: {len(records[0]['vector'])}")
    print(f"Saved embeddings to {output_path}")
    print_summary(records)


if __name__ == "__main__":
    main()
