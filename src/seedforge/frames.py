"""
Tabular export: build rows of generated values and write them with pandas.

Usage:
    python -m src.seedforge.frames --rows 100 --seed 42 \
        --column id=guid --column card=cc --column iban=iban -o cards.csv
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import pandas as pd

from .forge import Forge

logger = logging.getLogger(__name__)

# A column is a generator name, or a name plus keyword arguments
ColumnSpec = Union[str, Mapping[str, Any]]

DEFAULT_COLUMNS: Dict[str, ColumnSpec] = {
    "guid": "guid",
    "name": "name",
    "cc": "cc",
    "iban": "iban",
    "file": "file",
}


def _resolve_column(forge: Forge, column: str, spec: ColumnSpec):
    if isinstance(spec, str):
        generator, kwargs = spec, {}
    elif isinstance(spec, Mapping) and "generator" in spec:
        generator = spec["generator"]
        kwargs = {k: v for k, v in spec.items() if k != "generator"}
    else:
        raise TypeError(
            f"seedforge: Column '{column}' must be a generator name or a mapping with a 'generator' key"
        )

    if generator not in forge.registry:
        raise KeyError(f"seedforge: Column '{column}' uses unknown generator '{generator}'")
    fn = getattr(forge, generator)
    return lambda: fn(**kwargs)


def build_records(
    forge: Forge,
    columns: Optional[Mapping[str, ColumnSpec]] = None,
    rows: int = 10,
) -> List[Dict[str, Any]]:
    """Generate `rows` dicts, filling columns left to right per row."""
    if rows < 0:
        raise ValueError(f"rows cannot be negative: {rows}")
    columns = columns or DEFAULT_COLUMNS
    makers = {column: _resolve_column(forge, column, spec) for column, spec in columns.items()}

    records = []
    for _ in range(rows):
        records.append({column: make() for column, make in makers.items()})
    return records


def build_frame(
    forge: Forge,
    columns: Optional[Mapping[str, ColumnSpec]] = None,
    rows: int = 10,
) -> pd.DataFrame:
    columns = columns or DEFAULT_COLUMNS
    records = build_records(forge, columns, rows)
    return pd.DataFrame(records, columns=list(columns))


def export_frame(frame: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write to Parquet when the path ends in .parquet, CSV otherwise."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix == ".parquet":
        frame.to_parquet(path, index=False)
    else:
        frame.to_csv(path, index=False)

    logger.info(f"Wrote {len(frame)} rows to {path}")
    return path


def parse_column(text: str) -> tuple:
    """Parse 'name=generator' (or just 'generator') from the command line."""
    if "=" in text:
        column, generator = text.split("=", 1)
    else:
        column = generator = text
    if not column or not generator:
        raise ValueError(f"Invalid column '{text}', expected name=generator")
    return column, generator


if __name__ == "__main__":
    import argparse

    from .config import environment_settings, setup_logging

    parser = argparse.ArgumentParser(description="Generate a table of fake data")
    parser.add_argument(
        "--output", "-o",
        default="data/seedforge.csv",
        help="Output file (.csv or .parquet)",
    )
    parser.add_argument(
        "--rows", "-n",
        type=int,
        default=100,
        help="Number of rows to generate",
    )
    parser.add_argument(
        "--seed", "-s",
        default=None,
        help="Seed for reproducibility (default: SEEDFORGE_SEED or clock)",
    )
    parser.add_argument(
        "--column", "-c",
        action="append",
        default=None,
        help="Column as name=generator; repeat for more columns",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    settings = environment_settings()
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    seed = args.seed
    if seed is not None and seed.lstrip("-").isdigit():
        seed = int(seed)

    forge = Forge(seed, settings=settings)
    columns = dict(parse_column(c) for c in args.column) if args.column else None

    frame = build_frame(forge, columns, args.rows)
    out = export_frame(frame, args.output)

    print(f"Seed: {forge.seed_value}")
    print(f"Wrote {len(frame)} rows x {len(frame.columns)} columns to {out}")
