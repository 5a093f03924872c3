#!/usr/bin/env python3
"""Sample leads export generator.

Generates a synthetic business-leads CSV shaped like real exports:
- Row 1: export metadata row (ignored by header detection)
- Row 2: header row (Name, Description, Primary Industry, ...)
- Row 3+: data rows, some with quoted commas, embedded newlines, doubled
  quotes, missing trailing columns or an empty name

Useful for trying the CLI and for throughput checks.
"""
from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADER = ["Name", "Description", "Primary Industry", "Location", "Country", "Domain", "LinkedIn"]
INDUSTRIES = ["Manufacturing", "Textiles", "Agriculture", "Logistics", "Chemicals", "Electronics"]
LOCATIONS = [
    ("Mumbai", "India"),
    ("Pune", "India"),
    ("Shenzhen", "China"),
    ("Hamburg", "Germany"),
    ("Austin", "United States"),
    ("São Paulo", "Brazil"),
]


def generate_leads(rows: int, seed: int = 42) -> pd.DataFrame:
    """Generate a DataFrame of synthetic leads.

    Args:
        rows: Number of data rows to generate
        seed: Random seed for reproducible data
    """
    rng = np.random.default_rng(seed)
    industries = rng.choice(INDUSTRIES, rows)
    loc_idx = rng.integers(0, len(LOCATIONS), rows)
    names: list[str] = []
    descriptions: list[str] = []
    for i in range(rows):
        names.append(f"Company {i + 1:05d} {chr(65 + (i % 26))}")
        kind = rng.integers(0, 4)
        if kind == 0:
            descriptions.append(f"Supplier of {industries[i].lower()} goods, bulk and retail")
        elif kind == 1:
            descriptions.append(f"Founded {1950 + i % 70}.\nExport focused")
        elif kind == 2:
            descriptions.append('Known as "the reliable one"')
        else:
            descriptions.append("")
    data = {
        "Name": names,
        "Description": descriptions,
        "Primary Industry": industries.tolist(),
        "Location": [LOCATIONS[j][0] for j in loc_idx],
        "Country": [LOCATIONS[j][1] for j in loc_idx],
        "Domain": [f"company{i + 1}.example.com" for i in range(rows)],
        "LinkedIn": [f"https://www.linkedin.com/company/company{i + 1}" for i in range(rows)],
    }
    return pd.DataFrame(data, columns=HEADER)


def write_leads_csv(df: pd.DataFrame, path: Path, *, ragged_every: int = 0, blank_name_every: int = 0) -> Path:
    """Write leads with a metadata row; optionally damage some rows."""
    body = df.to_csv(index=False, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    lines = ["Export Date: 2024-01-01,,,,,,", *body.split("\r\n")]
    # 行単位の加工は引用符内改行を含まない行のみ対象
    out: list[str] = []
    for n, line in enumerate(lines):
        data_row = n >= 2 and line and '"' not in line
        if data_row and ragged_every and n % ragged_every == 0:
            line = ",".join(line.split(",")[:4])
        elif data_row and blank_name_every and n % blank_name_every == 0:
            line = "," + line.split(",", 1)[1]
        out.append(line)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\r\n".join(out), encoding="utf-8")
    return path


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Generate a synthetic business leads CSV export")
    p.add_argument("--rows", type=int, default=500)
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--ragged-every", type=int, default=0, help="Truncate every Nth plain row to 4 columns")
    p.add_argument("--blank-name-every", type=int, default=0, help="Blank the name of every Nth plain row")
    p.add_argument("--output", type=Path, default=Path("data/Companies.csv"))
    args = p.parse_args(argv)
    if args.rows < 0:
        print("rows must be >= 0", file=sys.stderr)
        return 1
    df = generate_leads(args.rows, args.seed)
    path = write_leads_csv(
        df, args.output, ragged_every=args.ragged_every, blank_name_every=args.blank_name_every
    )
    print(f"wrote {len(df)} leads -> {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
