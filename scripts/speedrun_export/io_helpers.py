"""I/O operations — CSV export of assembled run records, and reading it back."""

import csv

from speedrun_export.constants import CSV_COLUMNS


# ─── CSV Writer ──────────────────────────────────────────────────

def write_csv(records, path):
    """Write records to `path` (overwrites) with the fixed column header.

    Fields containing a comma, double quote or newline are quoted with
    inner quotes doubled. None becomes an empty field; floats keep a '.'
    decimal point regardless of locale.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        for record in records:
            writer.writerow(record.as_row())

    size_kb = path.stat().st_size / 1024
    print(f"  Wrote {path.name} ({len(records)} rows, {size_kb:.0f} KB)")


# ─── CSV Reader ──────────────────────────────────────────────────

def read_csv(path):
    """Load an exported file back as a list of row dicts (all values strings)."""
    if not path.exists():
        return []
    with open(path, "r", encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))
