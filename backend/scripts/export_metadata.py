#!/usr/bin/env python3
"""Export the TTS dataset metadata.csv for all stored recordings.

One row per recording: filename, text, speaker_id, category, duration.
Audio files themselves live in object storage under the same filenames.

Usage:
    python3 scripts/export_metadata.py                      # writes ./metadata.csv
    python3 scripts/export_metadata.py -o /tmp/metadata.csv
    python3 scripts/export_metadata.py --category anchor    # only anchor sentences
"""

import argparse
import csv
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from app.database import SessionLocal
from app.services.recording_service import METADATA_HEADER, iter_metadata_rows


def export(out_path: Path, category: str | None = None) -> int:
    db = SessionLocal()
    written = 0
    try:
        with open(out_path, "w", newline="", encoding="utf-8") as f:
            f.write(",".join(METADATA_HEADER) + "\n")
            writer = csv.writer(f, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
            for row in iter_metadata_rows(db):
                if category and row[3] != category:
                    continue
                writer.writerow(row)
                written += 1
    finally:
        db.close()
    return written


def main():
    parser = argparse.ArgumentParser(description="Export recording metadata CSV")
    parser.add_argument("-o", "--output", type=Path, default=Path("metadata.csv"))
    parser.add_argument("--category", help="Only export recordings of this sentence category")
    args = parser.parse_args()

    written = export(args.output, args.category)
    print(f"Wrote {written} rows to {args.output}")


if __name__ == "__main__":
    main()
