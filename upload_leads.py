#!/usr/bin/env python3
"""
Upload a spreadsheet to Supabase without the Streamlit UI.

Usage:
    python upload_leads.py path/to/funding.xlsx [--webhook URL] [--chunk-size N]

This will:
1. Validate and parse the first sheet of the workbook
2. Insert the mapped rows into the leads table in chunks
3. Notify the webhook once every chunk is stored
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from leadsync.config import load_settings
from leadsync.errors import MappingError
from leadsync.models.upload import UploadedFile
from leadsync.services import (
    BatchIngestor,
    FieldMapper,
    FileValidator,
    IngestionPipeline,
    LeadStore,
    NotificationDispatcher,
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Upload an Excel file of funding leads to Supabase")
    parser.add_argument("path", type=Path, help="Path to an .xlsx or .xls file")
    parser.add_argument("--webhook", default=None, help="Webhook URL (defaults to WEBHOOK_URL)")
    parser.add_argument("--chunk-size", type=int, default=None, help="Records per insert request")
    parser.add_argument("--delay", type=float, default=None, help="Seconds between chunks")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main upload function. Returns a process exit code."""
    args = parse_args(argv)
    settings = load_settings()

    print("=" * 60)
    print("LeadSync - Upload Spreadsheet to Supabase")
    print("=" * 60)

    if not args.path.exists():
        print(f"\nFile not found: {args.path}")
        return 1

    missing = settings.missing_datastore_keys()
    if missing:
        print(f"\nMissing configuration: {', '.join(missing)}")
        print("Make sure SUPABASE_URL and SUPABASE_KEY are set in .env")
        return 1

    upload = UploadedFile.from_path(args.path)
    try:
        mapper = FieldMapper.from_yaml(settings.column_mapping_path) if settings.column_mapping_path else FieldMapper()
    except MappingError as e:
        print(f"\nColumn mapping error: {e}")
        print("Fix or unset COLUMN_MAPPING_PATH in .env")
        return 1

    pipeline = IngestionPipeline(
        ingestor=BatchIngestor(LeadStore.from_settings(settings), table=settings.leads_table),
        notifier=NotificationDispatcher(timeout=settings.webhook_timeout),
        validator=FileValidator(settings.max_upload_bytes),
        mapper=mapper,
        chunk_size=args.chunk_size or settings.chunk_size,
        chunk_delay=settings.chunk_delay if args.delay is None else args.delay,
        on_progress=lambda message: print(f"  {message}", flush=True),
    )

    print(f"\nUploading {upload.name} ...")
    state = pipeline.run(upload, args.webhook or settings.webhook_url)

    print(f"\n{state.message}")
    if state.outcome:
        print(f"  - Attempted: {state.outcome.attempted}")
        print(f"  - Stored: {state.outcome.succeeded}")
        print(f"  - Chunks: {state.outcome.chunks_submitted}")
    print("\n" + "=" * 60)

    return 0 if state.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
