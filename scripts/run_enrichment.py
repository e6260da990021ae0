#!/usr/bin/env python3
"""
Profile Enrichment Script

Fills in biography text for alumni profiles that have a LinkedIn URL but
no enrichment text yet. Processes one bounded batch per run; run it again
to continue with the next batch.

Usage:
    python scripts/run_enrichment.py [--dry-run] [--limit 5]
"""

import sys
import asyncio
import argparse

from dotenv import load_dotenv

from connectltv.common.config import load_config, ConfigError
from connectltv.common.record_store import RetrievalError
from connectltv.common.schemas import ProfileRecord
from connectltv.common.store_factory import build_record_store
from connectltv.enrichment import ProfileEnricher


async def run(args) -> int:
    try:
        config = load_config()
        store = build_record_store(config.store, privileged=True)
    except ConfigError as e:
        print(f"[Enrichment] ERROR: {e}")
        return 1

    limit = args.limit or config.enrichment.batch_size
    print(f"[Enrichment] Connected to record store ({store.name}, table '{config.store.table}')")

    try:
        if args.dry_run:
            print("[Enrichment] DRY RUN - no changes will be made")
            rows = await store.list_unenriched(limit)
            for row in rows:
                record = ProfileRecord.from_row(row)
                print(f"[Enrichment] Would enrich {record.id}: {record.name} ({record.linkedin_url})")
            print(f"[Enrichment] {len(rows)} profiles pending in this batch")
            return 0

        enricher = ProfileEnricher(
            store,
            batch_size=config.enrichment.batch_size,
            delay_seconds=config.enrichment.delay_seconds,
        )
        report = await enricher.run(limit)
    except RetrievalError as e:
        print(f"[Enrichment] ERROR: Failed to read pending profiles: {e}")
        return 1
    finally:
        await store.close()

    print(f"[Enrichment] {report.message}: {report.completed}/{report.total} processed, {len(report.failed)} errors")
    for record_id in report.failed:
        print(f"[Enrichment] WARNING: Failed to enrich {record_id}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Enrich alumni profiles with biography text")
    parser.add_argument("--dry-run", action="store_true", help="List the pending batch without writing")
    parser.add_argument("--limit", type=int, default=None, help="Number of profiles to process (default: batch_size)")
    args = parser.parse_args()

    load_dotenv()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
