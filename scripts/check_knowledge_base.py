#!/usr/bin/env python3
"""Manual check against a live knowledge base service.

Reads ZOTSYNC_* settings from the environment (or a .env file), then:
1. Tests the connection to the configured knowledge base
2. Lists available knowledge bases
3. Optionally syncs items from a Zotero Web API export

Usage:
    python scripts/check_knowledge_base.py
    python scripts/check_knowledge_base.py items.json ~/Zotero/storage
    python scripts/check_knowledge_base.py -v   # debug logging
"""

import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from zotsync.utils.logging import setup_logging  # noqa: E402

setup_logging(verbose="-v" in sys.argv)
sys.argv = [arg for arg in sys.argv if arg != "-v"]
logger = logging.getLogger("check_kb")


def check_connection(sync) -> bool:
    """Test the configured credentials."""
    logger.info("=" * 60)
    logger.info("Testing connection")
    logger.info("=" * 60)

    result = sync.run_connection_test()
    logger.info("[%s] %s", result.status.value.upper(), result.message)
    return result.ok


def check_listing(sync) -> int:
    """List knowledge bases."""
    logger.info("=" * 60)
    logger.info("Listing knowledge bases")
    logger.info("=" * 60)

    try:
        kbs = sync.list_knowledge_bases()
    except Exception as e:
        logger.error("ERROR: %s", e)
        return 0

    for kb in kbs:
        logger.info("  %s: %s", kb.id, kb.name)
    return len(kbs)


def check_sync(sync, export_path: Path) -> bool:
    """Sync every item of a Zotero API export."""
    from zotsync.infrastructure import InMemoryLibrary

    logger.info("=" * 60)
    logger.info("Syncing items from %s", export_path)
    logger.info("=" * 60)

    raw = json.loads(export_path.read_text(encoding="utf-8"))
    library = InMemoryLibrary.from_zotero_api(raw)
    items = [item for item in (library.get_item(r.get("key")) for r in raw) if item is not None]

    result = sync.sync_items(items, sync.settings.kb_id)
    logger.info(result.summary_message())
    for failure in result.failures:
        logger.info("  FAILED %s: %s", failure.title, failure.reason)
    return result.failed_count == 0


def main():
    """Run all checks."""
    from zotsync import KnowledgeBaseSync
    from zotsync.config import EnvConfigStore
    from zotsync.infrastructure import InMemoryLibrary, LocalFileAccess

    storage_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else Path.home() / "Zotero" / "storage"
    sync = KnowledgeBaseSync(InMemoryLibrary(), LocalFileAccess(storage_dir), EnvConfigStore())

    connection_ok = check_connection(sync)
    logger.info("")
    kb_count = check_listing(sync)
    logger.info("")

    sync_ok = True
    if len(sys.argv) > 1:
        sync_ok = check_sync(sync, Path(sys.argv[1]))

    logger.info("")
    logger.info("=" * 60)
    logger.info("SUMMARY")
    logger.info("=" * 60)
    logger.info("Connection: %s", "PASS" if connection_ok else "FAIL")
    logger.info("Knowledge bases found: %d", kb_count)
    if len(sys.argv) > 1:
        logger.info("Sync: %s", "PASS" if sync_ok else "FAIL")
    logger.info("=" * 60)

    return 0 if connection_ok and sync_ok else 1


if __name__ == "__main__":
    sys.exit(main())
