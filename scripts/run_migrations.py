#!/usr/bin/env python3
"""Run Alembic migrations before starting the API server.

This script ensures the products table is up-to-date before uvicorn
starts serving requests.
"""
import logging
import sys

from totem.core.config import get_settings
from totem.core.migrations import upgrade_to_head

logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] %(levelname)s - %(message)s",
)


def main() -> int:
    """Main entry point for migration script.

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    try:
        upgrade_to_head(get_settings().database_url)
    except Exception as e:
        logger.error(f"✗ Migration failed: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
