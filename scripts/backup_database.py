import os
import subprocess
import sys
from datetime import datetime

from dotenv import load_dotenv

import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def backup_database():
    """Dump DATABASE_URL to backup-<timestamp>.sql with pg_dump."""
    load_dotenv()
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        logger.error("DATABASE_URL is required")
        return 1

    timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
    backup_file = f"backup-{timestamp}.sql"
    command = [
        "pg_dump",
        "--no-owner",
        "--no-privileges",
        "--format=plain",
        f"--file={backup_file}",
        database_url,
    ]

    result = subprocess.run(command, capture_output=True, text=True)
    if result.returncode != 0:
        logger.error(f"Backup error: {result.stderr.strip()}")
        return 1
    if result.stderr:
        logger.warning(f"Backup warnings: {result.stderr.strip()}")
    logger.info(f"Backup complete: {backup_file}")
    return 0


if __name__ == "__main__":
    sys.exit(backup_database())
