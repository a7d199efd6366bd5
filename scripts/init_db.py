import logging
import sys

from app.db.engine import get_engine
from app.db.migrations import MigrationError, apply_migrations, current_version

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> int:
    engine = get_engine()
    try:
        applied = apply_migrations(engine)
    except MigrationError as e:
        logger.error("Schema migration failed: %s", e)
        return 1

    logger.info("Applied %s migration(s); schema at version %s",
                len(applied), current_version(engine))
    return 0


if __name__ == "__main__":
    sys.exit(main())
