import json
import logging
import sys
from pathlib import Path

from core.config import settings
from core.database import SessionLocal
from core.logging import setup_logging
from services.card_service import CardService

logger = logging.getLogger(__name__)


def load_entries(path: Path) -> list[dict]:
    with path.open(encoding="utf-8") as f:
        entries = json.load(f)
    if not isinstance(entries, list):
        raise ValueError(f"{path} must contain a JSON list of cards")
    return entries


def main(argv: list[str] | None = None) -> int:
    setup_logging(settings.LOG_LEVEL)
    args = sys.argv[1:] if argv is None else argv
    path = Path(args[0] if args else settings.CARDS_SEED_FILE)

    entries = load_entries(path)
    db = SessionLocal()
    try:
        inserted = CardService(db).seed_catalog(entries)
    finally:
        db.close()
    logger.info("%d cards read from %s, %d inserted", len(entries), path, inserted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
