import os.path
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))


import logging

from dotenv import load_dotenv  # isort:skip
load_dotenv()  # isort:skip

from feedback_core.db.init_db import init_db
from feedback_core.db.session import SessionLocal

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init() -> None:
    db = SessionLocal()
    try:
        init_db(db)
    finally:
        db.close()


def main() -> None:
    logger.info("Creating tables and initial superuser")
    init()
    logger.info("Initial data created")


if __name__ == "__main__":
    main()
