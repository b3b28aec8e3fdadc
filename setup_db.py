"""
Create the CarHub tables in the database named by the settings.

Postgres is used unless DATABASE_URL says otherwise; for a local run
against a file, for example:

    DATABASE_URL=sqlite:///carhub.db python setup_db.py

Tables that already exist are left untouched, so running it again is safe.
"""

import logging

from carhub.db.init_db import init_db
from carhub.db.session import engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def setup_database(bind=engine):
    """Create the vehicle, record and preference tables on ``bind``."""
    target = bind.url.render_as_string(hide_password=True)
    logger.info(f"Creating CarHub tables in {target}")
    try:
        init_db(bind=bind)
    except Exception as e:
        logger.error(f"Could not create the tables in {target}: {e}")
        raise
    logger.info("Database tables created successfully!")

if __name__ == "__main__":
    setup_database()
