import logging
from sqlalchemy.exc import SQLAlchemyError

from carhub.db.session import Base, engine
# Imported for their side effect of registering the tables on Base.metadata
from carhub import models  # noqa: F401

logger = logging.getLogger(__name__)

def init_db(bind=engine):
    """
    Initialize the database by creating the CarHub tables.
    Existing tables are left as they are.
    """
    try:
        for table in Base.metadata.sorted_tables:
            table.create(bind, checkfirst=True)
            logger.info(f"Table {table.name} ready")

        logger.info("CarHub tables created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database tables: {e}")
        raise
