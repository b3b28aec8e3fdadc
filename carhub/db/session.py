from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from carhub.core.config import settings

db_url = str(settings.SQLALCHEMY_DATABASE_URI)

connect_args = {}
if db_url.startswith("sqlite"):
    # FastAPI serves sync endpoints from a thread pool
    connect_args["check_same_thread"] = False

engine = create_engine(
    db_url,
    connect_args=connect_args,
    pool_pre_ping=True  # Test connections for liveness when checked out from pool
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for declarative class definitions
Base = declarative_base()

# Dependency to get database session
def get_db():
    """
    Dependency for FastAPI endpoints that need a database session.
    Creates a new session for each request and closes it when done;
    anything not committed by then is rolled back.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
