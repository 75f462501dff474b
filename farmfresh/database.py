# farmfresh/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from farmfresh.config import settings

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# SQLAlchemy requires postgresql:// (hosting providers still hand out postgres://)
if SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)

engine_kwargs = {}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    # An in-memory database only lives as long as its single connection
    if SQLALCHEMY_DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # Register every model on Base.metadata before creating tables
    import farmfresh.models.users  # noqa: F401
    import farmfresh.models.category  # noqa: F401
    import farmfresh.models.product  # noqa: F401
    import farmfresh.models.cart  # noqa: F401
    import farmfresh.models.order  # noqa: F401
    import farmfresh.models.review  # noqa: F401
    import farmfresh.models.log  # noqa: F401
    Base.metadata.create_all(bind=engine)
