# backend/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config import settings

# 1. Adres bazy z konfiguracji (.env / zmienne środowiskowe), domyślnie lokalny SQLite
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# 2. Poprawka dla hostingu (zamienia postgres:// na postgresql://, bo SQLAlchemy tego wymaga)
if SQLALCHEMY_DATABASE_URL and SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)

# 3. Konfiguracja zależna od bazy
if "sqlite" in SQLALCHEMY_DATABASE_URL:
    connect_args = {"check_same_thread": False} # Tylko dla SQLite
else:
    connect_args = {} # Puste dla PostgreSQL

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # Models must be imported so their tables are registered on Base.metadata
    import models.users  # noqa: F401
    import models.product  # noqa: F401
    import models.cart  # noqa: F401
    import models.order  # noqa: F401
    import models.measurement  # noqa: F401
    import models.log  # noqa: F401
    Base.metadata.create_all(bind=engine)
