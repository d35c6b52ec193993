from threading import Lock

from sqlalchemy import DDL, create_engine, event, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from telemed.core import config


connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    config.DATABASE_URL,
    echo=config.DATABASE_ECHO,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

# the appointment exclusion constraints compare integer doctor ids inside a gist index
event.listen(
    Base.metadata,
    "before_create",
    DDL("CREATE EXTENSION IF NOT EXISTS btree_gist").execute_if(dialect="postgresql"),
)

_schema_lock = Lock()
_appointment_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_appointment_schema(bind=None) -> None:
    global _appointment_schema_checked

    if _appointment_schema_checked:
        return

    bind = bind or engine

    with _schema_lock:
        if _appointment_schema_checked:
            return

        inspector = inspect(bind)

        if 'appointments' not in inspector.get_table_names():
            _appointment_schema_checked = True
            return

        with bind.begin() as connection:
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_appointments_time_range ON appointments(start_time, end_time)')
            )
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_appointments_end_time ON appointments(end_time)')
            )
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_appointments_patient ON appointments(patient_id)')
            )

        _appointment_schema_checked = True
