import os
from dotenv import load_dotenv
from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker


load_dotenv()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hospital.db")

engine = create_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_schedule_schema_checked = False
_appointment_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_schedule_schema() -> None:
    global _schedule_schema_checked

    if _schedule_schema_checked:
        return

    with _schema_lock:
        if _schedule_schema_checked:
            return

        inspector = inspect(engine)

        if 'doctor_schedules' not in inspector.get_table_names():
            _schedule_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('doctor_schedules')}
        migration_steps = [
            ('location', 'ALTER TABLE doctor_schedules ADD COLUMN location VARCHAR'),
            ('is_available', 'ALTER TABLE doctor_schedules ADD COLUMN is_available BOOLEAN DEFAULT TRUE'),
            ('min_work_time', 'ALTER TABLE doctor_schedules ADD COLUMN min_work_time TIME'),
            ('max_work_time', 'ALTER TABLE doctor_schedules ADD COLUMN max_work_time TIME'),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))
            connection.execute(
                text(
                    'CREATE UNIQUE INDEX IF NOT EXISTS uq_doctor_schedules_doctor_date '
                    'ON doctor_schedules(doctor_id, date)'
                )
            )

        _schedule_schema_checked = True


def ensure_appointment_schema() -> None:
    global _appointment_schema_checked

    if _appointment_schema_checked:
        return

    with _schema_lock:
        if _appointment_schema_checked:
            return

        inspector = inspect(engine)

        if 'appointments' not in inspector.get_table_names():
            _appointment_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('appointments')}
        migration_steps = [
            ('reason', 'ALTER TABLE appointments ADD COLUMN reason VARCHAR(500)'),
            ('location', 'ALTER TABLE appointments ADD COLUMN location VARCHAR(200)'),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))
            connection.execute(
                text(
                    'CREATE UNIQUE INDEX IF NOT EXISTS uq_appointments_doctor_slot '
                    "ON appointments(doctor_id, date_time) WHERE status = 'Scheduled'"
                )
            )
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_appointments_patient_time ON appointments(patient_id, date_time)')
            )

        _appointment_schema_checked = True
