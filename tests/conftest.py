import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')

from hospital.database import Base  # noqa: E402
from hospital.models.appointment import Appointment  # noqa: E402,F401
from hospital.models.doctor import Doctor, Patient  # noqa: E402
from hospital.models.schedule import DoctorSchedule  # noqa: E402,F401
from hospital.models.user import User  # noqa: E402,F401
from hospital.scheduling.store import SchedulingStore  # noqa: E402


@pytest.fixture
def db_session():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    db = testing_session_local()
    try:
        db.add_all([
            Doctor(id=1, name='Gregory House', specialization='Diagnostics'),
            Doctor(id=2, name='Lisa Cuddy', specialization='Endocrinology'),
            Patient(id=1, name='Rebecca Adler'),
            Patient(id=2, name='Brandon Merrell'),
        ])
        db.commit()
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def store(db_session) -> SchedulingStore:
    return SchedulingStore(db_session)
