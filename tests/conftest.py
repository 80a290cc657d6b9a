import os

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ.setdefault('R2_ACCOUNT_ID', 'test-account')
os.environ.setdefault('R2_ACCESS_KEY_ID', 'test-key')
os.environ.setdefault('R2_SECRET_ACCESS_KEY', 'test-secret')
os.environ.setdefault('R2_BUCKET_NAME', 'agenda-images')
os.environ.setdefault('R2_PUBLIC_URL', 'https://images.example.com')
os.environ.setdefault('AGENDA_WEBHOOK_URL', 'https://hooks.example.com/daily_agenda')

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from agenda_service import models  # noqa: E402,F401
from agenda_service.database import Base  # noqa: E402


@pytest.fixture
def agenda_db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
