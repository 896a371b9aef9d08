"""
Pytest configuration: an in-memory SQLite database seeded with
three companies and four jobs, recreated for every test.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.base import Base
from db.store import run_query
from models.company import Company  # noqa: F401
from models.job import Job  # noqa: F401


COMPANIES = [
    ("c1", "C1", 1, "Desc1", "http://c1.img"),
    ("c2", "C2", 2, "Desc2", "http://c2.img"),
    ("c3", "C3", 3, "Desc3", "http://c3.img"),
]

JOBS = [
    ("job1", 100, "0.1", "c1"),
    ("job2", 200, "0.2", "c1"),
    ("job3", 300, "0", "c1"),
    ("job4", None, None, "c1"),
]


@pytest.fixture(scope="function")
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    session = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def job_ids(db) -> list[int]:
    """Seed companies and jobs; return the job ids in title order."""
    for company in COMPANIES:
        run_query(
            db,
            """
            INSERT INTO companies (handle, name, num_employees, description, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            """,
            company,
        )

    ids = []
    for job in JOBS:
        rows = run_query(
            db,
            """
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING id
            """,
            job,
        )
        ids.append(rows[0]["id"])
    db.commit()
    return ids
