from sqlalchemy import text

from db import session as db_session
from db.deps import get_db


class TestDatabaseUrl:
    def test_postgres_scheme_is_normalized(self):
        assert (
            db_session._normalize_database_url(" postgres://u:p@host:5432/jobly \n")
            == "postgresql://u:p@host:5432/jobly"
        )

    def test_other_urls_untouched(self):
        assert db_session._normalize_database_url("sqlite://") == "sqlite://"

    def test_empty_url(self):
        assert db_session._normalize_database_url(None) == ""

    def test_needs_ssl(self):
        assert db_session._needs_ssl("postgresql://x.abc.rds.amazonaws.com/db")
        assert not db_session._needs_ssl("postgresql://localhost/db")


class TestEngineKwargs:
    def test_postgres_pool_settings(self, monkeypatch):
        monkeypatch.setenv("DB_POOL_SIZE", "7")
        kwargs = db_session._engine_kwargs("postgresql://localhost/jobly")
        assert kwargs["pool_size"] == 7
        assert kwargs["max_overflow"] == 10
        assert "connect_args" not in kwargs

    def test_managed_host_requires_ssl(self):
        kwargs = db_session._engine_kwargs("postgresql://db.aws.neon.tech/jobly")
        assert kwargs["connect_args"] == {"sslmode": "require"}

    def test_explicit_sslmode_is_respected(self):
        kwargs = db_session._engine_kwargs("postgresql://db.aws.neon.tech/jobly?sslmode=disable")
        assert "connect_args" not in kwargs

    def test_sqlite_has_no_pool_settings(self, monkeypatch):
        monkeypatch.setenv("DB_ECHO", "1")
        kwargs = db_session._engine_kwargs("sqlite://")
        assert kwargs == {"pool_pre_ping": True, "echo": True}


def test_get_db_yields_and_closes_session():
    gen = get_db()
    db = next(gen)
    assert db.execute(text("SELECT 1")).scalar() == 1
    gen.close()
