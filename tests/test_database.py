"""Database engine configuration tests."""

from task_manager.database import engine_options


def test_engine_options_postgres_pool():
    """Test that server databases get a sized connection pool."""
    options = engine_options("postgresql://task_user:task_password@db:5432/task_manager")
    assert options["pool_size"] == 5
    assert options["max_overflow"] == 10
    assert options["pool_pre_ping"] is True


def test_engine_options_sqlite():
    """Test that SQLite URLs skip pool sizing and allow cross-thread use."""
    options = engine_options("sqlite:///./task_manager.db")
    assert "pool_size" not in options
    assert options["connect_args"] == {"check_same_thread": False}
