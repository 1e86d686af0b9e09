from pathlib import Path

from src.staffing_portal.staffing_portal.database.bootstrap import _strip_create_db_and_use, iter_sql_statements

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def test_splitter_handles_quotes_and_comments():
    sql = """
    -- settings row
    INSERT INTO t(a) VALUES('x;y');
    INSERT INTO t(a) VALUES("it's");  -- trailing comment
    SELECT 1
    """
    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t(a) VALUES('x;y')",
        'INSERT INTO t(a) VALUES("it\'s")',
        "SELECT 1",
    ]


def test_schema_declares_one_record_per_user_per_day():
    sql = _strip_create_db_and_use((DATABASE_DIR / "schema.sql").read_text(encoding="utf-8"))
    statements = list(iter_sql_statements(sql))

    assert not any(s.upper().startswith(("CREATE DATABASE", "USE ")) for s in statements)
    attendance = next(s for s in statements if "attendance_records" in s)
    assert "UNIQUE KEY uq_attendance_user_date (user_id, work_date)" in attendance


def test_seed_inserts_default_settings():
    statements = list(iter_sql_statements((DATABASE_DIR / "seed.sql").read_text(encoding="utf-8")))
    assert any("attendance_settings" in s and "10, 11, 19" in s for s in statements)


def test_deleting_a_user_cannot_remove_their_history():
    sql = (DATABASE_DIR / "schema.sql").read_text(encoding="utf-8")
    statements = list(iter_sql_statements(_strip_create_db_and_use(sql)))

    assert "CASCADE" not in sql.upper()
    for table in ("attendance_records", "leave_requests", "announcements"):
        ddl = next(s for s in statements if f"CREATE TABLE IF NOT EXISTS {table}" in s)
        assert "REFERENCES users(user_id) ON DELETE RESTRICT" in ddl
