from florina_attendance.database.bootstrap import SCHEMA_PATH, _statements


def test_statements_split_on_semicolons_and_skip_blanks():
    assert _statements("CREATE TABLE a (id INT);\n\n CREATE TABLE b (id INT) ;\n") == [
        "CREATE TABLE a (id INT)",
        "CREATE TABLE b (id INT)",
    ]


def test_schema_defines_both_tables_with_unique_keys():
    statements = _statements(SCHEMA_PATH.read_text(encoding="utf-8"))

    assert len(statements) == 2
    assert not any(stmt.upper().startswith(("CREATE DATABASE", "USE ")) for stmt in statements)
    assert "UNIQUE (employee_number)" in statements[0]
    assert "UNIQUE (employee_id, `date`)" in statements[1]
    assert "ON DELETE CASCADE" in statements[1]
