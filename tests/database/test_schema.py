from __future__ import annotations

import re
from pathlib import Path

from src.konecta_wfm.konecta_wfm.database.bootstrap import _iter_sql_statements, _strip_comments

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"

TABLES = ["users", "schedules", "attendance", "auxlogs", "leave_requests", "shift_swaps", "notifications"]

_CREATE_TABLE = re.compile(r"CREATE\s+TABLE\s+IF\s+NOT\s+EXISTS\s+(\w+)", re.I)
_FOREIGN_KEY = re.compile(
    r"FOREIGN\s+KEY\s*\(([^)]*)\)\s*REFERENCES\s+(\w+)\s*\([^)]*\)([^,]*)",
    re.I,
)
_REFERENTIAL_ACTION = re.compile(r"\bON\s+(DELETE|UPDATE)\s+(CASCADE|SET\s+NULL|SET\s+DEFAULT)", re.I)


def _create_tables(sql: str) -> dict[str, str]:
    tables = {}
    for stmt in _iter_sql_statements(_strip_comments(sql)):
        m = _CREATE_TABLE.match(stmt)
        if m:
            tables[m.group(1)] = stmt
    return tables


def _action_columns(stmt: str) -> set[str]:
    """Columns of foreign keys that cascade or set null/default."""
    columns = set()
    for cols, _, tail in _FOREIGN_KEY.findall(stmt):
        if _REFERENTIAL_ACTION.search(tail):
            columns.update(c.strip(" `") for c in cols.split(","))
    return columns


def _check_columns(stmt: str) -> set[str]:
    columns = set()
    for m in re.finditer(r"\bCHECK\s*\(", stmt, re.I):
        depth, i = 1, m.end()
        while depth and i < len(stmt):
            depth += {"(": 1, ")": -1}.get(stmt[i], 0)
            i += 1
        columns.update(re.findall(r"[A-Za-z_]\w*", stmt[m.end() : i - 1]))
    return columns


def test_schema_creates_every_table_in_dependency_order():
    tables = _create_tables(SCHEMA_PATH.read_text(encoding="utf-8"))

    assert list(tables) == TABLES
    for position, (name, stmt) in enumerate(tables.items()):
        for _, referenced, _ in _FOREIGN_KEY.findall(stmt):
            assert referenced in TABLES[: position + 1], f"{name} references {referenced} before it exists"


def test_no_check_constraint_on_cascading_foreign_key_columns():
    # MySQL 8 refuses CHECK constraints over columns used by FK referential actions.
    for name, stmt in _create_tables(SCHEMA_PATH.read_text(encoding="utf-8")).items():
        clash = _check_columns(stmt) & _action_columns(stmt)
        assert not clash, f"{name}: CHECK uses {sorted(clash)}"


def test_clash_detection_catches_check_on_cascading_columns():
    stmt = """
    CREATE TABLE IF NOT EXISTS pairs (
        a_id INT NOT NULL,
        b_id INT NOT NULL,
        CONSTRAINT fk_a FOREIGN KEY (a_id) REFERENCES users(user_id) ON DELETE CASCADE,
        CONSTRAINT fk_b FOREIGN KEY (b_id) REFERENCES users(user_id),
        CONSTRAINT chk_pairs CHECK ((a_id <> b_id))
    )
    """

    assert _action_columns(stmt) == {"a_id"}
    assert _check_columns(stmt) & _action_columns(stmt) == {"a_id"}
