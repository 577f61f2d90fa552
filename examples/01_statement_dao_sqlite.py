"""Statement-keyed CRUD example for statement_dao StatementDao."""

from __future__ import annotations

import logging
import sqlite3
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "statement_dao").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from statement_dao import Database, StatementDao


@dataclass
class User:
    id: Optional[int] = None
    email: str = ""
    age: Optional[int] = None


STATEMENTS = {
    "create": "CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT NOT NULL, age INTEGER)",
    "select": "SELECT id, email, age FROM users WHERE id = :id",
    "select_older": "SELECT id, email, age FROM users WHERE age > ? ORDER BY id",
    "insert": "INSERT INTO users (id, email, age) VALUES (:id, :email, :age)",
    "update": "UPDATE users SET email = :email, age = :age WHERE id = :id",
    "delete": "DELETE FROM users WHERE id = :id",
}


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # 1) Wrap a DB-API connection and configure the DAO.
    conn = sqlite3.connect(":memory:")
    dao = StatementDao[User](User, db=Database(conn), statements=STATEMENTS)

    try:
        # 2) Run DDL by statement key.
        dao.update_by_statement("create")

        # 3) Insert with a model, a mapping and a positional list.
        dao.insert(User(id=1, email="alice@example.com", age=25))
        dao.insert({"id": 2, "email": "bob@example.com", "age": 30})
        dao.execute("INSERT INTO users (id, email, age) VALUES (?, ?, ?)", [3, "carol@example.com", 41])
        conn.commit()

        # 4) Select by default key and by explicit key.
        print("By id:", dao.select({"id": 2}))
        print("Older than 28:", dao.select_by_statement("select_older", [28]))

        # 5) Update and delete return affected-row counts.
        print("Updated:", dao.update(User(id=1, email="alice@example.org", age=26)))
        print("Deleted:", dao.delete({"id": 3}))
        conn.commit()

        # 6) Untyped DAO returns plain dicts.
        raw = StatementDao(db=dao.db, statements=STATEMENTS)
        print("Raw rows:", raw.select_sql("SELECT id, email FROM users ORDER BY id"))
    finally:
        conn.close()


if __name__ == "__main__":
    main()
