"""
Example 01: Basic Mapper Usage

This example demonstrates saving, finding, counting and deleting entities
with RowRecord's Mapper against a temporary SQLite database.
"""

from row_record import ConnectionConfig, Entity, Mapper, open_handle
import tempfile
from pathlib import Path


class User(Entity):
    """User entity"""
    __table__ = "users"

    id: int | None = None
    name: str = ""
    email: str = ""
    active: bool = True
    created_at: str | None = None
    updated_at: str | None = None


def main():
    # Create a temporary database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    config = ConnectionConfig(driver="sqlite", database=db_path)
    handle = open_handle(config)
    handle.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            active INTEGER DEFAULT 1,
            created_at TEXT,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """, commit=True)

    users = Mapper(handle, User)

    print("=== Basic Mapper Usage ===\n")

    # save: INSERT when the entity has no identity yet
    for name in ("Alice", "Bob", "Charlie"):
        user_id = users.save(User(name=name, email=f"{name.lower()}@example.com"))
        print(f"Inserted {name} with id {user_id}")
    print()

    # save: UPDATE when the identity is set
    charlie = users.find({"name": "Charlie"})
    charlie.active = False
    users.save(charlie)
    print(f"Deactivated: {users.find_by_id(charlie.id)}\n")

    # find_all with clauses
    active = users.find_all({"active": True}, {"orderBy": "name DESC"})
    print(f"find_all result ({len(active)} rows):")
    for user in active:
        print(f"  - {user.name} ({user.email})")
    print()

    # find_all keyed by a field
    by_email = users.find_all({}, {"index": "email"})
    print(f"Indexed by email: {sorted(by_email)}\n")

    # count
    print(f"count: {users.count()} total users, {users.count({'active': True})} active\n")

    # delete
    users.delete({"id": [charlie.id]})
    print(f"After delete: {users.count()} users")

    # Clean up
    handle.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
