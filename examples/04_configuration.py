"""
Example 04: Configuration from the Environment

This example demonstrates building a connection from DB_* variables and
resolving entity classes by short name through DEFAULT_NAMESPACE.
"""

from row_record import ConnectionConfig, Environment, Mapper, open_handle
import sys
import tempfile
from pathlib import Path


ENTITY_MODULE = '''
from row_record import Entity


class Note(Entity):
    __table__ = "notes"

    id: int | None = None
    body: str = ""
'''


def main():
    # Lay out an application package with an entity module
    app_root = Path(tempfile.mkdtemp())
    package = app_root / "notes_app"
    package.mkdir()
    (package / "__init__.py").write_text("")
    (package / "entity.py").write_text(ENTITY_MODULE)
    sys.path.insert(0, str(app_root))

    # Values normally come from os.environ or a .env file
    env = Environment(values={
        "DB_DRIVER": "sqlite",
        "DB_NAME": ":memory:",
        "DEFAULT_NAMESPACE": "notes_app",
    })

    print("=== Configuration ===\n")
    config = ConnectionConfig.from_environment(env)
    print(f"Config: driver={config.driver} database={config.database}\n")

    with open_handle(config) as handle:
        handle.execute("CREATE TABLE notes (id INTEGER PRIMARY KEY AUTOINCREMENT, body TEXT)", commit=True)

        notes = Mapper.model(handle, "Note", environment=env)
        print(f"Resolved entity: {notes.entity_class.__module__}.{notes.entity_class.__name__}")

        notes.save(notes.entity_class(body="remember the milk"))
        print(f"Saved notes: {notes.find_all()}")


if __name__ == "__main__":
    main()
