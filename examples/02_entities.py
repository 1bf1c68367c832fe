"""
Example 02: Entity Features

This example demonstrates custom accessors, structured fields and
mixins excluded from persistence.
"""

from row_record import ConnectionConfig, Entity, Mapper, open_handle, persisted_fields


class Audited:
    """Mixin carrying in-memory bookkeeping that is never saved."""
    exclude_from_persistence = True

    audit_note: str = ""


class Product(Audited, Entity):
    """Product entity with a formatted price getter"""
    __table__ = "product"

    id: int | None = None
    name: str = ""
    price: float = 0.0
    tags: list[str] = []
    created_at: str | None = None

    def get_price(self, persisting: bool = False):
        # raw number for the database, display text everywhere else
        return self.price if persisting else f"${self.price:.2f}"

    def set_name(self, value: str) -> None:
        self.name = value.title()


def main():
    handle = open_handle(ConnectionConfig(driver="sqlite", database=":memory:"))
    handle.execute(
        "CREATE TABLE product (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, "
        "price REAL, tags TEXT, created_at TEXT)",
        commit=True,
    )
    products = Mapper(handle, Product)

    print("=== Entity Features ===\n")
    print(f"Persisted fields: {persisted_fields(Product)}\n")

    lamp = Product(name="desk lamp", price=24.5, tags=["lighting", "office"])
    lamp.audit_note = "imported from spreadsheet"
    lamp.id = products.save(lamp)

    # Rows are hydrated through setters, so set_name runs on the way back in
    loaded = products.find_by_id(lamp.id)
    print(f"Name (through set_name): {loaded.name}")
    print(f"Price (through get_price): {loaded.get_price()}")
    print(f"Tags (decoded from JSON): {loaded.tags}")
    print(f"Audit note (not persisted): {loaded.audit_note!r}\n")

    # set_attributes is a chainable bulk assignment with the same rules
    loaded.set_attributes({"name": "floor lamp", "price": 89})
    products.save(loaded)
    print(f"Updated: {products.find_by_id(lamp.id)}")

    handle.close()


if __name__ == "__main__":
    main()
