"""
Example 03: Raw Predicates and Raw Queries

This example demonstrates LIKE/BETWEEN/REGEXP criteria values, find_by_sql
result shaping, and the guards that reject unsafe SQL text.
"""

from row_record import (
    ConnectionConfig,
    Entity,
    Mapper,
    SQLSanitizationError,
    SQLSanitizer,
    open_handle,
)


class Order(Entity):
    """Order entity"""
    __table__ = "orders"

    id: int | None = None
    customer: str = ""
    reference: str = ""
    amount: float = 0.0


def main():
    handle = open_handle(ConnectionConfig(driver="sqlite", database=":memory:"))
    handle.execute(
        "CREATE TABLE orders (id INTEGER PRIMARY KEY AUTOINCREMENT, customer TEXT, "
        "reference TEXT, amount REAL)",
        commit=True,
    )
    orders = Mapper(handle, Order)
    for customer, reference, amount in [
        ("alice", "INV-001", 120.0),
        ("bob", "INV-002", 35.5),
        ("alice", "CRN-003", 12.25),
        ("carol", "INV-004", 410.0),
    ]:
        orders.save(Order(customer=customer, reference=reference, amount=amount))

    print("=== Raw Predicates ===\n")
    invoices = orders.find_all({"reference": "LIKE 'INV-%'"})
    print(f"LIKE: {[o.reference for o in invoices]}")
    mid_range = orders.find_all({"amount": "BETWEEN 30 AND 200"})
    print(f"BETWEEN: {[o.reference for o in mid_range]}")
    credit_notes = orders.find_all({"reference": "REGEXP '^CRN-[0-9]+$'"})
    print(f"REGEXP: {[o.reference for o in credit_notes]}\n")

    try:
        orders.find_all({"reference": "LIKE 'x'; DELETE FROM orders"})
    except SQLSanitizationError as e:
        print(f"Rejected predicate: {e}\n")

    print("=== Raw Queries ===\n")
    totals = orders.find_by_sql(
        "SELECT customer, SUM(amount) AS total FROM orders GROUP BY customer",
        {"field": "total", "index": "customer"},
    )
    print(f"Totals per customer: {totals}")

    try:
        orders.find_by_sql("DELETE FROM orders")
    except SQLSanitizationError as e:
        print(f"Rejected query: {e}")

    # A mapper can opt into other statements with its own guard
    admin = Mapper(handle, Order, sql_sanitizer=SQLSanitizer(allowed_verbs=frozenset({"SELECT", "PRAGMA"})))
    columns = admin.find_by_sql("PRAGMA table_info(orders)", {"field": "name"})
    print(f"Columns via PRAGMA: {columns}")

    handle.close()


if __name__ == "__main__":
    main()
