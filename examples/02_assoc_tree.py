"""
Example 02: Associative Trees

This example demonstrates reshaping joined rows into nested structures
with associative descriptors.
"""

import sqlite3
from pprint import pprint

from row_set import ResultSet


def main():
    conn = sqlite3.connect(":memory:")
    conn.execute("""
        CREATE TABLE orders (
            customer TEXT NOT NULL,
            order_no TEXT NOT NULL,
            item TEXT NOT NULL
        )
    """)
    conn.executemany(
        "INSERT INTO orders VALUES (?, ?, ?)",
        [
            ("alice", "A-1", "pen"),
            ("alice", "A-1", "ink"),
            ("alice", "A-2", "pad"),
            ("bob", "B-1", "pen"),
        ],
    )
    conn.commit()

    sql = "SELECT customer, order_no, item FROM orders ORDER BY customer, order_no"
    with ResultSet.from_query("sqlite", conn, sql) as result:
        print("=== customer,* : rows grouped per customer ===")
        pprint(result.fetch_assoc("customer,*"))

        print("\n=== customer,order_no,* : two-level grouping ===")
        pprint(result.fetch_assoc("customer,order_no,*"))

        print("\n=== customer,#,order_no,* : customer record with orders nested ===")
        pprint(result.fetch_assoc("customer,#,order_no,*"))

        print("\n=== First two rows via the iterator ===")
        for row in result.iterate(limit=2):
            print(row)

    conn.close()


if __name__ == "__main__":
    main()
