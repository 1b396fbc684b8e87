"""
Example 01: Basic Fetching

This example demonstrates row, scalar and bulk fetching with type conversion.
"""

import sqlite3

from row_set import ColumnType, ResultSet


def main():
    conn = sqlite3.connect(":memory:")
    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            active TEXT NOT NULL
        )
    """)
    conn.execute("INSERT INTO users (name, active) VALUES ('Alice', '1')")
    conn.execute("INSERT INTO users (name, active) VALUES ('Bob', '0')")
    conn.commit()

    with ResultSet.from_query("sqlite", conn, "SELECT id, name, active FROM users") as result:
        result.set_conversion("active", ColumnType.BOOL)

        print("=== Field names ===")
        print(result.field_names())

        print("\n=== Row by row ===")
        row = result.fetch_row()
        while row is not None:
            print(row)
            row = result.fetch_row()

        print("\n=== All rows ===")
        for row in result.fetch_all():
            print(row)

        print("\n=== id -> name pairs ===")
        print(result.fetch_pairs("id", "name"))

    with ResultSet.from_query("sqlite", conn, "SELECT COUNT(*) FROM users") as result:
        print("\n=== Scalar ===")
        print(result.fetch_scalar())

    conn.close()


if __name__ == "__main__":
    main()
