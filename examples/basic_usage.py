#!/usr/bin/env python3
"""
Basic usage example for the table store.

This example walks through:
1. Setting up configuration
2. Sanitizing a user-supplied partition key
3. Inserting records (and seeing a conflict come back as False)
4. Reading a whole partition and a single record
5. Deleting by composite key
"""

import logging

from table_store import PartitionedTableStore, Record, TableStoreConfig


def main():
    """Demonstrate basic usage of the table store."""
    logging.basicConfig(level=logging.INFO)

    # 1. Configure the store (use TableStoreConfig.from_env() against AWS)
    print("1. Setting up configuration...")
    config = TableStoreConfig.for_local_development()
    store = PartitionedTableStore(config)

    # 2. Partition keys often come from user input
    print("2. Sanitizing partition key...")
    account = store.sanitize_key("joint/checking#2024")
    print(f"   Partition key: {account}")

    # 3. Insert a few expenses
    print("3. Inserting expenses...")
    for i, (description, amount) in enumerate([("coffee", 3.2), ("rent", 950.0), ("books", 41.5)], start=1):
        record = Record(PartitionKey=account, RowKey=f"{i:04d}", description=description, amount=amount)
        print(f"   {record.RowKey}: inserted={store.insert('expenses', record)}")

    duplicate = Record(PartitionKey=account, RowKey="0001", description="coffee again", amount=3.2)
    print(f"   duplicate 0001: inserted={store.insert('expenses', duplicate)}")

    # 4. Read back
    print("4. Reading expenses...")
    for expense in store.get_all("expenses", account):
        print(f"   {expense.RowKey}: {expense.description} {expense.amount}")

    rent = store.get_one("expenses", account, "0002")
    print(f"   single lookup: {rent.description if rent else None}")

    # 5. Delete
    print("5. Deleting expense 0003...")
    print(f"   deleted={store.delete('expenses', account, '0003')}")
    print(f"   deleted again={store.delete('expenses', account, '0003')}")


if __name__ == "__main__":
    main()
