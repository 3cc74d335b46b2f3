"""Pure domain layer: item records, transactions, categories, alerts, clock."""
