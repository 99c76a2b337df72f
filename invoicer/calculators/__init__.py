"""
Furniture costing engine.

Pure Python arithmetic. No I/O, no database.
Given an item's costing fields and the rate table in effect, produce the
unit price, a human-readable description, a dimensions string and, for
cabinets, a materials bill.
"""
