"""
Statement Ledger - canonical bank-statement transactions

Turns transaction fields extracted from heterogeneous bank statements
into a canonical, CSV-ready record and annotates it with a spending
category through a pluggable categorizer.
"""

__version__ = "0.1.0"
