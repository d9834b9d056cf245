"""
Table acquisition and serialization helpers.

These produce or consume the header-first grid of strings that
TableValidator checks; validation itself does not depend on them.
"""

from tablecheck.io.tables import read_delimited, to_delimited, read_table, write_xlsx, rename_columns
from tablecheck.io.records import generate, tabulate

__all__ = [
    'read_delimited',
    'to_delimited',
    'read_table',
    'write_xlsx',
    'rename_columns',
    'generate',
    'tabulate',
]
