"""CSV input for record, metadata and event exports.

Usage:
    from rcformat.io import read_records_csv, read_data_dictionary, read_event_map
"""

from rcformat.io.csv_reader import read_data_dictionary, read_event_map, read_records_csv

__all__ = [
    "read_records_csv",
    "read_data_dictionary",
    "read_event_map",
]
