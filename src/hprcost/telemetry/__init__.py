"""Calculation run logging."""

from .runs import SCHEMA_VERSION, append_run_record, calculation_record, read_run_records

__all__ = ["SCHEMA_VERSION", "append_run_record", "calculation_record", "read_run_records"]
