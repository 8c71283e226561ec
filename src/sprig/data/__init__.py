"""Async data access and table-backed CRUD.

``Database`` speaks SQL and returns dict rows; ``CrudModel`` and
``CrudController`` build the usual REST resource on top of it.
"""

from sprig.data.controller import CrudController, read_json
from sprig.data.database import Database, Row
from sprig.data.errors import DataError, DriverNotInstalledError, QueryError
from sprig.data.model import CrudModel, coerce_id, filter_fillable

__all__ = [
    "CrudController",
    "CrudModel",
    "DataError",
    "Database",
    "DriverNotInstalledError",
    "QueryError",
    "Row",
    "coerce_id",
    "filter_fillable",
    "read_json",
]
