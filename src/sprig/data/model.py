"""Table-backed CRUD models.

Subclass ``CrudModel`` once per table::

    class Users(CrudModel):
        table = "users"
        fillable = frozenset({"name", "email", "age"})
        rules = {
            "name": ["required", "string", "max:120"],
            "email": ["required", "email"],
            "age": ["integer", "min:18"],
        }

    users = Users(db)
    user = await users.create({"name": "Ada", "email": "ada@example.com"})

Records are plain dicts. Writes validate against ``rules`` first and
raise ``ValidationFailed`` without touching the database; keys outside
``fillable`` are dropped before any SQL is built.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, ClassVar

from sprig.data.database import Database, Row
from sprig.data.errors import DataError, QueryError
from sprig.errors import ConfigurationError, RecordNotFound, ValidationFailed
from sprig.validation import RuleSet, Validator

logger = logging.getLogger("sprig.data")

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(owner: str, kind: str, name: str) -> None:
    if not IDENTIFIER_RE.match(name):
        msg = f"{owner}.{kind} must be a plain SQL identifier, got {name!r}"
        raise ConfigurationError(msg)


def filter_fillable(data: Mapping[str, Any], fillable: frozenset[str]) -> dict[str, Any]:
    """Keep only the keys of *data* that appear in *fillable*, in input order."""
    return {key: value for key, value in data.items() if key in fillable}


def coerce_id(value: Any) -> Any:
    """Path parameters arrive as strings; decimal strings become ints."""
    if isinstance(value, str) and value.isdecimal():
        return int(value)
    return value


def _bind(value: Any) -> Any:
    # arrays and objects are stored as JSON text
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False)
    return value


class CrudModel:
    """Generic list/get/create/update/delete over one table.

    Class attributes:
        table: Table name (required).
        primary_key: Primary key column, ``"id"`` by default.
        fillable: Columns a write may set. Anything else is dropped.
        rules: Rule set validated on ``create`` and ``update``.
        strict_rules: Raise on unknown rule names instead of skipping them.

    Identifiers are checked when the subclass is defined, so they can be
    interpolated into SQL safely. Values are always bound as parameters.
    """

    table: ClassVar[str] = ""
    primary_key: ClassVar[str] = "id"
    fillable: ClassVar[frozenset[str]] = frozenset()
    rules: ClassVar[RuleSet] = {}
    strict_rules: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.table:
            _check_identifier(cls.__name__, "table", cls.table)
        _check_identifier(cls.__name__, "primary_key", cls.primary_key)
        cls.fillable = frozenset(cls.fillable)
        for column in cls.fillable:
            _check_identifier(cls.__name__, "fillable", column)

    def __init__(self, db: Database, *, validator: Validator | None = None) -> None:
        if not self.table:
            msg = f"{type(self).__name__} must set a table name"
            raise ConfigurationError(msg)
        self.db = db
        self.validator = validator or Validator(self.rules, strict=self.strict_rules)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self.table!r})"

    # -- Reads --

    async def find_all(self) -> list[Row]:
        """Every record, ordered by primary key."""
        sql = f"SELECT * FROM {self.table} ORDER BY {self.primary_key}"
        try:
            return await self.db.fetch(sql)
        except DataError as exc:
            msg = f"Error getting records: {exc}"
            raise QueryError(msg) from exc

    async def find_by_id(self, record_id: Any) -> Row | None:
        """The record with primary key *record_id*, or ``None``."""
        sql = f"SELECT * FROM {self.table} WHERE {self.primary_key} = {self.db.placeholder(1)}"
        try:
            return await self.db.fetch_one(sql, coerce_id(record_id))
        except DataError as exc:
            msg = f"Error getting record: {exc}"
            raise QueryError(msg) from exc

    async def get_or_404(self, record_id: Any) -> Row:
        """Like ``find_by_id`` but raises ``RecordNotFound`` for a missing id."""
        record = await self.find_by_id(record_id)
        if record is None:
            raise RecordNotFound
        return record

    # -- Writes --

    def validate(self, data: Mapping[str, Any]) -> None:
        """Raise ``ValidationFailed`` if *data* breaks any rule."""
        result = self.validator.validate(data)
        if not result:
            raise ValidationFailed(result.errors)

    def filter_fillable(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return filter_fillable(data, self.fillable)

    async def create(self, data: Mapping[str, Any]) -> Row:
        """Validate, insert, and return the stored record as read back."""
        self.validate(data)
        values = self.filter_fillable(data)
        if not values:
            raise ValidationFailed({"data": ["No fillable fields were provided"]})

        columns = ", ".join(values)
        marks = ", ".join(self.db.placeholder(i) for i in range(1, len(values) + 1))
        sql = (
            f"INSERT INTO {self.table} ({columns}) VALUES ({marks}) "
            f"RETURNING {self.primary_key}"
        )
        try:
            async with self.db.transaction():
                new_id = await self.db.fetch_val(sql, *(_bind(v) for v in values.values()))
                record = await self.find_by_id(new_id)
        except DataError as exc:
            msg = f"Error creating record: {exc}"
            raise QueryError(msg) from exc
        if record is None:
            msg = f"Error creating record: {self.table} row {new_id!r} vanished after insert"
            raise QueryError(msg)
        logger.debug("created %s %s=%r", self.table, self.primary_key, new_id)
        return record

    async def update(self, record_id: Any, data: Mapping[str, Any]) -> Row:
        """Validate and update an existing record; return it as read back.

        Raises ``RecordNotFound`` before validating when the id is unknown.
        Only the fillable keys present in *data* are written; with none
        present the record is returned unchanged.
        """
        pk = coerce_id(record_id)
        try:
            async with self.db.transaction():
                await self.get_or_404(pk)
                self.validate(data)
                values = self.filter_fillable(data)
                if values:
                    assignments = ", ".join(
                        f"{column} = {self.db.placeholder(i)}"
                        for i, column in enumerate(values, start=1)
                    )
                    where = f"{self.primary_key} = {self.db.placeholder(len(values) + 1)}"
                    sql = f"UPDATE {self.table} SET {assignments} WHERE {where}"
                    await self.db.execute(sql, *(_bind(v) for v in values.values()), pk)
                record = await self.get_or_404(pk)
        except DataError as exc:
            msg = f"Error updating record: {exc}"
            raise QueryError(msg) from exc
        logger.debug("updated %s %s=%r", self.table, self.primary_key, pk)
        return record

    async def delete(self, record_id: Any) -> bool:
        """Delete an existing record. True when a row was removed."""
        pk = coerce_id(record_id)
        sql = f"DELETE FROM {self.table} WHERE {self.primary_key} = {self.db.placeholder(1)}"
        try:
            async with self.db.transaction():
                await self.get_or_404(pk)
                removed = await self.db.execute(sql, pk)
        except DataError as exc:
            msg = f"Error deleting record: {exc}"
            raise QueryError(msg) from exc
        logger.debug("deleted %s %s=%r", self.table, self.primary_key, pk)
        return removed > 0

    async def count(self) -> int:
        """Number of records in the table."""
        try:
            return int(await self.db.fetch_val(f"SELECT COUNT(*) FROM {self.table}"))
        except DataError as exc:
            msg = f"Error getting records: {exc}"
            raise QueryError(msg) from exc
