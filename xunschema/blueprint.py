"""Typed column constructors for describing a table's structure."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from . import types as dbal
from .table import Column, Table


class Blueprint(Table):
    """A table description with one constructor per column type.

    Each constructor adds the column, or queues a change if a column with
    that name already exists, and returns it for further modification.
    """

    def _column(self, name: str, typ: str, **limits: int) -> Column:
        column = self._new_column(name).set_type(typ)
        for key, value in limits.items():
            setattr(column.base, key, value)
        return column

    def _sized(self, name: str, typ: str, maximum: int, default: int,
               length: Optional[int]) -> Column:
        column = self._column(name, typ, max_length=maximum, default_length=default)
        column.set_length(default if length is None else length)
        self._put_column(column)
        return column

    def _timed(self, name: str, typ: str, precision: Optional[int]) -> Column:
        column = self._column(
            name, typ, max_date_time_precision=6, default_date_time_precision=0
        )
        column.set_date_time_precision(0 if precision is None else precision)
        self._put_column(column)
        return column

    def _numeric(self, name: str, typ: str, max_precision: int, max_scale: int,
                 default_precision: int, default_scale: int,
                 total: Optional[int], places: Optional[int]) -> Column:
        column = self._column(
            name,
            typ,
            max_precision=max_precision,
            max_scale=max_scale,
            default_precision=default_precision,
            default_scale=default_scale,
        )
        column.set_precision(default_precision if total is None else total)
        column.set_scale(default_scale if places is None else places)
        self._put_column(column)
        return column

    def _plain(self, name: str, typ: str) -> Column:
        column = self._column(name, typ)
        self._put_column(column)
        return column

    # character types

    def string(self, name: str, length: Optional[int] = None) -> Column:
        """A variable-length string, 200 characters by default, at most 65535."""
        return self._sized(name, "string", 65535, 200, length)

    def char(self, name: str, length: Optional[int] = None) -> Column:
        """A fixed-length string, 10 characters by default, at most 30."""
        return self._sized(name, "char", 30, 10, length)

    def text(self, name: str) -> Column:
        return self._plain(name, "text")

    def medium_text(self, name: str) -> Column:
        return self._plain(name, "mediumText")

    def long_text(self, name: str) -> Column:
        return self._plain(name, "longText")

    # binary types

    def binary(self, name: str, length: Optional[int] = None) -> Column:
        """A binary column, 255 bytes by default, at most 65535."""
        return self._sized(name, "binary", 65535, 255, length)

    # date and time types

    def date(self, name: str) -> Column:
        return self._plain(name, "date")

    def date_time(self, name: str, precision: Optional[int] = None) -> Column:
        return self._timed(name, "dateTime", precision)

    def date_time_tz(self, name: str, precision: Optional[int] = None) -> Column:
        return self._timed(name, "dateTimeTz", precision)

    def time(self, name: str, precision: Optional[int] = None) -> Column:
        return self._timed(name, "time", precision)

    def time_tz(self, name: str, precision: Optional[int] = None) -> Column:
        return self._timed(name, "timeTz", precision)

    def timestamp(self, name: str, precision: Optional[int] = None) -> Column:
        return self._timed(name, "timestamp", precision)

    def timestamp_tz(self, name: str, precision: Optional[int] = None) -> Column:
        return self._timed(name, "timestampTz", precision)

    # integer types

    def tiny_integer(self, name: str) -> Column:
        return self._plain(name, "tinyInteger")

    def unsigned_tiny_integer(self, name: str) -> Column:
        return self.tiny_integer(name).unsigned()

    def tiny_increments(self, name: str) -> Column:
        return self.unsigned_tiny_integer(name).auto_increment()

    def small_integer(self, name: str) -> Column:
        return self._plain(name, "smallInteger")

    def unsigned_small_integer(self, name: str) -> Column:
        return self.small_integer(name).unsigned()

    def small_increments(self, name: str) -> Column:
        return self.unsigned_small_integer(name).auto_increment()

    def integer(self, name: str) -> Column:
        return self._plain(name, "integer")

    def unsigned_integer(self, name: str) -> Column:
        return self.integer(name).unsigned()

    def increments(self, name: str) -> Column:
        return self.unsigned_integer(name).auto_increment()

    def big_integer(self, name: str) -> Column:
        return self._plain(name, "bigInteger")

    def unsigned_big_integer(self, name: str) -> Column:
        return self.big_integer(name).unsigned()

    def big_increments(self, name: str) -> Column:
        return self.unsigned_big_integer(name).auto_increment()

    def id(self, name: str) -> Column:
        """An auto-incrementing unsigned big integer primary key."""
        return self.big_increments(name).primary()

    def foreign_id(self, name: str) -> Column:
        return self.unsigned_big_integer(name)

    # fixed and floating point types

    def decimal(self, name: str, total: Optional[int] = None,
                places: Optional[int] = None) -> Column:
        """A decimal, 10 digits with 2 places by default."""
        return self._numeric(name, "decimal", 65, 30, 10, 2, total, places)

    def unsigned_decimal(self, name: str, total: Optional[int] = None,
                         places: Optional[int] = None) -> Column:
        return self.decimal(name, total, places).unsigned()

    def float(self, name: str, total: Optional[int] = None,
              places: Optional[int] = None) -> Column:
        """A single-precision float, 10 digits with 2 places by default."""
        return self._numeric(name, "float", 23, 22, 10, 2, total, places)

    def unsigned_float(self, name: str, total: Optional[int] = None,
                       places: Optional[int] = None) -> Column:
        return self.float(name, total, places).unsigned()

    def double(self, name: str, total: Optional[int] = None,
               places: Optional[int] = None) -> Column:
        """A double-precision float, 24 digits with 2 places by default."""
        return self._numeric(name, "double", 53, 52, 24, 2, total, places)

    def unsigned_double(self, name: str, total: Optional[int] = None,
                        places: Optional[int] = None) -> Column:
        return self.double(name, total, places).unsigned()

    # other types

    def boolean(self, name: str) -> Column:
        return self._plain(name, "boolean")

    def enum(self, name: str, options: Iterable[str]) -> Column:
        column = self._column(name, "enum")
        column.base.option = list(options)
        self._put_column(column)
        return column

    def json(self, name: str) -> Column:
        return self._plain(name, "json")

    def jsonb(self, name: str) -> Column:
        return self._plain(name, "jsonb")

    def uuid(self, name: str) -> Column:
        return self._plain(name, "uuid")

    def ip_address(self, name: str) -> Column:
        return self._plain(name, "ipAddress")

    def mac_address(self, name: str) -> Column:
        return self._plain(name, "macAddress")

    def year(self, name: str) -> Column:
        return self._plain(name, "year")

    # conventional column sets

    def timestamps(self, precision: Optional[int] = None) -> dict[str, Column]:
        """Add indexed ``created_at`` (not null, defaults to now) and ``updated_at``."""
        return {
            "created_at": self.timestamp("created_at", precision)
            .not_null()
            .set_default_raw("NOW()")
            .index(),
            "updated_at": self.timestamp("updated_at", precision).null().index(),
        }

    def timestamps_tz(self, precision: Optional[int] = None) -> dict[str, Column]:
        """Time-zone aware variant of :meth:`timestamps`."""
        return {
            "created_at": self.timestamp_tz("created_at", precision)
            .not_null()
            .set_default_raw("NOW()")
            .index(),
            "updated_at": self.timestamp_tz("updated_at", precision).null().index(),
        }

    def drop_timestamps(self) -> None:
        self.drop_column("created_at", "updated_at")

    def drop_timestamps_tz(self) -> None:
        self.drop_timestamps()

    def soft_deletes(self, precision: Optional[int] = None) -> Column:
        """Add a nullable, indexed ``deleted_at`` timestamp."""
        return self.timestamp("deleted_at", precision).null().index()

    def soft_deletes_tz(self, precision: Optional[int] = None) -> Column:
        return self.timestamp_tz("deleted_at", precision).null().index()

    def drop_soft_deletes(self) -> None:
        self.drop_column("deleted_at")

    def drop_soft_deletes_tz(self) -> None:
        self.drop_soft_deletes()


def new_table(name: str, builder: Any) -> Blueprint:
    """Create a blueprint named with the builder's table prefix.

    The builder supplies ``conn.option.prefix``, ``schema`` and
    ``database``; with no builder the table has no prefix.
    """
    if builder is None:
        prefix, schema, database = "", "", ""
    else:
        prefix = builder.conn.option.prefix
        schema = builder.schema
        database = builder.database
    base = dbal.new_table(f"{prefix}{name}", schema, database)
    return Blueprint(name, prefix=prefix, builder=builder, base=base)