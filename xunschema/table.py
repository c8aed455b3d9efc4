"""Schema-level tables, columns, indexes and primary keys.

Every change made through a :class:`Table` is recorded as a pending
command on the underlying table description; the success and fail
callbacks of each command keep the in-memory maps in step with what the
database accepted.
"""

from __future__ import annotations

from typing import Any, Optional

from . import types as dbal


class _Wrapper:
    """Attribute access falls through to the wrapped description."""

    __slots__ = ("base", "table")

    def __init__(self, base: Any, table: "Table") -> None:
        object.__setattr__(self, "base", base)
        object.__setattr__(self, "table", table)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name in _Wrapper.__slots__:
            raise AttributeError(name)
        return getattr(self.base, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _Wrapper.__slots__:
            object.__setattr__(self, name, value)
        else:
            setattr(self.base, name, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.base.name!r})"


class Column(_Wrapper):
    """A column of a schema table; chainable modifiers return the column."""

    __slots__ = ()

    def has_index(self, name: str) -> bool:
        """Return True if the column belongs to the index with this name."""
        return any(index.name == name for index in self.base.indexes)

    def unique(self) -> "Column":
        """Add a unique index named ``<column>_unique``."""
        name = f"{self.name}_unique"
        if not self.has_index(name):
            self.table.add_unique(name, self.name)
        return self

    def primary(self) -> "Column":
        """Make the column the primary key."""
        if self.base.is_primary:
            return self
        self.base.is_primary = True
        self.table.add_primary(self.name)
        return self

    def index(self) -> "Column":
        """Add an index named ``<column>_index``."""
        name = f"{self.name}_index"
        if not self.has_index(name):
            self.table.add_index(name, self.name)
        return self

    def unsigned(self) -> "Column":
        self.base.is_unsigned = True
        return self

    def null(self) -> "Column":
        self.base.nullable = True
        return self

    def not_null(self) -> "Column":
        self.base.nullable = False
        return self

    def auto_increment(self) -> "Column":
        self.base.extra = "AutoIncrement"
        return self

    def set_length(self, length: int) -> "Column":
        """Set the length; zero or too large a value selects the default."""
        if self.base.max_length == 0:
            return self
        if length > self.base.max_length or length == 0:
            length = self.base.default_length
        self.base.length = length
        return self

    def set_type(self, typ: str) -> "Column":
        self.base.type = typ
        return self

    def set_comment(self, comment: str) -> "Column":
        self.base.comment = comment
        return self

    def set_default(self, value: Any) -> "Column":
        self.base.default = value
        return self

    def set_default_raw(self, value: str) -> "Column":
        self.base.default_raw = value
        return self

    def set_date_time_precision(self, precision: int) -> "Column":
        """Set the fractional-seconds precision of a date/time column."""
        base = self.base
        if base.max_date_time_precision == 0:
            return self
        if precision > base.max_date_time_precision or precision == 0:
            precision = base.default_date_time_precision
        base.date_time_precision = precision
        return self

    def set_precision(self, precision: int) -> "Column":
        """Set the total digits, keeping precision plus scale within bounds."""
        base = self.base
        if base.max_precision == 0:
            return self
        if precision > base.max_precision or precision == 0:
            precision = base.default_precision
        if base.scale is not None and base.scale + precision > base.max_precision:
            precision = base.max_precision - base.scale
        base.precision = precision
        return self

    def set_scale(self, scale: int) -> "Column":
        """Set the decimal places, never exceeding the precision."""
        base = self.base
        if base.default_scale == 0:
            return self
        if scale > base.max_scale or scale == 0:
            scale = base.default_scale
        if base.precision is not None:
            if base.precision + scale > base.max_precision:
                scale = base.max_precision - base.precision
            if scale > base.precision:
                scale = base.precision
        base.scale = scale
        return self


class Index(_Wrapper):
    """An index of a schema table."""

    __slots__ = ()


class Primary(_Wrapper):
    """The primary key of a schema table."""

    __slots__ = ()


class Table:
    """A table being described, created or altered."""

    def __init__(
        self,
        name: str,
        prefix: str = "",
        builder: Any = None,
        base: Optional[dbal.Table] = None,
    ) -> None:
        self.name = name
        self.prefix = prefix
        self.builder = builder
        self.base = base if base is not None else dbal.new_table(f"{prefix}{name}", "", "")
        self.primary: Optional[Primary] = None
        self.column_names: list[str] = []
        self.column_map: dict[str, Column] = {}
        self.index_names: list[str] = []
        self.index_map: dict[str, Index] = {}

    def __repr__(self) -> str:
        return f"Table({self.full_name!r})"

    @property
    def full_name(self) -> str:
        """The table name with its prefix."""
        return self.base.table_name

    @property
    def commands(self) -> list[dbal.Command]:
        """The commands queued for this table."""
        return self.base.commands

    # columns

    def get_column(self, name: str) -> Optional[Column]:
        """Return the column with this name, or None."""
        return self.column_map.get(name)

    def has_column(self, *names: str) -> bool:
        """Return True if every given column exists."""
        return all(name in self.column_map for name in names)

    def drop_column(self, *names: str) -> None:
        """Queue the given columns to be dropped."""
        for name in names:
            self._command(
                "DropColumn",
                lambda name=name: self.column_map.pop(name, None),
                None,
                name,
            )

    def rename_column(self, old: str, new: str) -> Column:
        """Queue a column rename; raises KeyError for an unknown column."""
        column = self._require_column(old)
        column.name = new
        self.column_map[new] = column
        self._command(
            "RenameColumn",
            lambda: self.column_map.pop(old, None),
            lambda: self.column_map.pop(new, None),
            old,
            new,
        )
        return column

    def _require_column(self, name: str) -> Column:
        column = self.get_column(name)
        if column is None:
            raise KeyError(f"the column {name} does not exist in {self.full_name}")
        return column

    def _new_column(self, name: str) -> Column:
        return Column(self.base.new_column(name), self)

    def _push_column(self, column: Column) -> "Table":
        self.base.push_column(column.base)
        self.column_map[column.name] = column
        return self

    def _put_column(self, column: Column) -> "Table":
        if self.has_column(column.name):
            return self._change_column(column)
        return self._add_column(column)

    def _add_column(self, column: Column) -> "Table":
        self._push_column(column)
        name = column.name
        self._command(
            "AddColumn", None, lambda: self.column_map.pop(name, None), column.base
        )
        return self

    def _change_column(self, column: Column) -> "Table":
        name = column.name

        def success() -> None:
            self.column_map[name] = column

        self._command("ChangeColumn", success, None, column.base)
        return self

    # indexes

    def get_index(self, name: str) -> Optional[Index]:
        """Return the index with this name, or None."""
        return self.index_map.get(name)

    def has_index(self, *names: str) -> bool:
        """Return True if every given index exists."""
        return all(name in self.index_map for name in names)

    def add_index(self, key: str, *column_names: str) -> "Table":
        """Queue a plain index over the given columns."""
        return self._add_keyed_index(key, "index", column_names)

    def add_fulltext(self, key: str, *column_names: str) -> "Table":
        """Accept a fulltext index request over existing columns.

        No index is queued; raises KeyError for an unknown column.
        """
        for name in column_names:
            self._require_column(name)
        return self

    def add_unique(self, key: str, *column_names: str) -> "Table":
        """Queue a unique index over the given columns."""
        return self._add_keyed_index(key, "unique", column_names)

    def drop_index(self, *keys: str) -> None:
        """Queue the given indexes to be dropped."""
        for key in keys:
            self._command(
                "DropIndex",
                lambda key=key: self.index_map.pop(key, None),
                None,
                key,
            )

    def rename_index(self, old: str, new: str) -> Index:
        """Queue an index rename; raises KeyError for an unknown index."""
        index = self.get_index(old)
        if index is None:
            raise KeyError(f"the index {old} does not exist in {self.full_name}")
        index.name = new
        self.index_map[new] = index
        self._command(
            "RenameIndex",
            lambda: self.index_map.pop(old, None),
            lambda: self.index_map.pop(new, None),
            old,
            new,
        )
        return index

    def _add_keyed_index(self, key: str, kind: str, column_names: tuple[str, ...]) -> "Table":
        columns = [self._require_column(name) for name in column_names]
        index = self._new_index(key, *columns)
        index.type = kind
        self._push_index(index)
        self._command(
            "CreateIndex", None, lambda: self.index_map.pop(key, None), index.base
        )
        return self

    def _new_index(self, name: str, *columns: Column) -> Index:
        index = Index(self.base.new_index(name, *(c.base for c in columns)), self)
        for column in columns:
            column.base.indexes.append(index.base)
        return index

    def _push_index(self, index: Index) -> "Table":
        self.base.push_index(index.base)
        self.index_map[index.name] = index
        return self

    # primary key

    def add_primary(self, *column_names: str) -> None:
        """Queue a primary key named ``PRIMARY`` over the given columns."""
        self._add_primary_with_name("PRIMARY", *column_names)

    def drop_primary(self) -> None:
        """Queue dropping the primary key; raises ValueError if there is none."""
        primary = self.primary
        if primary is None:
            raise ValueError(f"the table {self.full_name} has no primary key")

        def success() -> None:
            self.primary = None

        self._command("DropPrimary", success, None, primary.name, primary.columns)

    def _add_primary_with_name(self, name: str, *column_names: str) -> None:
        columns = []
        for column_name in column_names:
            column = self._require_column(column_name)
            column.not_null()
            column.base.is_primary = True
            columns.append(column.base)
        primary = Primary(self.base.new_primary(name, *columns), self)
        self.primary = primary

        def fail() -> None:
            self.primary = None

        self._command("CreatePrimary", None, fail, primary.base)

    def _command(
        self, name: str, success: dbal.Callback, fail: dbal.Callback, *params: Any
    ) -> dbal.Command:
        return self.base.add_command(name, success, fail, *params)