"""Plain data structures describing connections, tables and queries."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

Callback = Optional[Callable[[], None]]


@dataclass
class Config:
    """Connection configuration."""

    driver: str
    dsn: str = ""
    name: str = ""
    read_only: bool = False


@dataclass
class Option:
    """Database options shared by every table of a connection."""

    prefix: str = ""
    collation: str = ""
    charset: str = ""


_VERSION_RE = re.compile(
    r"^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?"
    r"(?:-([0-9A-Za-z.-]+))?(?:\+([0-9A-Za-z.-]+))?\s*$"
)


@dataclass(frozen=True)
class Version:
    """A database server version tagged with its driver."""

    driver: str
    major: int
    minor: int = 0
    patch: int = 0
    pre: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @classmethod
    def parse(cls, driver: str, text: str) -> "Version":
        """Parse a version string such as ``8.0.23`` or ``5.7.31-log``.

        Missing minor and patch numbers default to zero; a leading ``v``
        is ignored. Raises ValueError if the text is not a version.
        """
        match = _VERSION_RE.match(text)
        if match is None:
            raise ValueError(f"invalid version: {text!r}")
        major, minor, patch, pre, build = match.groups()
        return cls(
            driver=driver,
            major=int(major),
            minor=int(minor or 0),
            patch=int(patch or 0),
            pre=tuple(pre.split(".")) if pre else (),
            build=tuple(build.split(".")) if build else (),
        )

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            text += "-" + ".".join(self.pre)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


@dataclass
class Connection:
    """An open database connection with its settings."""

    db: Any
    config: Config
    option: Option = field(default_factory=Option)
    version: Optional[Version] = None


@dataclass(eq=False)
class Constraint:
    """A column constraint."""

    schema_name: str = ""
    table_name: str = ""
    column_name: str = ""
    type: str = ""
    args: list[str] = field(default_factory=list)
    table: Optional["Table"] = field(default=None, repr=False)


@dataclass(eq=False)
class Column:
    """A table column."""

    db_name: str = ""
    table_name: str = ""
    name: str = ""
    position: int = 0
    default: Any = None
    default_raw: str = ""
    nullable: bool = False
    is_unsigned: bool = False
    type: str = ""
    length: Optional[int] = None
    octet_length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    date_time_precision: Optional[int] = None
    charset: Optional[str] = None
    collation: Optional[str] = None
    key: Optional[str] = None
    extra: Optional[str] = None
    comment: Optional[str] = None
    is_primary: bool = False
    type_name: str = ""
    max_length: int = 0
    default_length: int = 0
    max_precision: int = 0
    default_precision: int = 0
    max_scale: int = 0
    default_scale: int = 0
    max_date_time_precision: int = 0
    default_date_time_precision: int = 0
    option: list[str] = field(default_factory=list)
    table: Optional["Table"] = field(default=None, repr=False)
    indexes: list["Index"] = field(default_factory=list, repr=False)
    constraint: Optional[Constraint] = None


@dataclass(eq=False)
class Index:
    """A table index."""

    db_name: str = ""
    table_name: str = ""
    column_name: str = ""
    name: str = ""
    seq: int = 0
    seq_column: int = 0
    collation: str = ""
    nullable: bool = False
    unique: bool = False
    primary: bool = False
    sub_part: int = 0
    type: str = ""
    index_type: str = ""
    comment: Optional[str] = None
    index_comment: Optional[str] = None
    table: Optional["Table"] = field(default=None, repr=False)
    columns: list[Column] = field(default_factory=list, repr=False)


@dataclass(eq=False)
class Primary:
    """A table primary key."""

    db_name: str = ""
    table_name: str = ""
    name: str = ""
    table: Optional["Table"] = field(default=None, repr=False)
    columns: list[Column] = field(default_factory=list, repr=False)


@dataclass
class Command:
    """A pending operation to run against a table."""

    name: str
    params: list[Any] = field(default_factory=list)
    success: Callback = None
    fail: Callback = None


@dataclass(eq=False)
class Table:
    """A table with its columns, indexes and pending commands."""

    db_name: str = ""
    schema_name: str = ""
    table_name: str = ""
    comment: str = ""
    type: str = ""
    engine: str = ""
    create_time: Optional[datetime] = None
    create_options: str = ""
    collation: str = ""
    charset: str = ""
    rows: int = 0
    row_length: int = 0
    index_length: int = 0
    auto_increment: int = 0
    primary: Optional[Primary] = field(default=None, repr=False)
    column_map: dict[str, Column] = field(default_factory=dict, repr=False)
    index_map: dict[str, Index] = field(default_factory=dict, repr=False)
    columns: list[Column] = field(default_factory=list, repr=False)
    indexes: list[Index] = field(default_factory=list, repr=False)
    commands: list[Command] = field(default_factory=list, repr=False)

    def new_column(self, name: str) -> Column:
        """Create a column bound to this table without adding it."""
        return Column(
            db_name=self.db_name,
            table_name=self.table_name,
            name=name,
            table=self,
        )

    def push_column(self, column: Column) -> "Table":
        """Add a column to the table."""
        self.columns.append(column)
        self.column_map[column.name] = column
        return self

    def new_index(self, name: str, *columns: Column) -> Index:
        """Create an index over the given columns without adding it."""
        return Index(
            db_name=self.db_name,
            table_name=self.table_name,
            name=name,
            table=self,
            columns=list(columns),
        )

    def push_index(self, index: Index) -> "Table":
        """Add an index to the table."""
        self.indexes.append(index)
        self.index_map[index.name] = index
        return self

    def new_primary(self, name: str, *columns: Column) -> Primary:
        """Create a primary key over the given columns."""
        return Primary(
            db_name=self.db_name,
            table_name=self.table_name,
            name=name,
            table=self,
            columns=list(columns),
        )

    def add_command(
        self, name: str, success: Callback, fail: Callback, *params: Any
    ) -> Command:
        """Queue a command with its parameters and callbacks."""
        command = Command(name=name, params=list(params), success=success, fail=fail)
        self.commands.append(command)
        return command


def new_table(name: str, schema_name: str, db_name: str) -> Table:
    """Create an empty table description."""
    return Table(db_name=db_name, schema_name=schema_name, table_name=name)


@dataclass
class Name:
    """A name with optional prefix and alias, as in ``table AS t1``."""

    name: str
    prefix: str = ""
    alias: str = ""


@dataclass
class Expression:
    """A raw query expression."""

    value: Any


@dataclass
class Where:
    """A where constraint of a query."""

    type: str = ""
    column: Any = None
    first: Any = None
    second: Any = None
    sql: str = ""
    operator: str = ""
    boolean: str = ""
    wheres: list["Where"] = field(default_factory=list)
    query: Optional["Query"] = None
    value: Any = None
    values: list[Any] = field(default_factory=list)
    values_in: Any = None
    not_: bool = False
    offset: int = 0


@dataclass
class Join:
    """A join clause of a query."""

    type: str = ""
    name: Any = None
    query: Optional["Query"] = None
    alias: str = ""
    sql: Any = None
    offset: int = 0


@dataclass
class Union:
    """A union statement of a query."""

    all: bool = False
    query: Optional["Query"] = None


@dataclass
class Aggregate:
    """An aggregate function and its columns."""

    func: str = ""
    columns: list[Any] = field(default_factory=list)


@dataclass
class Having:
    """A having constraint of a query."""

    type: str = ""
    column: Any = None
    operator: str = ""
    value: Any = None
    boolean: str = ""
    offset: int = 0
    values: list[Any] = field(default_factory=list)
    not_: bool = False
    sql: str = ""


@dataclass
class Order:
    """An ordering of a query."""

    type: str = ""
    column: Any = None
    direction: str = ""
    offset: int = 0
    sql: str = ""


@dataclass
class From:
    """The source a query targets."""

    type: str = ""
    name: Any = None
    alias: str = ""
    offset: int = 0
    sql: str = ""


@dataclass
class Select:
    """A selected item of a query."""

    type: str = ""
    name: Any = None
    alias: str = ""
    offset: int = 0
    sql: str = ""


@dataclass
class Query:
    """The state of a query under construction."""

    use_write_connection: bool = False
    lock: Any = None
    from_: From = field(default_factory=From)
    columns: list[Any] = field(default_factory=list)
    aggregate: Aggregate = field(default_factory=Aggregate)
    wheres: list[Where] = field(default_factory=list)
    joins: list[Join] = field(default_factory=list)
    unions: list[Union] = field(default_factory=list)
    union_limit: int = 0
    union_offset: int = 0
    union_orders: list[Order] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)
    limit: int = 0
    offset: int = 0
    groups: list[Any] = field(default_factory=list)
    havings: list[Having] = field(default_factory=list)
    bindings: dict[str, list[Any]] = field(default_factory=dict)
    distinct: bool = False
    distinct_columns: list[Any] = field(default_factory=list)
    is_join_clause: bool = False
    binding_offset: int = 0
    sql: str = ""