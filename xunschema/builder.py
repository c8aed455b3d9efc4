"""Schema builder: creates, inspects, alters and drops tables.

The SQL work is done by a :class:`Grammar` registered for the connection's
driver. The builder turns blueprints into grammar calls and turns the
table descriptions a grammar returns back into blueprints.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from . import types as dbal
from .blueprint import Blueprint, new_table
from .table import Column, Index, Primary


class SchemaError(Exception):
    """Raised when the builder cannot be set up or used."""


class Grammar(ABC):
    """The database-specific operations a builder relies on.

    A registered grammar acts as a prototype: :meth:`connect` opens a
    database handle and :meth:`new_with` returns a grammar bound to it.
    """

    @abstractmethod
    def connect(self, dsn: str) -> Any:
        """Open a database handle for the DSN."""

    @abstractmethod
    def new_with(self, db: Any, config: dbal.Config, option: dbal.Option) -> "Grammar":
        """Return a grammar bound to the given handle and settings."""

    @abstractmethod
    def on_connected(self) -> None:
        """Run once the grammar is bound to an open handle."""

    @abstractmethod
    def get_database(self) -> str:
        """Return the name of the current database."""

    @abstractmethod
    def get_schema(self) -> str:
        """Return the name of the current schema."""

    @abstractmethod
    def get_version(self) -> dbal.Version:
        """Return the server version."""

    @abstractmethod
    def get_tables(self) -> list[str]:
        """Return the full names of all tables."""

    @abstractmethod
    def table_exists(self, name: str) -> bool:
        """Return True if the table exists."""

    @abstractmethod
    def get_table(self, name: str) -> dbal.Table:
        """Return the description of an existing table."""

    @abstractmethod
    def create_table(self, table: dbal.Table) -> None:
        """Create a table from its description and queued commands."""

    @abstractmethod
    def alter_table(self, table: dbal.Table) -> None:
        """Run the commands queued on the table."""

    @abstractmethod
    def drop_table(self, name: str) -> None:
        """Drop a table that must exist."""

    @abstractmethod
    def drop_table_if_exists(self, name: str) -> None:
        """Drop a table if it exists."""

    @abstractmethod
    def rename_table(self, old: str, new: str) -> None:
        """Rename a table."""


_GRAMMARS: dict[str, Grammar] = {}


def register_grammar(driver: str, grammar: Grammar) -> None:
    """Make a grammar available for the named driver."""
    _GRAMMARS[driver] = grammar


@dataclass
class BuilderConnection:
    """The write connection a builder operates on."""

    write: Any
    write_config: dbal.Config
    option: dbal.Option = field(default_factory=dbal.Option)
    version: Optional[dbal.Version] = None


def _registered(driver: str) -> Grammar:
    grammar = _GRAMMARS.get(driver)
    if grammar is None:
        raise SchemaError(f"The {driver} driver not import")
    return grammar


def _new_grammar(conn: BuilderConnection) -> Grammar:
    prototype = _registered(conn.write_config.driver)
    try:
        grammar = prototype.new_with(conn.write, conn.write_config, conn.option)
    except Exception as err:
        raise SchemaError(f"grammar setup error. ({err})") from err
    try:
        grammar.on_connected()
    except Exception as err:
        raise SchemaError(f"the OnConnected event error. ({err})") from err
    return grammar


def new(driver: str, dsn: str) -> "Builder":
    """Connect with the driver's grammar and return a builder."""
    db = _registered(driver).connect(dsn)
    conn = BuilderConnection(
        write=db,
        write_config=dbal.Config(driver=driver, dsn=dsn, name="main"),
        option=dbal.Option(),
    )
    return use(conn)


def use(conn: BuilderConnection) -> "Builder":
    """Return a builder for an existing connection."""
    return Builder(conn, _new_grammar(conn))


class Builder:
    """Creates and inspects tables through a grammar."""

    def __init__(self, conn: BuilderConnection, grammar: Grammar) -> None:
        self.conn = conn
        self.grammar = grammar
        self.mode = "production"
        self.database = grammar.get_database()
        self.schema = grammar.get_schema()

    def _reconnect(self) -> None:
        config = self.conn.write_config
        self.conn.write = _registered(config.driver).connect(config.dsn)
        self.grammar = self.grammar.new_with(self.conn.write, config, self.conn.option)

    def _table(self, name: str) -> Blueprint:
        return new_table(name, self)

    def set_option(self, option: dbal.Option) -> None:
        """Replace the connection options, such as the table prefix."""
        self.conn.option = option

    def get_connection(self) -> dbal.Connection:
        """Return the connection together with the server version."""
        version = self.get_version()
        return dbal.Connection(
            db=self.conn.write,
            config=self.conn.write_config,
            option=self.conn.option,
            version=version,
        )

    def get_db(self) -> Any:
        """Return the database handle; raises SchemaError if there is none."""
        if self.conn is None or self.conn.write is None:
            raise SchemaError("the connection is nil")
        return self.conn.write

    def get_tables(self) -> list[str]:
        """Return all table names with the configured prefix removed."""
        tables = self.grammar.get_tables()
        prefix = self.conn.option.prefix
        if prefix:
            return [name.removeprefix(prefix) for name in tables]
        return list(tables)

    def has_table(self, name: str) -> bool:
        """Return True if the table exists."""
        return self.grammar.table_exists(self._table(name).full_name)

    def get_table(self, name: str) -> Blueprint:
        """Load an existing table as a blueprint."""
        table = self._table(name)
        base = self.grammar.get_table(table.full_name)
        table.base = base
        for column in base.columns:
            table.column_names.append(column.name)
            table.column_map[column.name] = Column(column, table)
        for index in base.indexes:
            table.index_names.append(index.name)
            table.index_map[index.name] = Index(index, table)
        if base.primary is not None:
            table.primary = Primary(base.primary, table)
        return table

    def create_table(self, name: str, callback: Callable[[Blueprint], Any]) -> None:
        """Describe a new table in the callback, then create it."""
        table = self._table(name)
        callback(table)
        self.grammar.create_table(table.base)

    def alter_table(self, name: str, callback: Callable[[Blueprint], Any]) -> None:
        """Load a table, change it in the callback, then apply the changes."""
        table = self.get_table(name)
        callback(table)
        self.grammar.alter_table(table.base)

    def drop_table(self, name: str) -> None:
        """Drop a table."""
        self.grammar.drop_table(self._table(name).full_name)

    def drop_table_if_exists(self, name: str) -> None:
        """Drop a table if it exists."""
        self.grammar.drop_table_if_exists(self._table(name).full_name)

    def rename_table(self, old: str, new: str) -> Blueprint:
        """Rename a table and return a blueprint under the new name."""
        self.grammar.rename_table(self._table(old).full_name, self._table(new).full_name)
        return self._table(new)

    def get_version(self) -> dbal.Version:
        """Return the server version, asking the database only once."""
        if self.conn.version is not None:
            return self.conn.version
        version = self.grammar.get_version()
        self.conn.version = version
        return version