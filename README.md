# xunschema

Describe relational database tables in Python — columns, indexes and a
primary key — and hand the description to a driver-specific grammar
that applies it to a database.

## Install

```
pip install xunschema
```

To run the tests:

```
pip install "xunschema[test]"
pytest
```

## Modules

- `xunschema.types` holds the plain data model: `Config`, `Option`,
  `Version` (with `Version.parse(driver, text)`), `Connection`, and the
  table description types `Table`, `Column`, `Index`, `Primary`,
  `Constraint` and `Command`. It also has data classes for describing
  queries (`Query`, `Where`, `Join`, `Union`, `Aggregate`, `Having`,
  `Order`, `From`, `Select`, `Name`, `Expression`).
- `xunschema.table` has the schema `Table` with its `Column`, `Index`
  and `Primary` wrappers: `get_column`, `has_column`, `drop_column`,
  `rename_column`, `get_index`, `has_index`, `add_index`, `add_unique`,
  `add_fulltext`, `drop_index`, `rename_index`, `add_primary` and
  `drop_primary`, plus column modifiers such as `unique()`, `index()`,
  `primary()`, `unsigned()`, `null()`, `not_null()`,
  `auto_increment()`, `set_length()`, `set_precision()`, `set_scale()`,
  `set_date_time_precision()`, `set_comment()` and `set_default()`.
  Every change is queued as a `Command` in `table.commands`.
- `xunschema.blueprint` has `Blueprint`, a `Table` with one factory per
  column type (`string`, `char`, `text`, `integer`, `big_increments`,
  `id`, `decimal`, `float`, `double`, `timestamp`, `enum`, `json`,
  `uuid`, `timestamps`, `soft_deletes`, ...), and
  `new_table(name, builder)`.
- `xunschema.builder` has `Builder`, the abstract `Grammar`,
  `register_grammar(driver, grammar)`, `new(driver, dsn)`, `use(conn)`,
  `BuilderConnection` and `SchemaError`.
- `xunschema.mode` keeps the process-wide run mode (`Mode.DEBUG`,
  `Mode.RELEASE` or `Mode.TEST`), read from the `XUN_MODE` environment
  variable at import time; `set_mode` changes it and raises
  `ValueError` for an unknown name, `mode()` returns it.

## Describing a table

```python
from xunschema.blueprint import new_table

table = new_table("users", None)
table.id("id")
table.string("name", 80).index()
table.string("email", 200).unique()
table.decimal("balance", 12, 2)
table.timestamps()

print(table.get_column("balance").precision)   # 12
print(table.has_index("name_index", "email_unique"))  # True
print([command.name for command in table.commands])
```

Column limits follow fixed rules: a length, precision or scale that is
zero or above the type's maximum falls back to the type's default;
precision plus scale is kept within the type's maximum precision, and
the scale never exceeds the precision.

## Using a builder

A `Builder` does its database work through a `Grammar` registered for
the driver name. Subclass `Grammar`, implement its methods (`connect`,
`new_with`, `on_connected`, `get_database`, `get_schema`,
`get_version`, `get_tables`, `table_exists`, `get_table`,
`create_table`, `alter_table`, `drop_table`, `drop_table_if_exists`,
`rename_table`), then:

```python
from xunschema.builder import new, register_grammar

register_grammar("mydriver", MyGrammar())
builder = new("mydriver", "file:app.db")

builder.create_table("users", lambda table: table.id("id"))
builder.alter_table("users", lambda table: table.string("name", 80))
print(builder.get_tables())
```

`new` with a driver that has no registered grammar raises
`SchemaError("The <driver> driver not import")`. `get_tables` strips
the table prefix set with `set_option(Option(prefix=...))`, and
`get_version` asks the grammar once and then returns the cached value.

## What this package does not do

It ships no grammar for any database: it neither generates SQL nor
talks to a server by itself, so a builder works only once you register
a grammar for your driver. The query data classes in `xunschema.types`
describe a query's parts; there is no query builder that fills them or
runs them.