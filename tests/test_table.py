import pytest

from xunschema.table import Column, Table


def _string(table, name, length=200):
    column = table._new_column(name).set_type("string")
    column.max_length = 65535
    column.default_length = 200
    column.set_length(length)
    table._put_column(column)
    return column


def _float(table, name, total=10, places=2):
    column = table._new_column(name).set_type("float")
    column.max_precision = 23
    column.default_precision = 10
    column.max_scale = 22
    column.default_scale = 2
    column.set_precision(total).set_scale(places)
    table._put_column(column)
    return column


def _date_time(table, name):
    column = table._new_column(name).set_type("dateTime")
    column.max_date_time_precision = 6
    column.default_date_time_precision = 0
    table._put_column(column)
    return column


def _plain(table, name, typ="bigInteger"):
    column = table._new_column(name).set_type(typ)
    table._put_column(column)
    return column


@pytest.fixture
def table():
    t = Table("test")
    _string(t, "field1", 20)
    _string(t, "field2", 40)
    return t


def test_get_column(table):
    col1 = table.get_column("field1")
    assert col1.name == "field1"
    assert col1.length == 20
    col2 = table.get_column("field2")
    assert col2.name == "field2"
    assert col2.length == 40
    assert table.get_column("missing") is None


def test_has_column(table):
    assert table.has_column("field1")
    assert table.has_column("field2")
    assert table.has_column("field1", "field2")
    assert not table.has_column("field3")
    assert not table.has_column("field1", "field3")


def test_full_name_uses_prefix():
    t = Table("users", prefix="xun_")
    assert t.name == "users"
    assert t.prefix == "xun_"
    assert t.full_name == "xun_users"


def test_add_column_queues_command(table):
    names = [c.name for c in table.commands]
    assert names == ["AddColumn", "AddColumn"]
    assert table.commands[0].params[0] is table.get_column("field1").base
    table.commands[0].fail()
    assert not table.has_column("field1")


def test_put_existing_column_queues_change(table):
    replacement = table._new_column("field1").set_type("text")
    table._put_column(replacement)
    command = table.commands[-1]
    assert command.name == "ChangeColumn"
    assert table.get_column("field1") is not replacement
    command.success()
    assert table.get_column("field1") is replacement


def test_drop_column(table):
    table.drop_column("field1", "field2")
    dropped = table.commands[-2:]
    assert [c.name for c in dropped] == ["DropColumn", "DropColumn"]
    assert [c.params for c in dropped] == [["field1"], ["field2"]]
    assert table.has_column("field1", "field2")
    dropped[0].success()
    assert not table.has_column("field1")
    assert table.has_column("field2")
    dropped[1].success()
    assert not table.has_column("field2")


def test_rename_column(table):
    column = table.rename_column("field2", "re_field2")
    assert column.name == "re_field2"
    assert table.get_column("re_field2") is column
    command = table.commands[-1]
    assert command.name == "RenameColumn"
    assert command.params == ["field2", "re_field2"]
    command.success()
    assert table.has_column("field1", "re_field2")
    assert not table.has_column("field2")


def test_rename_column_fail_rolls_back(table):
    table.rename_column("field2", "re_field2")
    table.commands[-1].fail()
    assert not table.has_column("re_field2")


def test_rename_unknown_column_raises(table):
    with pytest.raises(KeyError):
        table.rename_column("nope", "other")


def test_set_length():
    t = Table("test")
    assert _string(t, "col", 20).length == 20
    assert _string(t, "col", 65536).length == 200
    assert _string(t, "col", 0).length == 200
    assert _string(t, "col", 65535).length == 65535
    assert _string(t, "col", 65535).set_length(256).length == 256
    assert _plain(t, "col").set_length(200).length is None


def test_set_precision():
    t = Table("test")
    col = _float(t, "col", 10, 2)
    assert (col.precision, col.scale) == (10, 2)
    col = _float(t, "col", 23, 2)
    assert (col.precision, col.scale) == (23, 0)
    col = _float(t, "col", 24, 2)
    assert (col.precision, col.scale) == (10, 2)
    col = _float(t, "col", 0, 2)
    assert (col.precision, col.scale) == (10, 2)
    col = _float(t, "col", 0, 23)
    assert (col.precision, col.scale) == (10, 2)
    col = _float(t, "col", 10, 4).set_precision(12)
    assert (col.precision, col.scale) == (12, 4)
    assert _plain(t, "col").set_precision(200).precision is None


def test_set_scale_then_precision():
    t = Table("test")
    col = t._new_column("col").set_type("float")
    col.max_precision = 23
    col.default_precision = 10
    col.max_scale = 22
    col.default_scale = 2
    col.set_precision(10).set_scale(2)
    col.set_scale(6).set_precision(20)
    assert (col.precision, col.scale) == (17, 6)


def test_set_scale():
    t = Table("test")
    col = _float(t, "col", 10, 4).set_scale(6)
    assert (col.precision, col.scale) == (10, 6)
    assert _plain(t, "col").set_scale(200).scale is None


def test_set_date_time_precision():
    t = Table("test")
    assert _date_time(t, "col").set_date_time_precision(6).date_time_precision == 6
    assert _date_time(t, "col").set_date_time_precision(12).date_time_precision == 0
    assert _date_time(t, "col").set_date_time_precision(5).date_time_precision == 5
    date = _plain(t, "col", "date")
    assert date.set_date_time_precision(5).date_time_precision is None


def test_set_comment():
    t = Table("test")
    assert _string(t, "col").set_comment("This is a col").comment == "This is a col"
    assert _string(t, "col").comment is None


def test_modifiers():
    t = Table("test")
    col = _plain(t, "id").unsigned().auto_increment().null()
    assert col.is_unsigned is True
    assert col.extra == "AutoIncrement"
    assert col.nullable is True
    col.not_null().set_default(5).set_default_raw("NOW()")
    assert col.nullable is False
    assert col.default == 5
    assert col.default_raw == "NOW()"


def test_add_index(table):
    result = table.add_index("index_1", "field1", "field2")
    assert result is table
    index = table.get_index("index_1")
    assert index.name == "index_1"
    assert index.type == "index"
    assert [c.name for c in index.columns] == ["field1", "field2"]
    assert table.commands[-1].name == "CreateIndex"
    assert table.get_column("field1").has_index("index_1")


def test_has_index(table):
    table.add_index("index_1", "field1")
    assert table.has_index("index_1")
    assert not table.has_index("index_2")
    assert not table.has_index("index_1", "index_2")


def test_add_unique_and_fail_callback(table):
    table.add_unique("field1_field2", "field1", "field2")
    assert table.get_index("field1_field2").type == "unique"
    table.commands[-1].fail()
    assert not table.has_index("field1_field2")


def test_add_index_unknown_column_raises(table):
    with pytest.raises(KeyError):
        table.add_index("bad", "field1", "missing")


def test_add_fulltext_does_nothing(table):
    count = len(table.commands)
    assert table.add_fulltext("ft", "field1") is table
    assert len(table.commands) == count
    assert not table.has_index("ft")


def test_column_unique_and_index_are_idempotent(table):
    col1 = table.get_column("field1")
    col2 = table.get_column("field2")
    col1.index().index()
    col2.unique().unique()
    assert col1.has_index("field1_index")
    assert col2.has_index("field2_unique")
    created = [c for c in table.commands if c.name == "CreateIndex"]
    assert len(created) == 2
    assert table.get_index("field2_unique").type == "unique"


def test_drop_index(table):
    table.add_index("field1_field2", "field1", "field2")
    table.drop_index("field1_field2")
    command = table.commands[-1]
    assert command.name == "DropIndex"
    assert command.params == ["field1_field2"]
    command.success()
    assert not table.has_index("field1_field2")


def test_rename_index(table):
    table.add_index("field1_field2", "field1", "field2")
    index = table.rename_index("field1_field2", "re_field1_field2")
    assert index.name == "re_field1_field2"
    command = table.commands[-1]
    assert command.params == ["field1_field2", "re_field1_field2"]
    command.success()
    assert table.has_index("re_field1_field2")
    assert not table.has_index("field1_field2")


def test_rename_unknown_index_raises(table):
    with pytest.raises(KeyError):
        table.rename_index("missing", "other")


def test_add_primary():
    t = Table("test")
    _plain(t, "id").null()
    t.add_primary("id")
    primary = t.primary
    assert primary.name == "PRIMARY"
    assert [c.name for c in primary.columns] == ["id"]
    assert t.get_column("id").nullable is False
    assert t.get_column("id").is_primary is True
    assert t.commands[-1].name == "CreatePrimary"
    t.commands[-1].fail()
    assert t.primary is None


def test_column_primary_only_once():
    t = Table("test")
    col = _plain(t, "id")
    col.primary().primary()
    assert [c.name for c in t.commands].count("CreatePrimary") == 1
    assert t.primary.columns[0].name == "id"


def test_drop_primary():
    t = Table("test")
    _plain(t, "id")
    t.add_primary("id")
    t.drop_primary()
    command = t.commands[-1]
    assert command.name == "DropPrimary"
    assert command.params[0] == "PRIMARY"
    assert t.primary is not None
    command.success()
    assert t.primary is None


def test_drop_primary_without_primary_raises():
    with pytest.raises(ValueError):
        Table("test").drop_primary()


def test_column_wraps_base():
    t = Table("test")
    col = _plain(t, "id")
    assert isinstance(col, Column)
    assert col.table is t
    assert col.base.table is t.base
    col.name = "renamed"
    assert col.base.name == "renamed"