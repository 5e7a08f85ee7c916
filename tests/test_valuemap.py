import pytest
from starscope.value import Value, constant
from starscope.valuemap import ValueMap, split_name


def test_split_name():
    assert split_name('a') == ('a', None)
    assert split_name('a.b.c') == ('a', 'b.c')


@pytest.mark.parametrize('name', ['', '.a', 'a.', 'a..b'])
def test_split_name_invalid(name):
    with pytest.raises(ValueError):
        split_name(name)


def test_set_creates_nested_maps():
    m = ValueMap()
    m.set('a.b.c', 1)
    a = m.get('a')()
    assert a.is_map()
    assert a.data.get('b.c')() == Value.number(1)
    assert m.get('a.b.c')() == Value.number(1)


def test_set_merges_into_existing_map():
    m = ValueMap()
    m.set('player.name', "MineGame159")
    m.set('player.age', 5)
    player = m.get('player')().data
    assert set(player.keys()) == {'name', 'age'}


def test_set_supplier_does_not_invoke_supplier():
    calls = []

    def supplier():
        calls.append(1)
        return Value.number(1)

    m = ValueMap()
    m.set_supplier('x', supplier)
    m.set_supplier('y.z', supplier)
    assert calls == [], "binding must not invoke the bound supplier"


def test_dotted_set_invokes_head_supplier_once():
    nested = ValueMap()
    calls = []

    def player():
        calls.append(1)
        return Value.map(nested)

    m = ValueMap()
    m.set_supplier('player', player)
    m.set('player.name', "MineGame159")
    assert calls == [1], "the head supplier is consulted to find the map to merge into"
    assert nested.get('name')() == Value.string("MineGame159")


def test_set_replaces_non_map_segment():
    m = ValueMap()
    m.set('a', 1)
    m.set('a.b', 2)
    assert m.get('a')().is_map()
    assert m.get('a.b')() == Value.number(2)


def test_get_through_non_map_is_none():
    m = ValueMap()
    m.set('a', 1)
    assert m.get('a.b') is None
    assert m.get('missing.b') is None


def test_set_supplier_is_stored_as_is():
    m = ValueMap()
    supplier = constant(1)
    assert m.set_supplier('x', supplier) is m
    assert m.get_raw('x') is supplier


def test_remove_nested():
    m = ValueMap()
    m.set('a.b', 1)
    assert m.remove('a.b')() == Value.number(1)
    assert m.get('a.b') is None
    assert 'a' in m, "removing a nested entry keeps the enclosing map"
    assert m.remove('a.b') is None
    assert m.remove('missing.b') is None


def test_keys_view():
    m = ValueMap()
    m.set('a', 1).set('b', 2)
    keys = m.keys()
    assert keys == {'a', 'b'}
    keys.discard('a')
    assert 'a' not in m
    with pytest.raises(TypeError):
        keys.add('c')


def test_update_from():
    m = ValueMap().update_from({
        'player': {'name': "MineGame159", 'stats': {'level': 3}},
        'server.motd': "hello",
        'empty': {},
        'flag': True,
    })
    assert m.get('player.name')() == Value.string("MineGame159")
    assert m.get('player.stats.level')() == Value.number(3)
    assert m.get('server.motd')() == Value.string("hello")
    assert m.get('empty')().is_map()
    assert m.get('flag')() == Value.bool_(True)
    assert len(m) == 4
