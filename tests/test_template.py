import pytest
from starscope.template import *
from starscope.value import Value

PLAYER_TEMPLATE = "Name: {player.name}     Age: {player.age()}"


def test_token_stream():
    tokens = list(token_stream("hello {name}, you are {player.age()}!"))
    assert tokens == [
        TextToken("hello "),
        ExprToken(['name']),
        TextToken(", you are "),
        ExprToken(['player', 'age'], call=True),
        TextToken("!"),
    ]


def test_token_stream_escaped_braces():
    assert list(token_stream("{{literal}} {x}")) == [
        TextToken("{literal} "),
        ExprToken(['x']),
    ]


def test_token_stream_whitespace_in_placeholder():
    assert list(token_stream("{ a.b ( ) }")) == [ExprToken(['a', 'b'], call=True)]


@pytest.mark.parametrize('source, column', [
    ("abc {name", 4),
    ("abc }", 4),
    ("{1abc}", 0),
    ("x {a..b}", 2),
    ("{}", 0),
    ("{a(1)}", 0),
])
def test_syntax_errors(source, column):
    with pytest.raises(TemplateSyntaxError) as exc_info:
        compile_template(source)
    assert exc_info.value.column == column


def test_player_scenario(root):
    root.set('player.name', "MineGame159")
    root.set('player.age', lambda: 5)

    template = compile_template(PLAYER_TEMPLATE)
    assert template.render(root) == "Name: MineGame159     Age: 5"

    root.remove('player.name')
    assert template.render(root) == "Name:      Age: 5", "undefined should render as nothing"


def test_player_scenario_nested_map(root):
    from starscope.valuemap import ValueMap
    root.set('player', ValueMap().set('name', "MineGame159").set('age', lambda: 5))
    assert render(PLAYER_TEMPLATE, root) == "Name: MineGame159     Age: 5"


def test_scoped_variable_scenario(root):
    template = compile_template("{scoped_variable}")
    root.set('scoped_variable', True)
    assert template.render(root) == "true"

    with root.scope() as scope:
        scope.set('scoped_variable', False)
        assert template.render(scope) == "false"

        scope.remove('scoped_variable')
        assert template.render(scope) == ""

    assert template.render(root) == "true"


def test_render_through_child_uses_first_segment(root):
    root.set('player.name', "root")
    with root.scope() as scope:
        assert render("{player.name}", scope) == "root"
        scope.remove('player')
        assert render("{player.name}", scope) == ""


def test_lazy_supplier_reflects_render_time(root):
    state = {'n': 1}
    root.set_supplier('n', lambda: Value.number(state['n']))
    template = compile_template("{n}")
    assert template.render(root) == "1"
    state['n'] = 2
    assert template.render(root) == "2"


def test_member_of_non_map_is_undefined(root):
    root.set('x', 1)
    assert render("[{x.y}]", root) == "[]"


def test_calling_non_function(root):
    root.set('x', 1)
    with pytest.raises(EvalError) as exc_info:
        render("{x()}", root)
    assert exc_info.value.expr == "x()"

    with pytest.raises(EvalError):
        render("{missing()}", root)
