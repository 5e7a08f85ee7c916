"""Minimal placeholder templates rendered against a scope.

A template is literal text with `{path}` and `{path()}` placeholders, where
`path` is a dot-separated identifier chain. `{{` and `}}` produce literal
braces. The first segment of a path is resolved through the scope, remaining
segments through nested maps.
"""
import logging
import typing as t
from io import StringIO
from re import compile as re_compile

from starscope.scope import Scope
from starscope.utils.error import StarscopeError
from starscope.value import Value
from starscope.valuemap import SEPARATOR

log = logging.getLogger(__name__)

_brace = re_compile(r"[{}]")
_placeholder = re_compile(r"\{(?P<expr>[^{}]*)\}")
_expr = re_compile(
    r"^\s*(?P<path>[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*)"
    r"\s*(?P<call>\(\s*\))?\s*$")


class TemplateError(StarscopeError):
    pass


class TemplateSyntaxError(TemplateError):
    def __init__(self, source: str, column: int, message: str):
        self.source = source
        self.column = column
        super().__init__(f"{message} (column {column})")


class EvalError(TemplateError):
    def __init__(self, expr: str, message: str):
        self.expr = expr
        super().__init__(f"error evaluating '{{{expr}}}': {message}")


class TextToken:
    __slots__ = ['text']

    def __init__(self, text: str):
        self.text = text

    def __eq__(self, other):
        return isinstance(other, TextToken) and self.text == other.text

    def __repr__(self):
        return f"TextToken({self.text!r})"


class ExprToken:
    __slots__ = ['path', 'call']

    def __init__(self, path: t.Sequence[str], call: bool = False):
        self.path = tuple(path)
        self.call = call

    @property
    def expr(self) -> str:
        return SEPARATOR.join(self.path) + ("()" if self.call else "")

    def __eq__(self, other):
        return (isinstance(other, ExprToken)
                and self.path == other.path
                and self.call == other.call)

    def __repr__(self):
        return f"ExprToken({self.expr!r})"


Token = t.Union[TextToken, ExprToken]


def token_stream(source: str) -> t.Iterator[Token]:
    pos = 0
    text = []
    while True:
        m = _brace.search(source, pos)
        if not m:
            text.append(source[pos:])
            break
        start = m.start()
        text.append(source[pos:start])
        if source.startswith('{{', start) or source.startswith('}}', start):
            text.append(source[start])
            pos = start + 2
            continue
        if source[start] == '}':
            raise TemplateSyntaxError(source, start, "unexpected '}'")

        placeholder = _placeholder.match(source, start)
        if not placeholder:
            raise TemplateSyntaxError(source, start, "unterminated placeholder")
        expr = _expr.match(placeholder['expr'])
        if not expr:
            raise TemplateSyntaxError(
                source, start, f"invalid expression '{placeholder['expr']}'")

        if text:
            joined = "".join(text)
            if joined:
                yield TextToken(joined)
            text = []
        yield ExprToken(expr['path'].split(SEPARATOR), expr['call'] is not None)
        pos = placeholder.end()

    joined = "".join(text)
    if joined:
        yield TextToken(joined)


class Template:
    __slots__ = ['source', 'tokens']

    def __init__(self, source: str, tokens: t.List[Token]):
        self.source = source
        self.tokens = tokens

    def evaluate(self, token: ExprToken, scope: Scope) -> Value:
        head, *rest = token.path
        value = scope.lookup(head)
        for segment in rest:
            if not value.is_map():
                return Value.null()
            supplier = value.data.get_raw(segment)
            value = supplier() if supplier is not None else Value.null()

        if token.call:
            if not value.is_function():
                raise EvalError(
                    token.expr, f"cannot call a value of type '{value.type.name.lower()}'")
            value = value.call()
        return value

    def render(self, scope: Scope) -> str:
        out = StringIO()
        for token in self.tokens:
            if isinstance(token, TextToken):
                out.write(token.text)
                continue
            value = self.evaluate(token, scope)
            # undefined renders as nothing
            if not value.is_null():
                out.write(str(value))
        return out.getvalue()

    def __repr__(self):
        return f"Template({self.source!r})"


def compile_template(source: str) -> Template:
    tokens = list(token_stream(source))
    log.debug(f"compiled template with {len(tokens)} tokens")
    return Template(source, tokens)


def render(source: str, scope: Scope) -> str:
    return compile_template(source).render(scope)
