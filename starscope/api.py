from starscope.protocols import Supplier
from starscope.scope import ChildScope, RootScope, Scope, UnsupportedPath
from starscope.template import (
    EvalError, Template, TemplateError, TemplateSyntaxError, compile_template, render
)
from starscope.utils.error import StarscopeError
from starscope.value import Value, ValueType, constant
from starscope.valuemap import ValueMap

__all__ = [
    'Supplier',
    'Scope',
    'RootScope',
    'ChildScope',
    'UnsupportedPath',
    'StarscopeError',
    'Template',
    'TemplateError',
    'TemplateSyntaxError',
    'EvalError',
    'compile_template',
    'render',
    'Value',
    'ValueType',
    'constant',
    'ValueMap',
]
