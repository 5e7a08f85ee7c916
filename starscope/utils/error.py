class StarscopeError(Exception):
    """Base class of all errors raised by starscope."""
    pass
