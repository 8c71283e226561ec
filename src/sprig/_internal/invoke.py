"""Invoke helpers — call sync or async handlers uniformly.

Route handlers can be ``def`` or ``async def``. Any code that calls a
user-provided handler goes through here so the sync/async check and the
argument convention live in exactly one place.

Usage::

    from sprig._internal.invoke import invoke, call_handler

    result = await invoke(handler, *args)
    result = await call_handler(handler, request, params)
"""

import inspect
from collections.abc import Callable
from typing import Any

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


async def invoke(handler: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def positional_arity(func: Callable[..., Any]) -> int:
    """Number of positional arguments *func* needs (``*args`` counts as many).

    Parameters with defaults only count when none are required,
    so ``lambda params, tag=tag: ...`` has arity 1.
    """
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return 1
    required = 0
    optional = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 2
        if param.kind in _POSITIONAL:
            if param.default is inspect.Parameter.empty:
                required += 1
            else:
                optional += 1
    if required:
        return required
    return min(optional, 1)


async def call_handler(func: Callable[..., Any], request: Any, params: dict[str, str]) -> Any:
    """Invoke a route handler with introspected arguments.

    Handlers take the parameter map as their single argument. A handler
    declaring two or more positional parameters receives
    ``(request, params)`` instead, which is how controllers reach the
    request body. Zero-parameter handlers are called bare.
    """
    arity = positional_arity(func)
    if arity >= 2:
        return await invoke(func, request, params)
    if arity == 1:
        return await invoke(func, params)
    return await invoke(func)
