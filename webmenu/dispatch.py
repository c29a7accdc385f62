"""Route callbacks to the items whose type matches the callback's first parameter.

``menu.each(lambda item: ...)`` applies to every item, while
``menu.each(add_icon)`` with ``def add_icon(link: Link)`` only touches links.
Callers that prefer not to rely on annotations pass ``kind=`` explicitly.
"""

from __future__ import annotations

import inspect
import types
import typing
from typing import Any, Callable, Optional, Tuple, Union

Kind = Union[type, str, Tuple[Union[type, str], ...], None]

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


def first_parameter_type(callback: Callable[..., Any]) -> Kind:
    """Return the declared type of ``callback``'s first positional parameter.

    Unannotated callbacks (and annotations of ``Any``/``object``) yield
    ``None``, which matches every item. String annotations that cannot be
    resolved, e.g. classes local to a function, are kept as names and matched
    against the item's class hierarchy.
    """

    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return None

    parameters = [p for p in signature.parameters.values() if p.kind in _POSITIONAL]
    if not parameters:
        return None

    parameter = parameters[0]
    annotation = parameter.annotation
    if annotation is inspect.Parameter.empty:
        return None

    if isinstance(annotation, str):
        annotation = _resolve_annotation(callback, parameter.name, annotation)

    return _normalise(annotation)


def _resolve_annotation(callback: Callable[..., Any], name: str, annotation: str) -> Any:
    target = getattr(callback, "__func__", callback)
    if not inspect.isfunction(target):
        target = getattr(type(callback), "__call__", target)
    try:
        hints = typing.get_type_hints(target)
    except (NameError, TypeError):
        return annotation
    return hints.get(name, annotation)


def _normalise(annotation: Any) -> Kind:
    if annotation is Any or annotation is object:
        return None

    if isinstance(annotation, str):
        names = tuple(part.strip().rsplit(".", 1)[-1] for part in annotation.split("|"))
        names = tuple(part for part in names if part and part != "None")
        if not names:
            return None
        return names[0] if len(names) == 1 else names

    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = []
        for arg in typing.get_args(annotation):
            if arg is type(None):
                continue
            normalised = _normalise(arg)
            if normalised is None:
                return None
            members.extend(normalised if isinstance(normalised, tuple) else (normalised,))
        return tuple(members)

    if isinstance(annotation, type):
        return annotation

    return None


def item_matches_type(item: Any, kind: Kind) -> bool:
    """Return whether ``item`` satisfies ``kind`` (``None`` matches anything)."""

    if kind is None:
        return True

    candidates = kind if isinstance(kind, tuple) else (kind,)
    for candidate in candidates:
        if isinstance(candidate, str):
            if any(cls.__name__ == candidate for cls in type(item).__mro__):
                return True
        elif isinstance(item, candidate):
            return True
    return False


def resolve_kind(callback: Callable[..., Any], kind: Optional[Kind] = None) -> Kind:
    """Return ``kind`` when given, otherwise the type inferred from ``callback``."""

    if kind is not None:
        return kind
    return first_parameter_type(callback)


__all__ = ["Kind", "first_parameter_type", "item_matches_type", "resolve_kind"]
