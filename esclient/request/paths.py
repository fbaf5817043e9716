"""Resource path and query-string construction for REST operations."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote, quote_plus

from .operation import DocumentId, ExplicitId, Operation, Params

ParamsInput = Union[None, Mapping[str, Any], Iterable[Tuple[str, Any]]]

# Sub-delimiters left readable inside a path segment; everything else is escaped.
_SEGMENT_SAFE = "$&+,:;=@"


def _param_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_params(params: ParamsInput) -> Params:
    """Flatten a mapping or pair iterable into ordered ``(key, value)`` pairs.

    Mapping values may be a scalar or a list/tuple of scalars; each element of
    a list becomes its own pair so the key repeats in the query string.
    ``None`` values, alone or inside a list, are dropped.
    """

    if not params:
        return ()
    items: Iterable[Tuple[str, Any]]
    if isinstance(params, Mapping):
        items = params.items()
    else:
        items = params
    pairs: List[Tuple[str, str]] = []
    for key, value in items:
        if isinstance(value, (list, tuple)):
            pairs.extend((str(key), _param_text(v)) for v in value if v is not None)
        elif value is not None:
            pairs.append((str(key), _param_text(value)))
    return tuple(pairs)


def _segment(names: Sequence[str]) -> str:
    return ",".join(quote(name, safe=_SEGMENT_SAFE) for name in names)


def build_path(
    indices: Sequence[str],
    types: Sequence[str] = (),
    doc_id: Optional[DocumentId] = None,
    api: str = "",
) -> str:
    """Return ``/indices[/types][/id]/api`` with every segment percent-escaped.

    An empty index list still contributes its (empty) segment, so
    ``build_path([], api="_bulk")`` is ``//_bulk``. The id segment is added
    for any ExplicitId, and a ``/`` inside it is escaped. ``api`` keeps its
    own ``/`` separators.
    """

    path = "/" + _segment(indices)
    if types:
        path += "/" + _segment(types)
    if isinstance(doc_id, ExplicitId):
        path += "/" + quote(doc_id.value, safe=_SEGMENT_SAFE)
    return path + "/" + quote(api, safe=_SEGMENT_SAFE + "/")


def build_query_string(params: Params) -> str:
    """Percent-encode pairs in insertion order; repeated keys are kept."""

    return "&".join(f"{quote_plus(key)}={quote_plus(value)}" for key, value in params)


def build_url(operation: Operation) -> str:
    """Return the path plus query string for ``operation`` (no host part)."""

    path = build_path(operation.indices, operation.types, operation.doc_id, operation.api)
    query = build_query_string(operation.params)
    return f"{path}?{query}" if query else path


__all__ = [
    "ParamsInput",
    "normalize_params",
    "build_path",
    "build_query_string",
    "build_url",
]
