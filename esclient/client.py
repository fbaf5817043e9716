"""Elasticsearch REST client: named operations over the request/response engine."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from .config import ClientSettings
from .errors import EncodingError
from .request.bulk import encode_bulk, field_payload
from .request.dispatcher import send
from .request.operation import (
    SERVER_ASSIGNED,
    DocumentId,
    DocumentOperation,
    ExplicitId,
    Method,
    Operation,
)
from .request.paths import ParamsInput, normalize_params
from .response.classifier import classify
from .response.decoder import decode_response
from .response.envelope import ResponseEnvelope
from .transport.base import Transport
from .transport.http_client import build_transport

logger = logging.getLogger(__name__)


class Client:
    """Stateless client bound to a caller-owned transport.

    Every operation returns a :class:`ResponseEnvelope` or raises an
    :class:`esclient.errors.EsClientError`; errors raised after a response
    arrived carry it as ``exc.response``. Calls may run concurrently as long
    as the transport allows it.
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "Client":
        return cls(build_transport(settings))

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def run(self, operation: Operation) -> ResponseEnvelope:
        """Dispatch ``operation``, decode the answer and classify the outcome."""

        resp = send(self.transport, operation)
        envelope = decode_response(operation.method, resp.status, resp.body)
        return classify(envelope, is_bulk=operation.is_bulk)

    def _run(
        self,
        method: Method,
        indices: Sequence[str] = (),
        types: Sequence[str] = (),
        doc_id: DocumentId = SERVER_ASSIGNED,
        api: str = "",
        params: ParamsInput = None,
        query: Any = None,
        body: Optional[bytes] = None,
        bulk_data: Optional[bytes] = None,
    ) -> ResponseEnvelope:
        return self.run(
            Operation(
                method=method,
                indices=tuple(indices),
                types=tuple(types),
                doc_id=doc_id,
                api=api,
                params=normalize_params(params),
                query=query,
                body=body,
                bulk_data=bulk_data,
            )
        )

    # index administration

    def create_index(self, name: str, mapping: Any = None) -> ResponseEnvelope:
        """Create index ``name`` with optional settings/mappings."""
        return self._run(Method.PUT, [name], query=mapping)

    def delete_index(self, name: str) -> ResponseEnvelope:
        return self._run(Method.DELETE, [name])

    def refresh_index(self, name: str) -> ResponseEnvelope:
        return self._run(Method.POST, [name], api="_refresh")

    def update_index_settings(self, name: str, settings: Any) -> ResponseEnvelope:
        return self._run(Method.PUT, [name], api="_settings", query=settings)

    def optimize(self, indices: Sequence[str], params: ParamsInput = None) -> ResponseEnvelope:
        """Merge segments through the legacy ``_optimize`` endpoint."""
        return self._run(Method.POST, indices, api="_optimize", params=params)

    def force_merge(self, indices: Sequence[str], params: ParamsInput = None) -> ResponseEnvelope:
        """Merge segments through ``_forcemerge``, the successor of ``_optimize``."""
        return self._run(Method.POST, indices, api="_forcemerge", params=params)

    def stats(self, indices: Sequence[str], params: ParamsInput = None) -> ResponseEnvelope:
        return self._run(Method.GET, indices, api="_stats", params=params)

    def index_status(self, indices: Sequence[str]) -> ResponseEnvelope:
        """Fetch ``_status`` for ``indices``; use ``["_all"]`` for every index."""
        return self._run(Method.GET, indices, api="_status")

    def indices_exist(self, indices: Sequence[str]) -> bool:
        return self._run(Method.HEAD, indices).status == 200

    # mappings

    def put_mapping(self, type_name: str, mapping: Any, indices: Sequence[str]) -> ResponseEnvelope:
        return self._run(Method.PUT, indices, api=f"_mappings/{type_name}", query=mapping)

    def get_mapping(self, types: Sequence[str], indices: Sequence[str]) -> ResponseEnvelope:
        return self._run(Method.GET, indices, api="_mapping/" + ",".join(types))

    def delete_mapping(self, type_name: str, indices: Sequence[str]) -> ResponseEnvelope:
        """Delete a mapping along with every document of that type."""
        return self._run(Method.DELETE, indices, api=f"_mappings/{type_name}")

    # aliases

    def _modify_alias(self, action: str, alias: str, indices: Sequence[str]) -> ResponseEnvelope:
        actions: List[Dict[str, Any]] = [
            {action: {"index": index, "alias": alias}} for index in indices
        ]
        return self._run(Method.POST, api="_aliases", query={"actions": actions})

    def add_alias(self, alias: str, indices: Sequence[str]) -> ResponseEnvelope:
        return self._modify_alias("add", alias, indices)

    def remove_alias(self, alias: str, indices: Sequence[str]) -> ResponseEnvelope:
        return self._modify_alias("remove", alias, indices)

    def alias_exists(self, alias: str) -> bool:
        return self._run(Method.HEAD, api=f"_alias/{alias}").status == 200

    # search

    def search(
        self,
        query: Any,
        indices: Sequence[str],
        types: Sequence[str] = (),
        params: ParamsInput = None,
    ) -> ResponseEnvelope:
        return self._run(Method.POST, indices, types, api="_search", params=params, query=query)

    def count(
        self,
        query: Any,
        indices: Sequence[str],
        types: Sequence[str] = (),
        params: ParamsInput = None,
    ) -> ResponseEnvelope:
        """Run a count query; the result is in ``envelope.count``."""
        return self._run(Method.POST, indices, types, api="_count", params=params, query=query)

    def query(
        self,
        query: Any,
        indices: Sequence[str],
        types: Sequence[str],
        method: Method | str,
        params: ParamsInput = None,
    ) -> ResponseEnvelope:
        """Run ``query`` against ``_query`` with any method; DELETE deletes by query."""
        return self._run(Method(method), indices, types, api="_query", params=params, query=query)

    def scan(
        self,
        query: Any,
        indices: Sequence[str],
        types: Sequence[str],
        timeout: str,
        size: int,
    ) -> ResponseEnvelope:
        """Open a scroll cursor; pass ``envelope.scroll_id`` to :meth:`scroll`."""
        params = [("search_type", "scan"), ("scroll", timeout), ("size", size)]
        return self._run(Method.POST, indices, types, api="_search", params=params, query=query)

    def scroll(self, scroll_id: str, timeout: str) -> ResponseEnvelope:
        """Fetch the next page of an open cursor; the id is sent verbatim as the body."""
        return self._run(
            Method.POST,
            api="_search/scroll",
            params=[("scroll", timeout)],
            body=scroll_id.encode("utf-8"),
        )

    # documents

    def get(
        self,
        index: str,
        doc_type: str,
        doc_id: str,
        params: ParamsInput = None,
    ) -> ResponseEnvelope:
        """Fetch one document; the id is escaped as a single path segment."""
        return self._run(
            Method.GET,
            [index],
            [doc_type],
            doc_id=_addressable_id(ExplicitId(doc_id)),
            params=params,
        )

    def index(self, document: DocumentOperation, params: ParamsInput = None) -> ResponseEnvelope:
        """Index ``document``: PUT under its explicit id, POST when the engine picks one."""

        fields = field_payload(document.fields)
        method = Method.POST
        if isinstance(document.id, ExplicitId):
            method = Method.PUT
        return self._run(
            method,
            [_require_index(document)],
            _types(document),
            doc_id=_addressable_id(document.id),
            params=params,
            query=fields if fields is not None else {},
        )

    def delete(self, document: DocumentOperation, params: ParamsInput = None) -> ResponseEnvelope:
        """Delete ``document``; a missing document answers 404 with ``found=False``."""

        if not isinstance(document.id, ExplicitId):
            raise EncodingError("delete requires an explicit document id")
        return self._run(
            Method.DELETE,
            [_require_index(document)],
            _types(document),
            doc_id=_addressable_id(document.id),
            params=params,
        )

    def update(
        self,
        document: DocumentOperation,
        query: Any,
        params: ParamsInput = None,
    ) -> ResponseEnvelope:
        """Partially update ``document`` through ``_update`` with ``query`` as the body."""

        return self._run(
            Method.POST,
            [_require_index(document)],
            _types(document),
            doc_id=_addressable_id(document.id),
            api="_update",
            params=params,
            query=query,
        )

    def bulk_send(self, documents: Sequence[DocumentOperation]) -> ResponseEnvelope:
        """Send many index/delete actions in one ``_bulk`` request.

        Results are in ``envelope.items`` in request order. When any action
        fails a BulkItemError is raised; successful actions are not rolled back.
        """

        payload = encode_bulk(documents)
        envelope = self._run(Method.POST, api="_bulk", bulk_data=payload)
        logger.debug("[bulk] %d actions accepted", len(envelope.items))
        return envelope


def _require_index(document: DocumentOperation) -> str:
    if not document.index:
        raise EncodingError("document operation requires an index name")
    return document.index


def _addressable_id(doc_id: DocumentId) -> DocumentId:
    if isinstance(doc_id, ExplicitId) and not doc_id.value:
        raise EncodingError("document id must not be empty when it is part of the path")
    return doc_id


def _types(document: DocumentOperation) -> List[str]:
    return [document.type] if document.type else []


__all__ = ["Client"]
