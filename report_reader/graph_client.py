#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Lightweight GraphQL client for the rollups reader endpoint."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import requests

from .logging_config import get_logger
from .query_errors import GraphQLQueryError, TransportError

logger = get_logger(__name__)


@dataclass(frozen=True)
class Ok:
    data: Dict[str, Any]
    errors: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class Err:
    error: GraphQLQueryError


@dataclass(frozen=True)
class Empty:
    pass


QueryResult = Union[Ok, Err, Empty]


def to_result(document: Any) -> QueryResult:
    """Map a GraphQL response body to ``Ok``, ``Err`` or ``Empty``."""
    if not isinstance(document, dict):
        return Empty()

    data = document.get("data")
    errors = document.get("errors") or []
    if isinstance(data, dict) and any(value is not None for value in data.values()):
        return Ok(data, errors)
    if errors:
        return Err(GraphQLQueryError(errors))
    return Empty()


class GraphQLClient:
    """POST GraphQL documents to a single endpoint over a ``requests`` session."""

    def __init__(
        self,
        url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        if not url:
            raise ValueError("GraphQL endpoint URL is required")
        self.url = url
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def __enter__(self) -> "GraphQLClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def execute(self, query: str, variables: Dict[str, Any] | None = None) -> QueryResult:
        """Execute a GraphQL query and classify the response.

        Raises:
            TransportError: the endpoint is unreachable, timed out, or did not
                answer with a GraphQL JSON document
        """
        payload = {"query": query, "variables": variables or {}}
        try:
            response = self.session.post(
                self.url,
                json=payload,
                headers={"content-type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"POST {self.url} failed: {exc}") from exc

        try:
            document = response.json()
        except ValueError:
            document = None

        # GraphQL servers may answer errors with a 4xx status and a JSON body
        if not isinstance(document, dict) or not (
            "data" in document or "errors" in document
        ):
            try:
                response.raise_for_status()
            except requests.HTTPError as exc:
                raise TransportError(str(exc), status_code=response.status_code) from exc
            raise TransportError(
                f"POST {self.url} returned a non-GraphQL response",
                status_code=response.status_code,
            )

        result = to_result(document)
        if isinstance(result, Ok) and result.errors:
            logger.debug("partial result from %s with errors: %s", self.url, result.errors)
        return result
