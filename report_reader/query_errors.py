#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Error classes for reader GraphQL queries."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ReaderError(Exception):
    """Base class for reader query errors."""


class TransportError(ReaderError):
    """The endpoint could not be reached or did not answer with GraphQL JSON."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GraphQLQueryError(ReaderError):
    """The server answered with an ``errors`` payload (e.g. report not found)."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = list(errors or [])
        super().__init__(format_errors(self.errors))


class ReportFetchError(ReaderError):
    """A single report could not be fetched."""
    pass


def format_errors(errors: List[Dict[str, Any]]) -> str:
    """
    Join the messages of a GraphQL ``errors`` list.

    Args:
        errors: Error objects as returned by the server

    Returns:
        Messages separated by newlines ("" when none carry a message)
    """
    messages = []
    for error in errors:
        if isinstance(error, dict):
            message = error.get("message")
        else:
            message = error
        if message:
            messages.append(str(message))
    return "\n".join(messages)


def is_query_error(error: Exception) -> bool:
    """True for query-level errors returned by the server."""
    return isinstance(error, GraphQLQueryError)
