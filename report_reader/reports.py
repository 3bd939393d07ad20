#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Report queries against the rollups reader GraphQL endpoint.

Two operations are exposed:

* ``list_reports`` – every report, or only the reports of one input.  A
  single attempt; missing data or a query error yields an empty list.
* ``get_report`` – one report by ``(input_index, report_index)``.  Query
  errors (typically "report not found" while the input is still being
  processed) are retried according to ``REPORT_RETRY``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import requests

from .graph_client import Err, GraphQLClient, Ok, QueryResult
from .logging_config import get_logger
from .queries import REPORT_QUERY, REPORTS_BY_INPUT_QUERY, REPORTS_QUERY
from .query_errors import GraphQLQueryError, ReportFetchError, TransportError
from .retry_policy import REPORT_RETRY, RetryConfig, retry_with_backoff

logger = get_logger(__name__)

Report = Dict[str, Any]


@dataclass(frozen=True)
class PartialReport:
    """The report fields read by list queries, nothing more."""

    typename: Optional[str]
    index: int
    payload: str
    input_index: int

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> Optional["PartialReport"]:
        """Project a report node; None when it lacks its own or its input's index."""
        input_node = node.get("input")
        if node.get("index") is None or not isinstance(input_node, dict):
            return None
        if input_node.get("index") is None:
            return None
        return cls(
            typename=node.get("__typename"),
            index=int(node["index"]),
            payload=node.get("payload") or "",
            input_index=int(input_node["index"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "__typename": self.typename,
            "index": self.index,
            "payload": self.payload,
            "input": {"index": self.input_index},
        }


def _edges_to_reports(edges: Optional[List[Any]]) -> List[PartialReport]:
    reports: List[PartialReport] = []
    for edge in edges or []:
        if not edge or not edge.get("node"):
            continue
        report = PartialReport.from_node(edge["node"])
        if report is None:
            logger.debug("skipping incomplete report node: %s", edge["node"])
            continue
        reports.append(report)
    return reports


def _check_index(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return value


class ReportQueryClient:
    """Query reports from one reader endpoint."""

    def __init__(
        self,
        url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
        retry: RetryConfig = REPORT_RETRY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.url = url
        self.retry = retry
        self.sleep = sleep
        self.graph = GraphQLClient(url, session=session, timeout=timeout)

    def __enter__(self) -> "ReportQueryClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self.graph.close()

    def list_reports(self, input_index: Optional[int] = None) -> List[PartialReport]:
        """
        List reports, optionally only those of one input.

        Args:
            input_index: Input whose reports are listed (all reports if None)

        Returns:
            Reports in server order; empty when the server has no data

        Raises:
            TransportError: the endpoint could not be reached
        """
        if input_index is not None:
            _check_index("input_index", input_index)
        logger.info(
            'querying %s for reports of input index "%s"...', self.url, input_index
        )

        if input_index is not None:
            result = self.graph.execute(
                REPORTS_BY_INPUT_QUERY, {"inputIndex": input_index}
            )
            edges = _dig(result, "input", "reports", "edges")
        else:
            result = self.graph.execute(REPORTS_QUERY, {})
            edges = _dig(result, "reports", "edges")

        if isinstance(result, Err):
            logger.warning("reports query failed, returning no reports: %s", result.error)
        if edges is None:
            logger.debug("no reports in response from %s", self.url)
            return []
        return _edges_to_reports(edges)

    def get_report(self, input_index: int, report_index: int = 0) -> Report:
        """
        Fetch one report, retrying while the server reports a query error.

        Args:
            input_index: Index of the input that produced the report
            report_index: Index of the report within the input (default 0)

        Returns:
            The report as returned by the server

        Raises:
            ReportFetchError: no report after the retry budget, no data at
                all, or the endpoint could not be reached
        """
        _check_index("input_index", input_index)
        _check_index("report_index", report_index)
        logger.info(
            'querying %s for report with index "%s" from input "%s"...',
            self.url,
            report_index,
            input_index,
        )
        variables = {"inputIndex": input_index, "reportIndex": report_index}

        try:
            result = retry_with_backoff(
                self._attempt_report, variables, config=self.retry, sleep=self.sleep
            )
        except (TransportError, GraphQLQueryError) as exc:
            raise ReportFetchError(str(exc)) from exc

        report = _dig(result, "report")
        if not report:
            raise ReportFetchError("")
        return report

    def _attempt_report(self, variables: Dict[str, Any]) -> QueryResult:
        result = self.graph.execute(REPORT_QUERY, variables)
        if isinstance(result, Err):
            raise result.error
        return result


def _dig(result: QueryResult, *path: str) -> Any:
    if not isinstance(result, Ok):
        return None
    value: Any = result.data
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def list_reports(
    url: str,
    input_index: Optional[int] = None,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = 30,
) -> List[PartialReport]:
    """Query ``url`` for reports, optionally of a single input."""
    with ReportQueryClient(url, session=session, timeout=timeout) as client:
        return client.list_reports(input_index)


def get_report(
    url: str,
    input_index: int,
    report_index: int = 0,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = 30,
    retry: RetryConfig = REPORT_RETRY,
    sleep: Callable[[float], None] = time.sleep,
) -> Report:
    """Query ``url`` for one report, with retries (see ``REPORT_RETRY``)."""
    with ReportQueryClient(
        url, session=session, timeout=timeout, retry=retry, sleep=sleep
    ) as client:
        return client.get_report(input_index, report_index)
