"""Client helpers for rollups reader reports."""

from .graph_client import Empty, Err, GraphQLClient, Ok, QueryResult
from .payload import decode_payload, payload_to_text
from .query_errors import (
    GraphQLQueryError,
    ReaderError,
    ReportFetchError,
    TransportError,
)
from .reports import (
    PartialReport,
    Report,
    ReportQueryClient,
    get_report,
    list_reports,
)
from .retry_policy import REPORT_RETRY, RetryConfig, retry_with_backoff

__all__ = [
    "Empty",
    "Err",
    "GraphQLClient",
    "GraphQLQueryError",
    "Ok",
    "PartialReport",
    "QueryResult",
    "REPORT_RETRY",
    "ReaderError",
    "Report",
    "ReportFetchError",
    "ReportQueryClient",
    "RetryConfig",
    "TransportError",
    "decode_payload",
    "get_report",
    "list_reports",
    "payload_to_text",
    "retry_with_backoff",
]
