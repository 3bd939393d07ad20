#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""GraphQL documents of the rollups reader schema."""

# list queries select exactly the PartialReport fields
REPORTS_QUERY = """
query reports {
  reports {
    edges {
      node {
        __typename
        index
        input {
          index
        }
        payload
      }
    }
  }
}
"""

REPORTS_BY_INPUT_QUERY = """
query reportsByInput($inputIndex: Int!) {
  input(index: $inputIndex) {
    reports {
      edges {
        node {
          __typename
          index
          input {
            index
          }
          payload
        }
      }
    }
  }
}
"""

REPORT_QUERY = """
query report($reportIndex: Int!, $inputIndex: Int!) {
  report(reportIndex: $reportIndex, inputIndex: $inputIndex) {
    __typename
    index
    input {
      index
      timestamp
      msgSender
      blockNumber
      payload
    }
    payload
  }
}
"""
