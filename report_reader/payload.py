#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Hex payload helpers for reports."""

from __future__ import annotations

from web3 import Web3


def decode_payload(payload: str) -> bytes:
    """Convert a hex payload (``0x``-prefixed or not) to raw bytes."""
    if not payload:
        return b""
    return bytes(Web3.to_bytes(hexstr=payload))


def payload_to_text(payload: str) -> str:
    """Render a payload as UTF-8 text, or return it unchanged when it is not text."""
    try:
        return decode_payload(payload).decode("utf-8")
    except (UnicodeDecodeError, ValueError):
        return payload
