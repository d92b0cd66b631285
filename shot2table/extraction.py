"""Lenient recovery of a table object embedded in free-form model output.

Vision models often wrap their JSON in prose or markdown fences, so the reply
is scanned for the span running from the first ``{`` to the last ``}`` and
only that span is parsed. Stray braces in the surrounding prose can widen the
span and make the parse fail; that is a known approximation of this scan.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from shot2table.errors import ParseError
from shot2table.models import TableData

_JSON_BLOCK_RE = re.compile(r"\{.*\}", re.DOTALL)


def find_json_block(text: str) -> str | None:
    match = _JSON_BLOCK_RE.search(text or "")
    if match is None:
        return None
    return match.group(0)


def _load_object(block: str, text: str) -> dict[str, Any]:
    try:
        payload = json.loads(block)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Embedded JSON is invalid: {exc.msg}", raw_content=text) from exc
    if not isinstance(payload, dict):
        raise ParseError("Embedded JSON is not an object.", raw_content=text)
    return payload


def parse_table_payload(text: str) -> TableData:
    """Extract `TableData` from a model reply or raise `ParseError`."""
    block = find_json_block(text)
    if block is None:
        raise ParseError("No JSON found in response.", raw_content=text)

    payload = _load_object(block, text)
    headers = payload.get("headers")
    rows = payload.get("rows")
    if not isinstance(headers, list) or not isinstance(rows, list):
        raise ParseError("Invalid table data format: 'headers' and 'rows' must be arrays.", raw_content=text)

    try:
        return TableData.model_validate({"headers": headers, "rows": rows})
    except ValidationError as exc:
        raise ParseError(f"Invalid table data format: {exc.error_count()} invalid fields.", raw_content=text) from exc
