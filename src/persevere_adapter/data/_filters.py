# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Query conditions -> REST filter string.

``[(eql, title, "Hello, World!"), (gt, year, 1999)]`` becomes
``?title='Hello, World!'&year>1999``. The request path carries the same
terms with each value percent-encoded:
``?title='Hello%2C%20World%21'&year>1999``.
"""

from __future__ import annotations

import datetime as _dt
import logging
from decimal import Decimal
from typing import Any, Iterable, List, Tuple
from urllib.parse import quote

from ..models.query import Condition, Operator
from ._mapping import coerce_value
from ._operators import operator_token

logger = logging.getLogger(__name__)


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _format_value(value: Any) -> str:
    """
    Render a coerced value in filter syntax.

    Strings, datetimes and dates are quoted; booleans render lowercase;
    numbers render their canonical ``str``.
    """
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (_dt.datetime, _dt.date)):
        return _quote(value.isoformat())
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def _plain_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value.isoformat()
    return _format_value(value)


def _format_term(condition: Condition) -> Tuple[str, str, str]:
    attribute = condition.attribute
    token = operator_token(condition.operator)
    value = coerce_value(attribute.type, condition.value)
    if condition.operator is Operator.LIKE:
        return attribute.field_name, token, _quote(f"*{_plain_text(value)}*")
    return attribute.field_name, token, _format_value(value)


def _encode(text: str) -> str:
    # quotes and wildcards stay literal; "#", "&", "%" and the rest are escaped
    return quote(text, safe="'*")


def build_filter_string(conditions: Iterable[Condition], *, encode: bool = False) -> str:
    """
    Translate ``conditions`` into a filter string.

    Terms keep the conditions' order and are joined with ``&`` behind a
    leading ``?``. A condition without an attribute or value is skipped; no
    terms yields ``""``.

    :param conditions: Conditions to translate.
    :param encode: Percent-encode each rendered field name and value so the
        result can be appended to a request path.
    :raises ~persevere_adapter.core.errors.UnknownOperatorError: For an unsupported operator.
    :raises ~persevere_adapter.core.errors.TypeCoercionError: If a value cannot be cast to its attribute's type.
    """
    terms: List[str] = []
    for condition in conditions:
        if condition.attribute is None or condition.value is None:
            logger.debug("Skipping unconstrained condition %r", condition)
            continue
        field_name, token, value = _format_term(condition)
        if encode:
            field_name, value = _encode(field_name), _encode(value)
        terms.append(f"{field_name}{token}{value}")
    if not terms:
        return ""
    return "?" + "&".join(terms)


__all__ = ["build_filter_string"]
