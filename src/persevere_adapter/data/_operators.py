# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Comparison operator -> filter-query token."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Union

from ..core._error_codes import VALIDATION_UNKNOWN_OPERATOR
from ..core.errors import UnknownOperatorError
from ..models.query import Operator

OPERATOR_TOKENS: Mapping[Operator, str] = MappingProxyType(
    {
        Operator.EQL: "=",
        Operator.LT: "<",
        Operator.GT: ">",
        Operator.LTE: "<=",
        Operator.GTE: "=>",
        Operator.NOT: "!=",
        Operator.LIKE: "~",
    }
)


def operator_token(operator: Union[Operator, str]) -> str:
    """
    Filter-query token for ``operator``.

    :param operator: An :class:`~persevere_adapter.models.query.Operator` or its value (``"eql"``, ``"gt"``, ...).
    :raises ~persevere_adapter.core.errors.UnknownOperatorError: For anything the table does not map.
    """
    try:
        return OPERATOR_TOKENS[Operator(operator)]
    except (ValueError, KeyError):
        raise UnknownOperatorError(
            f"Unknown query operator: {operator!r}",
            subcode=VALIDATION_UNKNOWN_OPERATOR,
            details={"operator": str(operator), "supported": [op.value for op in OPERATOR_TOKENS]},
        ) from None


__all__ = ["OPERATOR_TOKENS", "operator_token"]
