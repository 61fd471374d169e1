# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Attribute mapping between typed records and the store's JSON objects.

Coercion is a pure function of the declared :class:`AttributeType`, so it can
be exercised without any live record.
"""

from __future__ import annotations

import datetime as _dt
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from ..core._error_codes import DECODE_COERCION_FAILED, DECODE_UNEXPECTED_SHAPE, VALIDATION_COERCION_FAILED
from ..core.errors import DecodeError, TypeCoercionError
from ..models.record import Record
from ..models.schema import Attribute, AttributeType, RecordKind

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "t", "1", "yes", "y", "on"})
_FALSE_STRINGS = frozenset({"false", "f", "0", "no", "n", "off"})


def _fail(attribute_type: AttributeType, value: Any, reason: Optional[str] = None) -> TypeCoercionError:
    message = f"Cannot cast {value!r} to {attribute_type.value}"
    if reason:
        message = f"{message}: {reason}"
    return TypeCoercionError(
        message,
        subcode=VALIDATION_COERCION_FAILED,
        details={"type": attribute_type.value, "value": repr(value)},
    )


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value.isoformat()
    raise _fail(AttributeType.STRING, value)


def _to_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise _fail(AttributeType.INTEGER, value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
    try:
        number = Decimal(str(value)) if not isinstance(value, Decimal) else value
    except (InvalidOperation, ValueError):
        raise _fail(AttributeType.INTEGER, value) from None
    if not number.is_finite() or number != number.to_integral_value():
        raise _fail(AttributeType.INTEGER, value, "not an integral number")
    return int(number)


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise _fail(AttributeType.FLOAT, value)
    try:
        return float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise _fail(AttributeType.FLOAT, value) from None


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise _fail(AttributeType.DECIMAL, value)
    if isinstance(value, Decimal):
        return value
    if not isinstance(value, (int, float, str)):
        raise _fail(AttributeType.DECIMAL, value)
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise _fail(AttributeType.DECIMAL, value) from None
    if not number.is_finite():
        raise _fail(AttributeType.DECIMAL, value, "not a finite number")
    return number


def _to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise _fail(AttributeType.BOOLEAN, value)


def _parse_iso_datetime(text: str) -> _dt.datetime:
    text = text.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return _dt.datetime.fromisoformat(text)


def _to_datetime(value: Any) -> _dt.datetime:
    if isinstance(value, _dt.datetime):
        return value
    if isinstance(value, _dt.date):
        return _dt.datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return _parse_iso_datetime(value)
        except ValueError:
            raise _fail(AttributeType.DATETIME, value) from None
    raise _fail(AttributeType.DATETIME, value)


def _to_date(value: Any) -> _dt.date:
    if isinstance(value, _dt.datetime):
        return value.date()
    if isinstance(value, _dt.date):
        return value
    if isinstance(value, str):
        try:
            return _dt.date.fromisoformat(value.strip())
        except ValueError:
            pass
        try:
            return _parse_iso_datetime(value).date()
        except ValueError:
            raise _fail(AttributeType.DATE, value) from None
    raise _fail(AttributeType.DATE, value)


_COERCERS: Dict[AttributeType, Callable[[Any], Any]] = {
    AttributeType.STRING: _to_text,
    AttributeType.TEXT: _to_text,
    AttributeType.INTEGER: _to_integer,
    AttributeType.FLOAT: _to_float,
    AttributeType.DECIMAL: _to_decimal,
    AttributeType.BOOLEAN: _to_boolean,
    AttributeType.DATETIME: _to_datetime,
    AttributeType.DATE: _to_date,
    AttributeType.OBJECT: lambda value: value,
}


def coerce_value(attribute_type: AttributeType, value: Any) -> Any:
    """
    Cast ``value`` to ``attribute_type``. ``None`` passes through.

    :raises ~persevere_adapter.core.errors.TypeCoercionError: If the value cannot be cast.
    """
    if value is None:
        return None
    return _COERCERS[AttributeType(attribute_type)](value)


def _to_json_value(value: Any) -> Any:
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def to_wire(record: Record) -> Dict[str, Any]:
    """
    Outbound mapping: the record's attribute values keyed by wire field.

    The identifier is never part of the payload. Values are coerced to their
    declared types first; undeclared keys are sent unchanged.

    :raises ~persevere_adapter.core.errors.TypeCoercionError: If a declared value cannot be cast.
    """
    kind = record.kind
    payload: Dict[str, Any] = {}
    for name, value in record.data.items():
        if name == kind.key:
            continue
        if name in kind:
            attribute = kind.attribute(name)
            payload[attribute.field_name] = _to_json_value(coerce_value(attribute.type, value))
        else:
            payload[name] = _to_json_value(value)
    return payload


def _wire_identifier(value: Any) -> Any:
    if isinstance(value, str) and "/" in value:
        return value.rsplit("/", 1)[-1]
    return value


def _decode_attributes(kind: RecordKind, payload: Mapping[str, Any], attributes: Iterable[Attribute]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for attribute in attributes:
        if attribute.name == kind.key or attribute.field_name not in payload:
            continue
        try:
            values[attribute.name] = coerce_value(attribute.type, payload[attribute.field_name])
        except TypeCoercionError as exc:
            raise DecodeError(
                f"Field {attribute.field_name!r} of {kind.name} could not be decoded: {exc.message}",
                subcode=DECODE_COERCION_FAILED,
                details={"kind": kind.name, "field": attribute.field_name, "type": attribute.type.value},
            ) from exc
    return values


def _require_object(kind: RecordKind, payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise DecodeError(
            f"Expected a JSON object for {kind.name}, got {type(payload).__name__}.",
            subcode=DECODE_UNEXPECTED_SHAPE,
            details={"kind": kind.name},
        )
    return payload


def _decode_identifier(kind: RecordKind, payload: Mapping[str, Any]) -> Any:
    key = kind.key_attribute
    raw = payload.get(key.field_name)
    if raw is None:
        return None
    try:
        return coerce_value(key.type, _wire_identifier(raw))
    except TypeCoercionError as exc:
        raise DecodeError(
            f"Identifier of {kind.name} could not be decoded: {exc.message}",
            subcode=DECODE_COERCION_FAILED,
            details={"kind": kind.name, "field": key.field_name},
        ) from exc


def from_wire(
    kind: RecordKind,
    payload: Any,
    fields: Optional[Iterable[Attribute]] = None,
) -> Record:
    """
    Inbound mapping: build a record of ``kind`` from a decoded JSON object.

    Only ``fields`` are read when given (the identifier always is); attributes
    absent from the payload stay unset.

    :raises ~persevere_adapter.core.errors.DecodeError: If the payload is not an
        object or a value cannot be cast to its declared type.
    """
    obj = _require_object(kind, payload)
    attributes = kind.attributes if fields is None else fields
    return Record(kind, id=_decode_identifier(kind, obj), data=_decode_attributes(kind, obj, attributes))


def apply_wire(record: Record, payload: Any) -> Record:
    """
    Inbound-map ``payload`` onto an existing record.

    Sets the store-assigned identifier and overwrites attributes the payload
    carries (server-computed values included).

    :raises ~persevere_adapter.core.errors.DecodeError: See :func:`from_wire`.
    :raises ~persevere_adapter.core.errors.ValidationError: If the payload
        carries a different identifier than the record already has.
    """
    kind = record.kind
    obj = _require_object(kind, payload)
    values = _decode_attributes(kind, obj, kind.attributes)
    identifier = _decode_identifier(kind, obj)
    if identifier is not None:
        record.assign_id(identifier)
    else:
        logger.debug("Response for %s carried no %r field", kind.name, kind.key_attribute.field_name)
    record.data.update(values)
    return record


__all__ = ["coerce_value", "to_wire", "from_wire", "apply_wire"]
