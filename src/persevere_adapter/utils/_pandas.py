# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from ..models.record import Record
from ..models.schema import Attribute, RecordKind


def records_to_dataframe(
    kind: RecordKind,
    records: Iterable[Record],
    fields: Optional[Iterable[Attribute]] = None,
) -> pd.DataFrame:
    """Build a DataFrame with the identifier column first, then one column per attribute.

    :param kind: Record kind the columns are taken from.
    :param records: Records to convert.
    :param fields: Attributes to include (default: every declared attribute).
    """
    attributes = list(fields) if fields is not None else list(kind.value_attributes)
    columns = [kind.key] + [a.name for a in attributes if a.name != kind.key]
    rows: List[Dict[str, Any]] = []
    for record in records:
        row = {name: record.get(name) for name in columns[1:]}
        row[kind.key] = record.id
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def dataframe_to_records(kind: RecordKind, df: pd.DataFrame) -> List[Record]:
    """Convert DataFrame rows to new records of ``kind``.

    Missing values are omitted and Timestamps become datetimes. An identifier
    column, if present, is ignored (the store assigns identifiers).
    """
    records = []
    for row in df.to_dict(orient="records"):
        data = {}
        for k, v in row.items():
            if k == kind.key:
                continue
            if not isinstance(v, (list, dict)) and pd.isna(v):
                continue
            data[k] = v.to_pydatetime() if isinstance(v, pd.Timestamp) else v
        records.append(Record(kind, data=data))
    return records
