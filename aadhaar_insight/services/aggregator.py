"""
Aggregator service - group records by a key and sum numeric fields.
"""
import math
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from aadhaar_insight.schemas.bundle import BioComplianceRow, DistrictRecord, RawDataRow
from aadhaar_insight.schemas.metrics import (
    AggregateBucket,
    AgePopulationPools,
    ComplianceBucket,
    ZoneDistribution,
)
from aadhaar_insight.utils.constants import ZONE_CAMP_TARGET, ZONE_FRAUD_RISK, ZONE_HEALTHY

KeySpec = Union[str, Callable[[Any], Any]]

_GROUP = "__group__"

AGE_BUCKET_FIELDS = [
    "enrolment.age_0_5",
    "enrolment.age_5_17",
    "enrolment.age_18_plus",
]


def get_field(record: Any, path: str) -> Any:
    """
    Read a (possibly dotted) field from a mapping or an attribute object.

    Returns None when any segment is missing.
    """
    value = record
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def _as_number(value: Any, field: str) -> float:
    if value is None:
        return 0
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, float, np.number)):
        raise TypeError(f"Field '{field}' must be numeric, got {type(value).__name__}")
    if isinstance(value, (float, np.floating)) and math.isnan(value):
        return 0
    return value


def _check_sequence(records: Any):
    if records is None or isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise TypeError(
            f"records must be a sequence of records, got {type(records).__name__}"
        )


def aggregate(
    records: Sequence[Any],
    key: KeySpec,
    value_fields: List[str]
) -> Dict[Any, AggregateBucket]:
    """
    Group records by a key and sum the given numeric fields.

    Args:
        records: Sequence of mappings or attribute objects
        key: Field name (dotted paths allowed) or callable returning the group key
        value_fields: Fields to sum. Missing or null values contribute 0.

    Returns:
        Mapping of key -> AggregateBucket. Unordered from the caller's point
        of view; sort the values if a ranking is needed.

    Raises:
        TypeError: if records is not a sequence or a value is non-numeric
    """
    _check_sequence(records)
    key_fn = key if callable(key) else (lambda r: get_field(r, key))
    value_fields = list(value_fields)

    keys: List[Any] = []
    key_index: Dict[Any, int] = {}
    rows = []
    for record in records:
        group_key = key_fn(record)
        if group_key not in key_index:
            key_index[group_key] = len(keys)
            keys.append(group_key)
        row = {f: _as_number(get_field(record, f), f) for f in value_fields}
        row[_GROUP] = key_index[group_key]
        rows.append(row)

    if not rows:
        return {}

    # Group on integer codes so tuple or None keys never reach the pandas index
    df = pd.DataFrame(rows, columns=[_GROUP] + value_fields)
    grouped = df.groupby(_GROUP, sort=True)
    sizes = grouped.size()
    sums = grouped[value_fields].sum() if value_fields else None

    result = {}
    for code in sizes.index:
        group_key = keys[int(code)]
        values = {f: float(sums.at[code, f]) for f in value_fields} if value_fields else {}
        result[group_key] = AggregateBucket(key=group_key, values=values, count=int(sizes[code]))
    return result


def merge_aggregates(*partials: Dict[Any, AggregateBucket]) -> Dict[Any, AggregateBucket]:
    """
    Merge partial aggregation results computed over disjoint record batches.

    Associative and commutative over the grouping key, so batches can be
    merged in any order. Rank only after the final merge.
    """
    merged: Dict[Any, AggregateBucket] = {}
    for partial in partials:
        for group_key, bucket in partial.items():
            current = merged.get(group_key)
            if current is None:
                merged[group_key] = bucket
                continue
            values = dict(current.values)
            for field, amount in bucket.values.items():
                values[field] = values.get(field, 0.0) + amount
            merged[group_key] = AggregateBucket(
                key=group_key,
                values=values,
                count=current.count + bucket.count
            )
    return merged


def compliance_by_state(
    rows: Sequence[BioComplianceRow],
    limit: Optional[int] = 5
) -> List[ComplianceBucket]:
    """
    Biometric compliance per state, largest required volume first.

    Args:
        rows: bio_compliance rows
        limit: Number of states to keep (None keeps all)
    """
    buckets = aggregate(rows, "state", ["enrolment_volume", "bio_update_volume"])

    compliance = []
    for bucket in buckets.values():
        required = int(bucket.values["enrolment_volume"])
        actual = int(bucket.values["bio_update_volume"])
        compliance.append(ComplianceBucket(
            state=bucket.key,
            required=required,
            actual=actual,
            compliance_pct=round(actual / required * 100, 2) if required > 0 else None
        ))

    compliance.sort(key=lambda b: b.required, reverse=True)
    return compliance if limit is None else compliance[:limit]


def state_totals(
    records: Sequence[Any],
    field: str,
    limit: Optional[int] = None
) -> List[AggregateBucket]:
    """Sum one field per state, largest first."""
    buckets = sorted(
        aggregate(records, "state", [field]).values(),
        key=lambda b: b.values[field],
        reverse=True
    )
    return buckets if limit is None else buckets[:limit]


def zone_distribution(records: Sequence[DistrictRecord]) -> ZoneDistribution:
    """Count strategic matrix rows per zone label."""
    buckets = aggregate(records, "zone", [])
    counts = {b.key: b.count for b in buckets.values()}
    return ZoneDistribution(
        counts=counts,
        fraud_risk=counts.get(ZONE_FRAUD_RISK, 0),
        camp_target=counts.get(ZONE_CAMP_TARGET, 0),
        healthy=counts.get(ZONE_HEALTHY, 0),
        total=sum(counts.values())
    )


def age_population_pools(raw_rows: Sequence[RawDataRow]) -> AgePopulationPools:
    """Sum the age-bucket enrolment counts of every raw row."""
    buckets = aggregate(raw_rows, lambda r: "all", AGE_BUCKET_FIELDS)
    if not buckets:
        return AgePopulationPools()

    totals = buckets["all"].values
    return AgePopulationPools(
        child_pool=totals["enrolment.age_0_5"],
        youth_pool=totals["enrolment.age_5_17"],
        adult_pool=totals["enrolment.age_18_plus"]
    )
