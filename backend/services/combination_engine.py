import itertools
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from services.combination_repository import RuleFieldValue, load_rule_field_values

logger = logging.getLogger(__name__)


@dataclass
class RuleGroup:
    rule_id: str
    product_id: str
    fields: dict[str, list[str | None]] = field(default_factory=dict)  # field name -> values, first-seen order


@dataclass
class Combination:
    id: int
    product_id: str
    product_split_rule_id: str
    combination: dict[str, str | None]


def group_rule_rows(rows: Iterable[RuleFieldValue]) -> list[RuleGroup]:
    """
    Fold loader rows into one RuleGroup per rule id.

    Rules, field names and values all keep the order in which the rows
    present them. Values are not deduplicated: a (field, value) pair that
    the query returns twice shows up twice.
    """
    groups: dict[str, RuleGroup] = {}
    for row in rows:
        group = groups.get(row.rule_id)
        if group is None:
            group = RuleGroup(rule_id=row.rule_id, product_id=row.product_id)
            groups[row.rule_id] = group
        group.fields.setdefault(row.field_name, []).append(row.field_value)
    return list(groups.values())


def expand_rule_group(
    group: RuleGroup,
    ids: Iterator[int] | None = None,
) -> list[Combination]:
    """
    Cartesian product of the group's field values.

    The first field is the slowest changing one, the last field the fastest.
    A group without fields yields no combinations at all. ``ids`` supplies the
    ordinals and is shared between groups of the same request.
    """
    if not group.fields:
        return []
    if ids is None:
        ids = itertools.count(1)

    partials: list[dict[str, str | None]] = [{}]
    for field_name, values in group.fields.items():
        partials = [
            {**partial, field_name: value}
            for partial in partials
            for value in values
        ]

    return [
        Combination(
            id=next(ids),
            product_id=group.product_id,
            product_split_rule_id=group.rule_id,
            combination=partial,
        )
        for partial in partials
    ]


def generate_split_combinations(db: Session, product_id: str) -> list[Combination]:
    rows = load_rule_field_values(db, product_id)
    groups = group_rule_rows(rows)

    ids = itertools.count(1)
    results: list[Combination] = []
    for group in groups:
        results.extend(expand_rule_group(group, ids))

    logger.info(
        "COMBINATIONS: product=%s rules=%s combinations=%s",
        product_id,
        len(groups),
        len(results),
    )
    return results
