from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


class CombinationQueryError(Exception):
    """Split rule data could not be read from the database."""


@dataclass
class RuleFieldValue:
    rule_id: str
    product_id: str
    field_id: str
    field_name: str
    field_value: str | None


_SQLITE_RULE_FIELD_VALUES = """
    SELECT
      psr.id AS rule_id,
      psr.product_id AS product_id,
      f.id AS field_id,
      f.label AS field_name,
      pf.value AS field_value
    FROM product_split_rules psr
    CROSS JOIN json_each(psr.split_by_field) AS je
    JOIN product_fields pf
      ON pf.product_id = psr.product_id
      AND pf.field_id = je.value
    JOIN fields f
      ON f.id = pf.field_id
    WHERE psr.product_id = :product_id
    ORDER BY psr.id, f.label, pf.value
"""

# COLLATE "C" and NULLS FIRST match SQLite's BINARY default ordering
_POSTGRES_RULE_FIELD_VALUES = """
    SELECT
      psr.id AS rule_id,
      psr.product_id AS product_id,
      f.id AS field_id,
      f.label AS field_name,
      pf.value AS field_value
    FROM product_split_rules psr
    CROSS JOIN LATERAL json_array_elements_text(psr.split_by_field) AS je(value)
    JOIN product_fields pf
      ON pf.product_id = psr.product_id
      AND pf.field_id = je.value
    JOIN fields f
      ON f.id = pf.field_id
    WHERE psr.product_id = :product_id
    ORDER BY psr.id COLLATE "C", f.label COLLATE "C", pf.value COLLATE "C" NULLS FIRST
"""


def _rule_field_values_sql(db: Session) -> str:
    if db.get_bind().dialect.name == "postgresql":
        return _POSTGRES_RULE_FIELD_VALUES
    return _SQLITE_RULE_FIELD_VALUES


def load_rule_field_values(db: Session, product_id: str) -> list[RuleFieldValue]:
    """
    One row per (split rule, referenced field, stored value) for a product,
    ordered by rule id, field label, then value.
    An unknown product or a product without rules gives an empty list.
    """
    try:
        rows = (
            db.execute(
                text(_rule_field_values_sql(db)),
                {"product_id": product_id},
            )
            .mappings()
            .all()
        )
    except SQLAlchemyError as exc:
        raise CombinationQueryError(f"split rule query failed for product {product_id!r}") from exc

    return [
        RuleFieldValue(
            rule_id=row["rule_id"],
            product_id=row["product_id"],
            field_id=row["field_id"],
            field_name=row["field_name"],
            field_value=row["field_value"],
        )
        for row in rows
    ]
