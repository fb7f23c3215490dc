import argparse

from db.base import Base
from db.session import SessionLocal, engine
from models.split_rules import FieldDefinition, ProductField, ProductSplitRule


DEMO_FIELDS = {
    "field_color": ("Color", ["Blue", "Red"]),
    "field_size": ("Size", ["L", "M", "S"]),
}


def ensure_field(db, field_id: str, label: str, options: list[str]) -> bool:
    if db.get(FieldDefinition, field_id) is not None:
        return False
    db.add(FieldDefinition(id=field_id, label=label, field_type="select", options=options))
    return True


def ensure_product_value(db, product_id: str, field_id: str, value: str) -> bool:
    record_id = f"{product_id}_{field_id}_{value}"
    if db.get(ProductField, record_id) is not None:
        return False
    db.add(ProductField(id=record_id, product_id=product_id, field_id=field_id, value=value))
    return True


def ensure_split_rule(db, rule_id: str, product_id: str, field_ids: list[str]) -> bool:
    if db.get(ProductSplitRule, rule_id) is not None:
        return False
    db.add(ProductSplitRule(id=rule_id, product_id=product_id, split_by_field=field_ids, quantity=0))
    return True


def main():
    parser = argparse.ArgumentParser(description="Seed a demo product with split rule data.")
    parser.add_argument("--product-id", required=True)
    parser.add_argument("--rule-id", default=None, help="defaults to <product-id>_rule")
    args = parser.parse_args()

    product_id = args.product_id.strip()
    if not product_id:
        raise SystemExit("Product id must not be empty")
    rule_id = (args.rule_id or f"{product_id}_rule").strip()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        fields_created = 0
        values_created = 0
        for field_id, (label, values) in DEMO_FIELDS.items():
            fields_created += ensure_field(db, field_id, label, values)
            for value in values:
                values_created += ensure_product_value(db, product_id, field_id, value)
        rule_created = ensure_split_rule(db, rule_id, product_id, list(DEMO_FIELDS))
        db.commit()
        print(
            f"Seed complete. fields_created={fields_created} "
            f"values_created={values_created} rule_created={rule_created}"
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
