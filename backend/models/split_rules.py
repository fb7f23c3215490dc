# models/split_rules.py

from sqlalchemy import JSON, Column, ForeignKey, Integer, String

from db.base import Base


class FieldDefinition(Base):
    __tablename__ = "fields"

    id = Column(String, primary_key=True)
    label = Column(String, nullable=False)                    # display name, e.g. "Color"
    field_type = Column(String, nullable=False, default="text")  # text / select
    options = Column(JSON, nullable=True)                     # select options


class ProductField(Base):
    __tablename__ = "product_fields"

    id = Column(String, primary_key=True)
    product_id = Column(String, nullable=False, index=True)
    field_id = Column(String, ForeignKey("fields.id"), nullable=False, index=True)
    value = Column(String, nullable=True)


class ProductSplitRule(Base):
    __tablename__ = "product_split_rules"

    id = Column(String, primary_key=True)
    product_id = Column(String, nullable=False, index=True)
    split_by_field = Column(JSON, nullable=False, default=list)  # ["<field id>", ...]
    quantity = Column(Integer, nullable=False, default=0)
