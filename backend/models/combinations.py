from pydantic import BaseModel, ConfigDict, Field


class SplitCombinationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    product_id: str = Field(..., alias="productId")
    product_split_rule_id: str = Field(..., alias="productSplitRuleId")
    combination: dict[str, str | None]


class CombinationErrorOut(BaseModel):
    error: str
