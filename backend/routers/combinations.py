# routers/combinations.py

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from db.deps import get_db
from models.combinations import CombinationErrorOut, SplitCombinationOut
from services.combination_engine import generate_split_combinations
from services.combination_repository import CombinationQueryError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["combinations"])


@router.get(
    "/{product_id}/combinations",
    response_model=list[SplitCombinationOut],
    response_model_by_alias=True,
    responses={400: {"model": CombinationErrorOut}},
)
def get_product_combinations(product_id: str, db: Session = Depends(get_db)):
    try:
        combinations = generate_split_combinations(db, product_id)
    except CombinationQueryError:
        logger.exception("Combination generation failed: product=%s", product_id)
        return JSONResponse(
            status_code=400,
            content={"error": "Failed to generate combinations"},
        )

    return [
        SplitCombinationOut(
            id=str(item.id),
            product_id=item.product_id,
            product_split_rule_id=item.product_split_rule_id,
            combination=item.combination,
        )
        for item in combinations
    ]
