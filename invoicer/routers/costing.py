"""
Costing endpoints — run the furniture calculators.

POST /api/costing/{category}  — price, description, dimensions, breakdown
POST /api/costing/apply       — cost an invoice line and return it updated

The rate table comes from the database unless the request carries rate
overrides, which apply to that calculation only.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session

from .. import schemas
from ..calculators.registry import (
    ITEM_CATEGORIES, NO_CALCULATOR_MESSAGE, has_calculator, list_categories,
)
from ..database import get_db
from ..pricing_engine import PricingEngine
from .pricing import load_rates, validation_detail

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/costing", tags=["costing"])


def _engine(db: Session, overrides: Optional[dict]) -> PricingEngine:
    rates = load_rates(db)
    if overrides:
        try:
            rates = rates.with_rates(**overrides)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=validation_detail(e))
    return PricingEngine(rates)


@router.get("/categories")
def get_categories():
    return {
        "categories": ITEM_CATEGORIES,
        "costable": list_categories(),
    }


@router.post("/apply")
def apply_costing(request: schemas.ApplyCostingRequest, db: Session = Depends(get_db)):
    item = request.item.model_dump()
    try:
        PricingEngine.validate_dimensions(item.get("dimensions"))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if not has_calculator(item.get("category") or ""):
        raise HTTPException(status_code=404, detail=NO_CALCULATOR_MESSAGE)

    engine = _engine(db, request.rates)
    updated, result = engine.apply_to_item(item, request.fields)
    return {"item": updated, "result": result.to_dict()}


@router.post("/{category}")
def calculate(category: str, request: schemas.CostingRequest, db: Session = Depends(get_db)):
    if not has_calculator(category):
        raise HTTPException(status_code=404, detail=f"No calculator for category '{category}'. "
                                                    f"{NO_CALCULATOR_MESSAGE}")
    engine = _engine(db, request.rates)
    result = engine.cost_item(category, request.fields)
    logger.info("Costed %s: %.2f", category, result.price)
    return result.to_dict()
