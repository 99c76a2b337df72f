from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session
import logging
from .. import models
from ..calculators.rates import CURRENCY, DEFAULT_RATES, RateTable, rate_names
from ..database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pricing", tags=["pricing"])


def validation_detail(e: ValidationError) -> list:
    return [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in e.errors()]


def seed_pricing(db: Session) -> bool:
    """Store the default rate table if none exists. Safe to run multiple times."""
    if db.query(models.PricingSetting).first():
        return False
    db.add(models.PricingSetting(rates_json=DEFAULT_RATES.model_dump()))
    db.commit()
    logger.info("Seeded default rate table")
    return True


def load_rates(db: Session) -> RateTable:
    """The rate table in effect. Rates added since the row was saved take their defaults."""
    setting = db.query(models.PricingSetting).first()
    if not setting:
        return DEFAULT_RATES
    names = set(rate_names())
    known = {k: v for k, v in (setting.rates_json or {}).items() if k in names}
    return DEFAULT_RATES.with_rates(**known)


def _save_rates(db: Session, rates: RateTable) -> RateTable:
    setting = db.query(models.PricingSetting).first()
    if setting:
        setting.rates_json = rates.model_dump()
    else:
        db.add(models.PricingSetting(rates_json=rates.model_dump()))
    db.commit()
    return rates


def _rates_response(rates: RateTable) -> dict:
    return {"currency": CURRENCY, "rates": rates.model_dump()}


@router.get("")
def get_pricing(db: Session = Depends(get_db)):
    return _rates_response(load_rates(db))


@router.put("")
def update_pricing(changes: dict, db: Session = Depends(get_db)):
    """Partial update — only the named rates change. Unknown names are rejected."""
    try:
        rates = load_rates(db).with_rates(**changes)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=validation_detail(e))
    _save_rates(db, rates)
    logger.info("Updated rates: %s", ", ".join(sorted(changes)))
    return _rates_response(rates)


@router.post("/reset")
def reset_pricing(db: Session = Depends(get_db)):
    _save_rates(db, DEFAULT_RATES)
    logger.info("Rate table reset to defaults")
    return _rates_response(DEFAULT_RATES)
