"""Feature lookup route."""

from typing import Optional

from fastapi import APIRouter

from baseline_checker import BaselineTier

from ..schemas import FeatureCheckOut
from ..utils import lookup_feature

router = APIRouter()


@router.get("/features/{token}", response_model=FeatureCheckOut, response_model_by_alias=True)
def get_feature(token: str, target: Optional[BaselineTier] = None) -> FeatureCheckOut:
    """Baseline status of one token. Unknown tokens answer with a null tier, not 404."""
    return FeatureCheckOut(**lookup_feature(token, target).to_dict())
