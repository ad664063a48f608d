# invoicer/api/v1/routes/business.py
"""Business profile: the seller details printed on invoices."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from invoicer.domain.services.gstin_pan_validation import state_from_gstin
from invoicer.infrastructure.db.models import User
from invoicer.infrastructure.db.repositories import UserRepository

from invoicer.api.v1.deps import get_current_user, user_repo
from invoicer.api.v1.envelope import ok
from invoicer.api.v1.schemas.business import BusinessProfile, BusinessUpdate

logger = logging.getLogger("api.v1.business")

router = APIRouter(prefix="/business", tags=["Business"])


def _profile(user: User) -> dict:
    return BusinessProfile(
        business_name=user.business_name,
        business_address=user.business_address,
        business_state=user.business_state,
        business_gst=user.business_gst,
        business_phone=user.business_phone,
        business_email=user.business_email,
        is_complete=bool((user.business_name or "").strip() and (user.business_address or "").strip()),
    ).model_dump()


@router.get("", response_model=dict)
async def get_business(user: User = Depends(get_current_user)):
    return ok(data=_profile(user))


@router.patch("", response_model=dict)
async def update_business(
    body: BusinessUpdate,
    user: User = Depends(get_current_user),
    users: UserRepository = Depends(user_repo),
):
    """
    Update the profile. When a GSTIN is set without a state, the state is
    taken from the GSTIN's state code.
    """
    fields = body.model_dump(exclude_unset=True)
    if fields.get("business_gst") and not fields.get("business_state"):
        derived = state_from_gstin(fields["business_gst"])
        if derived:
            fields["business_state"] = derived

    user = await users.update_profile(user, fields)
    logger.info("Business profile updated for user %s (%s)", user.id, ", ".join(sorted(fields)))
    return ok(data=_profile(user), message="Business information updated")
