"""Schemas for the HSN/SAC catalogue and frequently used items."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from invoicer.domain.services.hsn_sac import validate_hsn_sac_code


class HsnSacCreate(BaseModel):
    code: str = Field(min_length=4, max_length=8)
    type: Literal["HSN", "SAC"]
    description: str = Field(min_length=3)
    category: str = Field(min_length=2, max_length=100)
    sub_category: str | None = Field(default=None, max_length=100)
    gst_rate: Decimal | None = Field(default=None, ge=0, le=28)
    unit_of_measurement: str = Field(default="NOS", max_length=10)

    @model_validator(mode="after")
    def check_code(self):
        result = validate_hsn_sac_code(self.code, self.type)
        if not result.is_valid:
            raise ValueError("; ".join(result.errors))
        self.code = result.normalized_code
        return self


class FrequentItemCreate(BaseModel):
    item_name: str = Field(min_length=1, max_length=255)
    hsn_sac_code: str | None = Field(default=None, max_length=8)
    hsn_sac_type: Literal["HSN", "SAC"] = "HSN"
    default_rate: Decimal | None = Field(default=None, ge=0)
    default_gst_rate: Decimal = Field(default=Decimal("18"), ge=0, le=28)
    unit_of_measurement: str = Field(default="NOS", max_length=10)
    category: str | None = Field(default=None, max_length=100)
