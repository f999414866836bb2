"""
Shipment schemas.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime
from typing import Optional, Union, Any, List
from decimal import Decimal
from fleetbook.models.shipment import RateMode
from fleetbook.services.freight import FIXED_RATE_TOKEN, MAX_AMOUNT, is_fixed_rate_token, to_decimal
from fleetbook.services.records import to_naive_datetime


class ShipmentFields(BaseModel):
    """Shared coercion for create and update payloads."""

    @field_validator("weight", "delivery_charge", "freight", mode="before", check_fields=False)
    @classmethod
    def coerce_amount(cls, value: Any):
        if value is None:
            return value
        return to_decimal(value)

    @field_validator("rate", mode="before", check_fields=False)
    @classmethod
    def coerce_rate(cls, value: Any):
        if value is None:
            return value
        if is_fixed_rate_token(value):
            return FIXED_RATE_TOKEN
        rate = to_decimal(value)
        if abs(rate) > MAX_AMOUNT:
            raise ValueError(f"rate must not exceed {MAX_AMOUNT}")
        return rate

    @field_validator("number_of_articles", mode="before", check_fields=False)
    @classmethod
    def coerce_articles(cls, value: Any):
        if value is None:
            return value
        return str(value).strip()

    @field_validator(
        "consignment_number", "truck_number", "consignor", "consignor_location",
        "consignee", "consignee_location", "nature_of_goods",
        mode="before", check_fields=False,
    )
    @classmethod
    def strip_text(cls, value: Any):
        if value is None:
            return value
        return str(value).strip()

    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def normalize_date(cls, value: Any):
        return to_naive_datetime(value) or value


class ShipmentCreate(ShipmentFields):
    date: datetime
    consignment_number: str = ""
    truck_number: str = ""
    consignor: str = ""
    consignor_location: str = ""
    consignee: str = ""
    consignee_location: str = ""
    weight: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT)
    rate: Optional[Union[Decimal, str]] = None
    rate_mode: Optional[RateMode] = None
    delivery_charge: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT)
    freight: Optional[Decimal] = Field(default=None, le=MAX_AMOUNT)  # only honoured in fixed mode
    number_of_articles: str = ""
    nature_of_goods: str = ""
    notes: Optional[str] = None


class ShipmentUpdate(ShipmentFields):
    date: Optional[datetime] = None
    consignment_number: Optional[str] = None
    truck_number: Optional[str] = None
    consignor: Optional[str] = None
    consignor_location: Optional[str] = None
    consignee: Optional[str] = None
    consignee_location: Optional[str] = None
    weight: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)
    rate: Optional[Union[Decimal, str]] = None
    rate_mode: Optional[RateMode] = None
    delivery_charge: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)
    freight: Optional[Decimal] = Field(default=None, le=MAX_AMOUNT)
    number_of_articles: Optional[str] = None
    nature_of_goods: Optional[str] = None
    notes: Optional[str] = None


class ShipmentResponse(BaseModel):
    id: int
    date: datetime
    consignment_number: str
    truck_number: str
    consignor: str
    consignor_location: str
    consignee: str
    consignee_location: str
    weight: Decimal
    rate: Optional[Union[Decimal, str]] = None
    rate_mode: RateMode
    delivery_charge: Decimal
    freight: Decimal
    number_of_articles: str
    nature_of_goods: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @model_validator(mode="after")
    def show_fixed_rate(self):
        if self.rate_mode == RateMode.FIXED:
            self.rate = FIXED_RATE_TOKEN
        return self


class FacetOptionsResponse(BaseModel):
    consignor: List[str] = []
    consignee: List[str] = []
    consignor_location: List[str] = []
    consignee_location: List[str] = []
    truck_number: List[str] = []
    nature_of_goods: List[str] = []
