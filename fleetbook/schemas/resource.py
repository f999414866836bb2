"""
Resource list schemas.
"""
from pydantic import BaseModel, field_validator
from typing import Dict, List
import enum


class ResourceType(str, enum.Enum):
    CONSIGNORS = "consignors"
    CONSIGNEES = "consignees"
    CONSIGNOR_LOCATIONS = "consignor_locations"
    CONSIGNEE_LOCATIONS = "consignee_locations"
    TRUCK_NUMBERS = "truck_numbers"
    NATURE_OF_GOODS = "nature_of_goods"


class ResourceValue(BaseModel):
    value: str

    @field_validator("value")
    @classmethod
    def strip_value(cls, value: str) -> str:
        return value.strip()


class ResourceListsResponse(BaseModel):
    consignors: List[str] = []
    consignees: List[str] = []
    consignor_locations: List[str] = []
    consignee_locations: List[str] = []
    truck_numbers: List[str] = []
    nature_of_goods: List[str] = []


class ResourceLabelsResponse(BaseModel):
    labels: Dict[str, str]
