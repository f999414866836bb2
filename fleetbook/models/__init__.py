from .shipment import Shipment, RateMode
from .resource import ResourceEntry

__all__ = [
    "Shipment",
    "RateMode",
    "ResourceEntry",
]
