from .shipment import ShipmentCreate, ShipmentUpdate, ShipmentResponse, FacetOptionsResponse
from .resource import ResourceType, ResourceValue, ResourceListsResponse, ResourceLabelsResponse
from .dashboard import DashboardResponse

__all__ = [
    "ShipmentCreate",
    "ShipmentUpdate",
    "ShipmentResponse",
    "FacetOptionsResponse",
    "ResourceType",
    "ResourceValue",
    "ResourceListsResponse",
    "ResourceLabelsResponse",
    "DashboardResponse",
]
