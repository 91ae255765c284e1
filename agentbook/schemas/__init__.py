from agentbook.schemas.agent import AgentLogin, AgentRegistration, AgentUpdate
from agentbook.schemas.availability import AvailabilityChange, DateRange
from agentbook.schemas.booking import BookingListQuery, BookingRequest
from agentbook.schemas.common import as_date, as_money, parse_payload
from agentbook.schemas.property import (
    PropertyFilters,
    PropertyUpdate,
    RentalPropertyCreate,
    SalePropertyCreate,
    property_create_adapter,
)

__all__ = [
    "AgentLogin",
    "AgentRegistration",
    "AgentUpdate",
    "AvailabilityChange",
    "BookingListQuery",
    "BookingRequest",
    "DateRange",
    "PropertyFilters",
    "PropertyUpdate",
    "RentalPropertyCreate",
    "SalePropertyCreate",
    "as_date",
    "as_money",
    "parse_payload",
    "property_create_adapter",
]
