from agentbook.services.agent_service import AgentService
from agentbook.services.auth_service import AuthService
from agentbook.services.availability_service import AvailabilityService
from agentbook.services.booking_service import BookingService
from agentbook.services.commission_service import CommissionService, CommissionSplit
from agentbook.services.platform_service import PlatformService
from agentbook.services.property_service import PropertyService
from agentbook.services.unit_of_work import unit_of_work

__all__ = [
    "AgentService",
    "AuthService",
    "AvailabilityService",
    "BookingService",
    "CommissionService",
    "CommissionSplit",
    "PlatformService",
    "PropertyService",
    "unit_of_work",
]
