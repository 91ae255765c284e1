from agentbook.models.agent import Agent
from agentbook.models.availability import AvailabilityRecord
from agentbook.models.booking import Booking
from agentbook.models.commission import Commission
from agentbook.models.platform_setting import PlatformSetting
from agentbook.models.property import Property

__all__ = [
    "Agent",
    "AvailabilityRecord",
    "Booking",
    "Commission",
    "PlatformSetting",
    "Property",
]
