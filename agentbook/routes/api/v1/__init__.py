from flask import Blueprint

from agentbook.routes.api.v1.agents import api_agent_bp
from agentbook.routes.api.v1.auth import api_auth_bp
from agentbook.routes.api.v1.bookings import api_booking_bp
from agentbook.routes.api.v1.commissions import api_commission_bp
from agentbook.routes.api.v1.platform import api_platform_bp
from agentbook.routes.api.v1.properties import api_property_bp

api_v1_bp = Blueprint("api_v1", __name__)
api_v1_bp.register_blueprint(api_auth_bp, url_prefix="/auth")
api_v1_bp.register_blueprint(api_agent_bp, url_prefix="/agents")
api_v1_bp.register_blueprint(api_property_bp, url_prefix="/properties")
api_v1_bp.register_blueprint(api_booking_bp, url_prefix="/bookings")
api_v1_bp.register_blueprint(api_commission_bp, url_prefix="/commissions")
api_v1_bp.register_blueprint(api_platform_bp, url_prefix="/platform")
