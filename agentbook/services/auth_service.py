import logging
from datetime import datetime, timezone

from agentbook.errors import AppError, ConflictError
from agentbook.extensions import bcrypt, db
from agentbook.models import Agent
from agentbook.schemas import AgentLogin, AgentRegistration, parse_payload
from agentbook.services.agent_service import AgentService
from agentbook.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


class AuthService:
    @staticmethod
    def register_agent(payload, role="agent"):
        data = parse_payload(AgentRegistration, payload)
        if AgentService.get_by_email(data.email):
            raise ConflictError("Email already registered.")

        agent = Agent(
            name=data.name,
            email=data.email,
            phone=data.phone or None,
            agency=data.agency or None,
            agency_phone=data.agency_phone or None,
            agency_email=data.agency_email or None,
            role=role,
            password_hash=bcrypt.generate_password_hash(data.password).decode("utf-8"),
        )
        with unit_of_work():
            db.session.add(agent)
        logger.info("Registered agent %s (%s)", agent.id, agent.agency or "independent")
        return agent

    @staticmethod
    def authenticate_agent(payload):
        data = parse_payload(AgentLogin, payload)
        agent = AgentService.get_by_email(data.email)
        if not agent:
            raise AppError("Invalid credentials.", 401)

        try:
            is_valid = bcrypt.check_password_hash(agent.password_hash, data.password)
        except ValueError:
            is_valid = False
        if not is_valid:
            logger.warning("Failed login for %s", data.email)
            raise AppError("Invalid credentials.", 401)
        if not agent.is_active_agent:
            raise AppError("Agent account is inactive.", 403)

        with unit_of_work():
            agent.last_login = datetime.now(timezone.utc)
        return agent
