from agentbook.extensions import db
from agentbook.models import Agent
from agentbook.schemas import AgentUpdate, parse_payload
from agentbook.services.unit_of_work import unit_of_work


class AgentService:
    """Directory of agents and the agencies they belong to."""

    @staticmethod
    def get_agent(agent_id):
        return db.session.get(Agent, agent_id)

    @staticmethod
    def get_by_email(email):
        return Agent.query.filter_by(email=(email or "").strip().lower()).first()

    @staticmethod
    def list_agents(agency=None, active_only=True):
        query = Agent.query
        if agency:
            query = query.filter(Agent.agency == agency)
        if active_only:
            query = query.filter(Agent.is_active_agent.is_(True))
        return query.order_by(Agent.name.asc()).all()

    @staticmethod
    def update_agent(agent_id, payload):
        agent = db.session.get(Agent, agent_id)
        if agent is None:
            return None
        changes = parse_payload(AgentUpdate, payload).model_dump(exclude_unset=True)
        with unit_of_work():
            for field, value in changes.items():
                if field == "name":
                    if value:
                        agent.name = value
                else:
                    setattr(agent, field, value or None)
        return agent

    @staticmethod
    def deactivate_agent(agent_id):
        # Agents are retired rather than deleted; their bookings and commissions stay.
        agent = db.session.get(Agent, agent_id)
        if agent is None:
            return None
        with unit_of_work():
            agent.is_active_agent = False
        return agent
