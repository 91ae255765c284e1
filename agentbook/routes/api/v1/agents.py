from flask import Blueprint, jsonify, request
from flask_login import current_user

from agentbook.decorators import admin_required, agent_required
from agentbook.errors import NotFoundError
from agentbook.routes.api.v1.serializers import agent_to_dict
from agentbook.services import AgentService

api_agent_bp = Blueprint("api_agent", __name__)


@api_agent_bp.get("")
@agent_required
def list_agents():
    agents = AgentService.list_agents(agency=request.args.get("agency") or None)
    return jsonify([agent_to_dict(agent) for agent in agents])


@api_agent_bp.get("/<int:agent_id>")
@agent_required
def get_agent(agent_id):
    agent = AgentService.get_agent(agent_id)
    if agent is None:
        raise NotFoundError("Agent not found.")
    return jsonify(agent_to_dict(agent))


@api_agent_bp.patch("/me")
@agent_required
def update_me():
    agent = AgentService.update_agent(current_user.id, request.get_json(silent=True) or {})
    return jsonify(agent_to_dict(agent))


@api_agent_bp.delete("/<int:agent_id>")
@admin_required
def deactivate_agent(agent_id):
    agent = AgentService.deactivate_agent(agent_id)
    if agent is None:
        raise NotFoundError("Agent not found.")
    return jsonify(agent_to_dict(agent))
