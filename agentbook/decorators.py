from functools import wraps

from flask_login import current_user, login_required

from agentbook.errors import ForbiddenError


def role_required(*roles):
    """Allow active agents holding one of ``roles``; implies login_required."""

    def wrapper(func):
        @wraps(func)
        @login_required
        def inner(*args, **kwargs):
            if not current_user.is_active_agent:
                raise ForbiddenError("Agent account is inactive.")
            if current_user.role not in roles:
                raise ForbiddenError("Forbidden.")
            return func(*args, **kwargs)

        return inner

    return wrapper


admin_required = role_required("admin")
agent_required = role_required("agent", "admin")
