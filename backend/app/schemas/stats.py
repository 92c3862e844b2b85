"""Dashboard statistics schemas."""

from app.schemas.common import CamelModel


class AdminStats(CamelModel):
    total_users: int
    total_agents: int
    total_providers: int
    total_responses: int
    submitted_responses: int
    pending_responses: int


class AgentStats(CamelModel):
    """Counts scoped to the agent's insurance provider."""

    total_responses: int
    submitted_responses: int
    pending_responses: int
    total_users: int
