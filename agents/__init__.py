"""connect-4 agents package

this package contains all agent implementations for the connect-4 tournament.
"""

from .base import Agent
from .random_agent import build_agent as build_random
from .minimax_agent import MinimaxAgent, build_agent as build_minimax
from .human_cli import build_agent as build_human

AGENT_BUILDERS = {
    "random": build_random,
    "minimax": build_minimax,
    "human": build_human,
}

__all__ = [
    "Agent",
    "MinimaxAgent",
    "AGENT_BUILDERS",
    "build_random",
    "build_minimax",
    "build_human"
]
