from .kinematics import AgentPose, heading_vector, LEFT, RIGHT, FORWARD
from .sensor import ProximalSample, scan_prox
from .action_policy import HeuristicPolicy, ACTIONS
from .actions import Action, ActionRegistry

__all__ = [
    "AgentPose", "heading_vector", "LEFT", "RIGHT", "FORWARD",
    "ProximalSample", "scan_prox", "HeuristicPolicy", "ACTIONS",
    "Action", "ActionRegistry",
]
