"""Version-negotiated API facade clients."""

from .base import APICaller, FacadeCaller
from .firewaller import Firewaller

__all__ = [
    "APICaller",
    "FacadeCaller",
    "Firewaller",
]
