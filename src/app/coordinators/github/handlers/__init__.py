"""Handlers de evento por tipo (issues, pull_request, push, installation)."""

from .base import ANY_ACTION, ActionHandler, EventHandler
from .installation import InstallationHandler
from .issues import IssuesHandler
from .pull_request import PullRequestHandler
from .push import PushHandler

__all__ = [
    "ANY_ACTION",
    "ActionHandler",
    "EventHandler",
    "InstallationHandler",
    "IssuesHandler",
    "PullRequestHandler",
    "PushHandler",
]
