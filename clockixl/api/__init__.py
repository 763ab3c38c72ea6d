"""Clockify API access for clockiXL."""

from .client import ClockifyClient
from .fetcher import Workspace, fetch_entries, list_workspaces

__all__ = ['ClockifyClient', 'Workspace', 'fetch_entries', 'list_workspaces']
