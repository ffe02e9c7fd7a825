"""
Application interfaces for the shot tracking system
"""

from .factory import create_session_controller, create_insights_provider

__all__ = ['create_session_controller', 'create_insights_provider']
