"""
Gradio application interface

The callbacks import without Gradio installed; the app and its components
load Gradio on first access.
"""

from .callbacks import ShootSessionCallbacks, DISTANCE_CHOICES

__all__ = ['create_app', 'launch_app', 'ShootSessionCallbacks', 'DISTANCE_CHOICES', 'create_ui_components']


def __getattr__(name):
    if name in ('create_app', 'launch_app'):
        from . import app
        return getattr(app, name)
    if name == 'create_ui_components':
        from .components import create_ui_components
        return create_ui_components
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
