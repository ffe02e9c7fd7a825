"""
Detection pipeline and frame source collaborators
"""

from .mock_pipeline import MockShotPipeline
from .frame_source import SimulatedFrameSource

__all__ = ['MockShotPipeline', 'SimulatedFrameSource']
