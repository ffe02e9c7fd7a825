"""
Constants for the shot tracking session core
"""

# Calibration validity thresholds (normalized coordinates)
MIN_RIM_RADIUS = 0.01
MIN_BACKBOARD_WIDTH = 0.05
MIN_BACKBOARD_HEIGHT = 0.02

# Default overlay placement
DEFAULT_RIM_CENTER = (0.5, 0.3)
DEFAULT_RIM_RADIUS = 0.08
DEFAULT_BACKBOARD_ORIGIN = (0.35, 0.18)
DEFAULT_BACKBOARD_SIZE = (0.3, 0.08)
DEFAULT_REFERENCE_LINE = ((0.2, 0.7), (0.8, 0.7))

# Mock detection pipeline
MOCK_SHOT_INTERVAL = 3.5  # seconds between fake shots
MOCK_DISTANCE_CLASSES = ("twoPoint", "threePoint", "freeThrow")

# Frame source
DEFAULT_FRAME_WIDTH = 640
DEFAULT_FRAME_HEIGHT = 480
DEFAULT_FRAME_RATE = 30.0

# Insights
INSIGHTS_LATENCY = 0.4  # seconds
INSIGHTS_LOADING_TEXT = "Loading AI feedback..."
INSIGHTS_ERROR_TEXT = "Unable to load AI feedback right now."

# Session dispatch
DISPATCH_POLL_INTERVAL = 0.1

# Presentation
RECORD_ID_PREFIX_LENGTH = 6
