"""
Gradio UI components for calibration, live session and summary
"""

import gradio as gr

from ...core.constants import (
    DEFAULT_RIM_CENTER, DEFAULT_RIM_RADIUS,
    DEFAULT_BACKBOARD_ORIGIN, DEFAULT_BACKBOARD_SIZE, DEFAULT_REFERENCE_LINE
)
from .callbacks import DISTANCE_CHOICES


def _slider(label, value, minimum=0.0, maximum=1.0):
    return gr.Slider(minimum=minimum, maximum=maximum, value=value, step=0.005, label=label)


def create_ui_components():
    """Create all UI components"""
    components = {}

    with gr.Row():
        with gr.Column(scale=1):
            with gr.Accordion("🎯 Calibration", open=True):
                components['rim_x'] = _slider("Rim X", DEFAULT_RIM_CENTER[0])
                components['rim_y'] = _slider("Rim Y", DEFAULT_RIM_CENTER[1])
                components['rim_radius'] = _slider("Rim Radius", DEFAULT_RIM_RADIUS, maximum=0.5)
                components['backboard_x'] = _slider("Backboard X", DEFAULT_BACKBOARD_ORIGIN[0])
                components['backboard_y'] = _slider("Backboard Y", DEFAULT_BACKBOARD_ORIGIN[1])
                components['backboard_width'] = _slider("Backboard Width", DEFAULT_BACKBOARD_SIZE[0])
                components['backboard_height'] = _slider("Backboard Height", DEFAULT_BACKBOARD_SIZE[1])
                components['line_y'] = _slider("Reference Line Y", DEFAULT_REFERENCE_LINE[0][1])

            with gr.Row():
                components['start_btn'] = gr.Button("▶️ Start Session", variant="primary")
                components['end_btn'] = gr.Button("⏹️ End Session", variant="stop")

            with gr.Accordion("✋ Manual Shot", open=True):
                components['distance'] = gr.Radio(
                    choices=DISTANCE_CHOICES,
                    value=DISTANCE_CHOICES[0],
                    label="Distance"
                )
                with gr.Row():
                    components['make_btn'] = gr.Button("Make")
                    components['miss_btn'] = gr.Button("Miss")
                components['make_label'] = gr.State("Make")
                components['miss_label'] = gr.State("Miss")

        with gr.Column(scale=2):
            components['status_output'] = gr.Textbox(label="Status", lines=1, interactive=False)

            with gr.Row():
                components['stats_output'] = gr.Textbox(label="Stats", lines=6, interactive=False)
                components['events_output'] = gr.Textbox(label="Shot Events", lines=6, interactive=False)

            components['refresh_btn'] = gr.Button("🔄 Refresh", size="sm")

            with gr.Tabs():
                with gr.Tab("🤖 AI Feedback"):
                    components['insights_output'] = gr.Textbox(
                        label="AI Feedback (coming soon)",
                        lines=3,
                        interactive=False
                    )
                with gr.Tab("📜 Past Sessions"):
                    components['history_output'] = gr.Markdown("No past sessions yet.")

    return components
