"""
Gradio demo application for shoot sessions
"""

import gradio as gr

from .components import create_ui_components
from .callbacks import ShootSessionCallbacks


def create_app(callbacks: ShootSessionCallbacks = None):
    """Create Gradio application"""

    callbacks = callbacks or ShootSessionCallbacks()

    with gr.Blocks(title="🏀 Court Vision") as app:
        gr.Markdown("""
        # 🏀 Court Vision

        Calibrate your hoop, track shots, and preview future AI feedback.
        """)

        components = create_ui_components()

        live_outputs = [
            components['status_output'],
            components['stats_output'],
            components['events_output']
        ]

        components['start_btn'].click(
            fn=callbacks.start_session,
            inputs=[
                components['rim_x'], components['rim_y'], components['rim_radius'],
                components['backboard_x'], components['backboard_y'],
                components['backboard_width'], components['backboard_height'],
                components['line_y']
            ],
            outputs=live_outputs
        )

        components['make_btn'].click(
            fn=callbacks.register_shot,
            inputs=[components['make_label'], components['distance']],
            outputs=live_outputs
        )
        components['miss_btn'].click(
            fn=callbacks.register_shot,
            inputs=[components['miss_label'], components['distance']],
            outputs=live_outputs
        )

        components['refresh_btn'].click(fn=callbacks.refresh, outputs=live_outputs)

        components['end_btn'].click(
            fn=callbacks.end_session,
            outputs=live_outputs + [components['history_output'], components['insights_output']]
        )

    return app


def launch_app(share: bool = False, port: int = 7860, debug: bool = False):
    """Launch Gradio application"""
    app = create_app()
    app.launch(
        share=share,
        server_port=port,
        debug=debug,
        show_error=True
    )


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description='Launch Court Vision demo')
    parser.add_argument('--share', action='store_true', help='Create shareable link')
    parser.add_argument('--port', type=int, default=7860, help='Port to run on')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')

    args = parser.parse_args()

    launch_app(share=args.share, port=args.port, debug=args.debug)
