"""
REST API implementation
"""

import logging
from typing import Optional

from flask import Flask, request, jsonify

from ...analytics import SessionController, SessionDispatcher, SessionSummary, StartResult, summarize_stats
from ...config import get_settings
from ...core import CourtCalibration, InsightsProvider, ShotResult, DistanceClass
from ..factory import create_session_controller, create_insights_provider

logger = logging.getLogger(__name__)


def create_api(controller: Optional[SessionController] = None,
               insights_provider: Optional[InsightsProvider] = None,
               start_dispatcher: bool = True):
    """
    Create Flask REST API

    Args:
        controller: Session controller to expose (built from settings if omitted)
        insights_provider: Feedback service (built from settings if omitted)
        start_dispatcher: Run a background thread applying pipeline shots
    """
    settings = get_settings()
    controller = controller or create_session_controller(settings)
    insights_provider = insights_provider or create_insights_provider(settings)

    app = Flask(__name__)
    app.config['SESSION_CONTROLLER'] = controller
    app.config['INSIGHTS_PROVIDER'] = insights_provider

    dispatcher = SessionDispatcher(controller, poll_interval=settings.dispatch_interval)
    app.config['SESSION_DISPATCHER'] = dispatcher
    if start_dispatcher:
        dispatcher.start()

    def session_payload():
        controller.drain_inbox()
        stats = controller.stats
        return {
            'state': controller.state.value,
            'calibration': controller.calibration.to_dict(),
            'stats': stats.to_dict(),
            'summary': summarize_stats(stats),
            'events': [e.to_dict() for e in controller.events]
        }

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint"""
        return jsonify({'status': 'healthy', 'environment': settings.environment_name})

    @app.route('/session', methods=['GET'])
    def get_session():
        return jsonify(session_payload())

    @app.route('/session/start', methods=['POST'])
    def start_session():
        """Start a session with the posted (or default) calibration"""
        data = request.get_json(silent=True) or {}
        try:
            calibration = CourtCalibration.from_dict(data['calibration']) if 'calibration' in data \
                else CourtCalibration()
        except (KeyError, TypeError, ValueError, IndexError) as e:
            return jsonify({'error': f'Malformed calibration: {e}'}), 400

        result = controller.start_session(calibration)
        if result is StartResult.INVALID_CALIBRATION:
            return jsonify({'result': result.value, 'state': controller.state.value}), 422

        return jsonify({'result': result.value, 'state': controller.state.value})

    @app.route('/session/end', methods=['POST'])
    def end_session():
        record = controller.end_session()
        return jsonify({
            'state': controller.state.value,
            'record': record.to_dict() if record else None
        })

    @app.route('/session/shots', methods=['POST'])
    def register_shot():
        """Manual shot entry"""
        data = request.get_json(silent=True) or {}
        try:
            result = ShotResult(data.get('result'))
            distance = DistanceClass(data.get('distance_class', DistanceClass.UNKNOWN.value))
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        if not controller.register_manual_shot(result, distance):
            return jsonify({'error': 'No active session'}), 409

        return jsonify({'stats': controller.stats.to_dict()}), 201

    @app.route('/history', methods=['GET'])
    def list_history():
        return jsonify([record.to_dict() for record in controller.history])

    @app.route('/history/<record_id>', methods=['GET'])
    def get_record(record_id):
        record = controller.history.get(record_id)
        if record is None:
            return jsonify({'error': 'Session not found'}), 404
        return jsonify(record.to_dict())

    @app.route('/history/<record_id>/insights', methods=['GET'])
    def get_insights(record_id):
        record = controller.history.get(record_id)
        if record is None:
            return jsonify({'error': 'Session not found'}), 404

        summary = SessionSummary.from_record(record, insights_provider)
        summary.load_insights()
        if summary.error_message:
            return jsonify({'insights': None, 'error': summary.error_message}), 502
        return jsonify({'insights': summary.insights, 'error': None})

    return app


def run_api(host: str = '0.0.0.0', port: int = 5000, debug: bool = False):
    """Run REST API server"""
    app = create_api()
    logger.info(f"Serving shot tracking API on {host}:{port}")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run_api()
