import threading

import pytest

from courtvision.analytics import SessionController, SessionDispatcher, SessionHistory, SessionState, StartResult
from courtvision.core import ShotEvent, ShotResult, DistanceClass

from conftest import RecordingPipeline, wait_for


def test_starts_idle(controller):
    assert controller.state is SessionState.IDLE
    assert not controller.is_active
    assert controller.stats.total_attempts == 0


def test_invalid_calibration_refused(controller, recording_pipeline, invalid_calibration, caplog):
    with caplog.at_level("WARNING"):
        result = controller.start_session(invalid_calibration)

    assert result is StartResult.INVALID_CALIBRATION
    assert controller.state is SessionState.IDLE
    assert recording_pipeline.calls == []
    assert "Calibration invalid" in caplog.text


def test_invalid_calibration_keeps_previous_stats(controller, valid_calibration, invalid_calibration):
    controller.start_session(valid_calibration)
    controller.register_manual_shot(ShotResult.MAKE)
    controller.register_manual_shot(ShotResult.MISS)
    controller.end_session()
    stats_before = controller.stats

    controller.start_session(invalid_calibration)

    assert controller.state is SessionState.IDLE
    assert controller.stats == stats_before
    assert len(controller.events) == 2


def test_start_signals_collaborators(controller, recording_pipeline, valid_calibration):
    result = controller.start_session(valid_calibration)

    assert result is StartResult.STARTED
    assert controller.is_active
    assert recording_pipeline.calls[0][0] == 'start'
    assert recording_pipeline.calls[0][1] == valid_calibration


def test_calibration_captured_by_value(controller, valid_calibration):
    controller.start_session(valid_calibration)
    valid_calibration.rim.radius = 0.2

    assert controller.calibration.rim.radius == pytest.approx(0.08)


def test_scenario_three_shots(controller, valid_calibration):
    controller.start_session(valid_calibration)
    events = [
        ShotEvent(result=ShotResult.MAKE, distance_class=DistanceClass.THREE_POINT),
        ShotEvent(result=ShotResult.MISS, distance_class=DistanceClass.UNKNOWN),
        ShotEvent(result=ShotResult.MAKE, distance_class=DistanceClass.FREE_THROW),
    ]
    for event in events:
        assert controller.ingest_event(event)

    record = controller.end_session()

    assert record is not None
    assert record.stats.total_attempts == 3
    assert record.stats.total_makes == 2
    assert record.stats.three_point_attempts == 1
    assert record.stats.three_point_makes == 1
    assert record.stats.free_throw_attempts == 1
    assert record.stats.free_throw_makes == 1
    assert list(record.events) == events
    assert controller.history.records() == (record,)


def test_ingest_outside_session_is_dropped(controller):
    assert not controller.ingest_event(ShotEvent(result=ShotResult.MAKE))
    assert not controller.register_manual_shot(ShotResult.MAKE)
    assert controller.stats.total_attempts == 0
    assert controller.events == ()


def test_duplicate_event_ids_are_kept(controller, valid_calibration):
    controller.start_session(valid_calibration)
    event = ShotEvent(result=ShotResult.MAKE)
    controller.ingest_event(event)
    controller.ingest_event(event)

    assert controller.stats.total_attempts == 2
    assert controller.events == (event, event)


def test_manual_shot_defaults_to_unknown(controller, valid_calibration):
    controller.start_session(valid_calibration)
    controller.register_manual_shot(ShotResult.MISS)

    (event,) = controller.events
    assert event.distance_class is DistanceClass.UNKNOWN
    assert event.result is ShotResult.MISS


def test_empty_session_is_not_archived(controller, recording_pipeline, valid_calibration):
    controller.start_session(valid_calibration)

    assert controller.end_session() is None
    assert len(controller.history) == 0
    assert controller.state is SessionState.IDLE
    assert recording_pipeline.calls[-1][0] == 'stop'


def test_end_without_session_is_noop(controller, recording_pipeline):
    assert controller.end_session() is None
    assert recording_pipeline.calls == []


def test_history_is_most_recent_first(controller, valid_calibration):
    controller.start_session(valid_calibration)
    controller.register_manual_shot(ShotResult.MAKE)
    first = controller.end_session()

    controller.start_session(valid_calibration)
    controller.register_manual_shot(ShotResult.MISS)
    controller.register_manual_shot(ShotResult.MISS)
    second = controller.end_session()

    assert controller.history.records() == (second, first)
    assert len(controller.history) == 2


def test_new_session_resets_stats_and_events(controller, valid_calibration):
    controller.start_session(valid_calibration)
    controller.register_manual_shot(ShotResult.MAKE, DistanceClass.THREE_POINT)
    controller.end_session()

    controller.start_session(valid_calibration)

    stats = controller.stats
    assert stats.total_attempts == stats.total_makes == 0
    assert stats.three_point_attempts == stats.three_point_makes == 0
    assert controller.events == ()


def test_restart_while_active_discards_without_archiving(controller, valid_calibration):
    controller.start_session(valid_calibration)
    controller.register_manual_shot(ShotResult.MAKE)

    assert controller.start_session(valid_calibration) is StartResult.STARTED
    assert controller.stats.total_attempts == 0
    assert len(controller.history) == 0


def test_archived_record_is_not_affected_by_later_sessions(controller, valid_calibration):
    controller.start_session(valid_calibration)
    controller.register_manual_shot(ShotResult.MAKE)
    record = controller.end_session()

    controller.start_session(valid_calibration)
    controller.register_manual_shot(ShotResult.MISS)

    assert record.stats.total_attempts == 1
    assert len(record.events) == 1


def test_pipeline_events_go_through_inbox(controller, recording_pipeline, valid_calibration):
    controller.start_session(valid_calibration)
    recording_pipeline.emit(ShotEvent(result=ShotResult.MAKE))
    recording_pipeline.emit(ShotEvent(result=ShotResult.MISS))

    assert controller.stats.total_attempts == 0
    assert len(controller.inbox) == 2

    assert controller.drain_inbox() == 2
    assert controller.stats.total_attempts == 2


def test_end_session_applies_pending_events(controller, recording_pipeline, valid_calibration):
    controller.start_session(valid_calibration)
    recording_pipeline.emit(ShotEvent(result=ShotResult.MAKE))

    record = controller.end_session()

    assert record is not None
    assert record.stats.total_makes == 1


def test_stale_events_discarded_on_start(controller, recording_pipeline, valid_calibration):
    controller.submit(ShotEvent(result=ShotResult.MAKE))
    controller.start_session(valid_calibration)

    assert controller.drain_inbox() == 0
    assert controller.stats.total_attempts == 0


def test_events_after_end_are_dropped(controller, recording_pipeline, valid_calibration):
    controller.start_session(valid_calibration)
    controller.end_session()
    recording_pipeline.emit(ShotEvent(result=ShotResult.MAKE))

    assert controller.drain_inbox() == 0
    assert controller.stats.total_attempts == 0


def test_collaborator_failure_does_not_block_session(valid_calibration, caplog):
    pipeline = RecordingPipeline(fail_on_start=True)
    controller = SessionController(pipeline)

    with caplog.at_level("ERROR"):
        result = controller.start_session(valid_calibration)

    assert result is StartResult.STARTED
    assert controller.is_active
    assert "failed" in caplog.text
    assert controller.register_manual_shot(ShotResult.MAKE)


def test_concurrent_producers_are_serialized(controller, recording_pipeline, valid_calibration):
    controller.start_session(valid_calibration)
    per_thread = 50

    def pipeline_producer():
        for i in range(per_thread):
            result = ShotResult.MAKE if i % 2 else ShotResult.MISS
            recording_pipeline.emit(ShotEvent(result=result, distance_class=DistanceClass.THREE_POINT))

    def manual_producer():
        for _ in range(per_thread):
            controller.register_manual_shot(ShotResult.MAKE, DistanceClass.FREE_THROW)

    threads = [threading.Thread(target=pipeline_producer) for _ in range(3)]
    threads += [threading.Thread(target=manual_producer) for _ in range(2)]
    drainer_stop = threading.Event()

    def drainer():
        while not drainer_stop.is_set():
            controller.drain_inbox(timeout=0.01)

    drain_thread = threading.Thread(target=drainer)
    drain_thread.start()
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    drainer_stop.set()
    drain_thread.join()
    controller.drain_inbox()

    stats = controller.stats
    assert stats.total_attempts == 5 * per_thread
    assert stats.three_point_attempts == 3 * per_thread
    assert stats.three_point_makes == 3 * (per_thread // 2)
    assert stats.free_throw_attempts == stats.free_throw_makes == 2 * per_thread
    assert len(controller.events) == stats.total_attempts


class SlowStartPipeline(RecordingPipeline):
    """Detection stand-in whose start blocks until released"""

    def __init__(self):
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def start_session(self, calibration):
        self.entered.set()
        self.release.wait(timeout=5)
        super().start_session(calibration)


def test_end_waits_for_start_to_reach_collaborators(valid_calibration):
    pipeline = SlowStartPipeline()
    controller = SessionController(pipeline)

    starter = threading.Thread(target=controller.start_session, args=(valid_calibration,))
    starter.start()
    assert pipeline.entered.wait(timeout=2)

    ender = threading.Thread(target=controller.end_session)
    ender.start()
    ender.join(timeout=0.1)
    assert ender.is_alive()
    assert controller.is_active

    pipeline.release.set()
    starter.join(timeout=2)
    ender.join(timeout=2)

    assert not controller.is_active
    assert not pipeline.is_active
    assert [name for name, _ in pipeline.calls] == ['start', 'stop']


def test_racing_lifecycle_calls_leave_collaborators_in_step(controller, recording_pipeline, valid_calibration):
    barrier = threading.Barrier(8)

    def toggle(index):
        barrier.wait()
        for i in range(25):
            if (index + i) % 2:
                controller.start_session(valid_calibration)
            else:
                controller.end_session()

    threads = [threading.Thread(target=toggle, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert recording_pipeline.is_active == controller.is_active
    controller.end_session()
    assert not recording_pipeline.is_active


def test_dispatcher_applies_pipeline_events(controller, recording_pipeline, valid_calibration):
    dispatcher = SessionDispatcher(controller, poll_interval=0.01)
    controller.start_session(valid_calibration)
    dispatcher.start()
    dispatcher.start()
    try:
        for _ in range(5):
            recording_pipeline.emit(ShotEvent(result=ShotResult.MAKE))
        assert wait_for(lambda: controller.stats.total_attempts == 5)
    finally:
        dispatcher.stop()

    assert not dispatcher.is_running


def test_history_limit_applies_to_archive(recording_pipeline, valid_calibration):
    controller = SessionController(recording_pipeline, history=SessionHistory(max_records=2))
    for _ in range(3):
        controller.start_session(valid_calibration)
        controller.register_manual_shot(ShotResult.MAKE)
        controller.end_session()

    assert len(controller.history) == 2
