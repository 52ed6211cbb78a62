"""End-to-end tests: session, feedback throttle and the replay CLI."""

import json
from dataclasses import asdict

import pytest

from formcheck.exercise_analysis import FeedbackCue, Phase, Severity, get_analyzer_for_exercise
from formcheck.feedback import FeedbackThrottle
from formcheck.main import main
from formcheck.trainer import FormCheckSession

from conftest import make_deep_squat_pose, make_squat_bottom_pose, make_standing_pose


def squat_frames(reps, start_ms=0, frame_ms=100, frames_per_phase=5):
    """Alternate standing and bottom poses: ``reps`` full squats starting from standing."""
    frames = []
    t = start_ms
    for _ in range(reps):
        for make_pose in (make_standing_pose, make_squat_bottom_pose):
            for _ in range(frames_per_phase):
                frames.append((t, make_pose()))
                t += frame_ms
    for _ in range(frames_per_phase):
        frames.append((t, make_standing_pose()))
        t += frame_ms
    return frames


def test_standing_then_deep_squat():
    analyzer = get_analyzer_for_exercise("Squat")
    p1 = analyzer(make_standing_pose())
    assert p1.phase == Phase.UP
    assert p1.rep_metric > 0.5
    assert any("deeper" in cue.message.lower() for cue in p1.feedback)

    p2 = analyzer(make_deep_squat_pose())
    assert p2.rep_metric < p1.rep_metric


class TestFormCheckSession:

    def test_counts_squat_reps(self):
        counts = []
        session = FormCheckSession("Barbell Squat", on_rep_count=counts.append)
        reports = [session.process_landmarks(pose, t) for t, pose in squat_frames(3)]
        assert session.rep_count == 3
        assert counts == [1, 2, 3]
        assert sum(report.rep_completed for report in reports) == 3
        assert reports[-1].rep_count == 3

    def test_set_exercise_resets_count(self):
        session = FormCheckSession("Squat")
        for t, pose in squat_frames(2):
            session.process_landmarks(pose, t)
        assert session.rep_count == 2

        session.set_exercise("Deadlift")
        assert session.rep_count == 0
        assert session.exercise_family == "deadlift"
        assert session.summary()["frames_processed"] == 0

    def test_reset_keeps_exercise(self):
        session = FormCheckSession("Squat")
        for t, pose in squat_frames(1):
            session.process_landmarks(pose, t)
        session.reset()
        assert session.rep_count == 0
        assert session.exercise_family == "squat"

    def test_bad_frame_does_not_interrupt(self):
        session = FormCheckSession("Squat")
        frames = squat_frames(1)
        for t, pose in frames[:7]:
            session.process_landmarks(pose, t)
        report = session.process_landmarks(make_standing_pose()[:10], 700)
        assert report.analysis.analysis_reliable is False
        for t, pose in frames[7:]:
            session.process_landmarks(pose, t + 100)
        assert session.rep_count == 1
        assert session.summary()["unreliable_frames"] == 1

    def test_hidden_legs_count_as_unreliable_frame(self):
        session = FormCheckSession("Squat")
        pose = make_standing_pose()
        for landmark in pose[25:29]:  # knees and ankles
            landmark.visibility = 0.3
        report = session.process_landmarks(pose, 0)
        assert report.analysis.analysis_reliable is False
        assert session.summary()["unreliable_frames"] == 1

    def test_summary_is_json_serializable(self):
        session = FormCheckSession("Bench Press")
        session.process_landmarks(make_standing_pose(), 0)
        summary = json.loads(json.dumps(session.summary()))
        assert summary["analyzer"] == "bench_press"
        assert summary["rep_counter"]["last_phase"] == "up"

    def test_frame_report_to_dict(self):
        session = FormCheckSession("Squat")
        data = session.process_landmarks(make_standing_pose(), 0).to_dict()
        assert data["rep_count"] == 0
        assert data["feedback"][0]["message"] == "Go deeper into the squat"


class TestFeedbackThrottle:

    def test_holds_cues_within_interval(self):
        throttle = FeedbackThrottle(update_interval_ms=500)
        first = [FeedbackCue("Keep hips level", Severity.WARNING)]
        second = [FeedbackCue("Keep shoulders level", Severity.WARNING)]
        assert throttle.update(first, 0) == first
        assert throttle.update(second, 200) == first
        assert throttle.update(second, 500) == second

    def test_empty_frame_keeps_previous_cues(self):
        throttle = FeedbackThrottle(update_interval_ms=500)
        cues = [FeedbackCue("Good lockout", Severity.GOOD)]
        throttle.update(cues, 0)
        assert throttle.update([], 1000) == cues

    def test_reset(self):
        throttle = FeedbackThrottle(update_interval_ms=500)
        throttle.update([FeedbackCue("Good depth", Severity.GOOD)], 0)
        throttle.reset()
        assert throttle.update([], 100) == []


# ============================================================================
# CLI
# ============================================================================

def write_recording(path, frames):
    payload = [
        {"timestamp_ms": t, "landmarks": [[p.x, p.y, p.z, p.visibility] for p in pose]}
        for t, pose in frames
    ]
    path.write_text(json.dumps(payload))


def test_cli_replays_recording(tmp_path, capsys):
    recording = tmp_path / "squats.json"
    write_recording(recording, squat_frames(2))
    assert main(["--landmarks", str(recording), "--exercise", "Back Squat"]) == 0
    out = capsys.readouterr().out
    assert "Rep 1" in out
    assert "Reps: 2" in out
    assert "squat analyzer" in out


def test_cli_accepts_frames_object_and_skips_bad_frames(tmp_path, capsys):
    frames = [
        {"timestamp_ms": t, "landmarks": [asdict(p) for p in pose]}
        for t, pose in squat_frames(1)
    ]
    frames.insert(3, {"landmarks": []})
    recording = tmp_path / "squats.json"
    recording.write_text(json.dumps({"frames": frames}))
    assert main(["--landmarks", str(recording), "--exercise", "squat"]) == 0
    assert "Reps: 1" in capsys.readouterr().out


def test_cli_missing_file(tmp_path, capsys):
    assert main(["--landmarks", str(tmp_path / "nope.json")]) == 1
    assert "not found" in capsys.readouterr().out


def test_cli_malformed_json(tmp_path, capsys):
    recording = tmp_path / "broken.json"
    recording.write_text("{not json")
    assert main(["--landmarks", str(recording)]) == 1
    assert "Could not read" in capsys.readouterr().out


def test_cli_requires_landmarks_argument():
    with pytest.raises(SystemExit):
        main([])
