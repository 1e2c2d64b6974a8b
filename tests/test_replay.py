import json

import pytest

from posture_engine.replay import PREFIX, load_frames, main, parse_line, run_replay, write_frames
from posture_engine.simulator import slouched_frame, upright_frame


def _dump_list(frame):
    return [p.model_dump() if p is not None else None for p in frame]


def _dump(frame):
    return json.dumps(_dump_list(frame))


def test_parse_plain_and_prefixed_lines():
    line = _dump(upright_frame())
    landmarks, sensitivity = parse_line(line)
    assert len(landmarks) == 33
    assert sensitivity is None

    landmarks, _ = parse_line(f"{PREFIX} {line}")
    assert len(landmarks) == 33


def test_parse_object_lines_carry_sensitivity():
    record = json.dumps({"landmarks": [], "sensitivity": 8})
    assert parse_line(record) == ([], 8)


def test_unusable_lines_are_skipped():
    assert parse_line("") is None
    assert parse_line("not json") is None
    assert parse_line('{"frame": 1}') is None


def test_generate_then_replay(tmp_path):
    path = tmp_path / "frames.jsonl"
    assert write_frames(str(path), 45, seed=11) == 45

    frames = load_frames(str(path))
    assert len(frames) == 45

    report = run_replay(frames, sensitivity=5)
    assert report["summary"]["evaluated_frames"] == 45
    assert report["ignored_frames"] == 0
    assert "risk_level" in report["recommendation"]


def test_replay_counts_ignored_lines(tmp_path):
    path = tmp_path / "frames.jsonl"
    path.write_text("\n".join([
        _dump(upright_frame()),
        json.dumps({"landmarks": [], "sensitivity": 3}),
        "garbage"
    ]), encoding="utf-8")

    report = run_replay(load_frames(str(path)))
    assert report["summary"]["evaluated_frames"] == 1
    assert report["ignored_frames"] == 1


def test_cli(tmp_path, capsys):
    path = tmp_path / "frames.jsonl"
    assert main([str(path), "--generate", "10", "--seed", "2"]) == 0
    capsys.readouterr()

    assert main([str(path), "--sensitivity", "7"]) == 0
    out = capsys.readouterr().out
    assert '"evaluated_frames": 10' in out


def test_cli_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.jsonl")]) == 1


@pytest.mark.parametrize("value", [11, 0, 7.0, "7", True])
def test_unusable_recorded_sensitivity_falls_back_to_default(value):
    record = json.dumps({"landmarks": [], "sensitivity": value})
    assert parse_line(record) == ([], None)


def test_bad_recorded_sensitivity_does_not_abort_replay(tmp_path, capsys):
    path = tmp_path / "frames.jsonl"
    path.write_text("\n".join([
        json.dumps({"landmarks": _dump_list(slouched_frame()), "sensitivity": 11}),
        json.dumps({"landmarks": _dump_list(upright_frame()), "sensitivity": "7"}),
        "garbage"
    ]), encoding="utf-8")

    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "Recorded Sensitivity Ignored" in out
    assert "Unusable Lines Skipped" in out
    assert '"evaluated_frames": 2' in out


def test_cli_generate_zero_writes_empty_file(tmp_path):
    path = tmp_path / "frames.jsonl"
    assert main([str(path), "--generate", "0"]) == 0
    assert path.read_text(encoding="utf-8") == ""
