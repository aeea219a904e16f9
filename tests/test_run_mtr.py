# tests/test_run_mtr.py
import json

import pytest

from tools.run_mtr import build_argparser, build_settings, load_records, run_replay, run_with_fake


def test_fake_mode_prints_truncated_path(capsys):
    ap = build_argparser()
    args = ap.parse_args(["fake", "--hops", "8", "--dest-ttl", "5", "--rounds", "2"])
    run_with_fake(args)

    out = json.loads(capsys.readouterr().out)
    assert out["target"] == "8.8.8.8"
    assert out["known_final_ttl"] == 5
    assert [r["ttl"] for r in out["rows"]] == [1, 2, 3, 4, 5]


def test_replay_mode(tmp_path, capsys):
    path = tmp_path / "records.jsonl"
    path.write_text("\n".join([
        '{"ttl": 1, "ip": "192.168.0.1", "success": true}',
        '{"ttl": 3, "ip": "10.0.0.5", "success": true}',
        'not json',
        '',
        '{"ttl": 2, "ip": "10.0.0.1", "success": true}',
    ]), encoding="utf-8")
    ap = build_argparser()
    args = ap.parse_args(["replay", "--records", str(path), "--dest", "10.0.0.1"])
    run_replay(args, ap)

    out = json.loads(capsys.readouterr().out)
    assert out["known_final_ttl"] == 2
    assert [r["ttl"] for r in out["rows"]] == [1, 2]
    assert out["records_dropped"] == 1


def test_load_records_keeps_bad_lines_as_none(tmp_path):
    path = tmp_path / "r.jsonl"
    path.write_text('{"ttl": 1}\n{oops\n', encoding="utf-8")
    assert load_records(path) == [{"ttl": 1}, None]


def test_replay_missing_file_is_an_argparse_error(tmp_path):
    ap = build_argparser()
    args = ap.parse_args(["replay", "--records", str(tmp_path / "missing.jsonl")])
    with pytest.raises(SystemExit):
        run_replay(args, ap)


def test_settings_from_args():
    args = build_argparser().parse_args(["fake", "--flow-ids", "0", "1", "--max-ttl", "12"])
    s = build_settings(args)
    assert s.flow_ids == (0, 1)
    assert s.max_ttl == 12


def test_replay_skips_non_object_lines(tmp_path, capsys):
    path = tmp_path / "records.jsonl"
    path.write_text("\n".join([
        '{"ttl": 1, "ip": "192.168.0.1", "success": true}',
        '42',
        '"x"',
        '[1]',
        '{"ttl": 2, "ip": "10.0.0.1", "success": true}',
    ]), encoding="utf-8")
    ap = build_argparser()
    args = ap.parse_args(["replay", "--records", str(path), "--dest", "10.0.0.1"])
    run_replay(args, ap)

    out = json.loads(capsys.readouterr().out)
    assert [r["ttl"] for r in out["rows"]] == [1, 2]
    assert out["records_ingested"] == 2
    assert out["records_dropped"] == 3


def test_log_level_choices():
    ap = build_argparser()
    assert build_settings(ap.parse_args(["fake", "--log-level", "debug"])).log_level == "DEBUG"
    with pytest.raises(SystemExit):
        ap.parse_args(["fake", "--log-level", "verbose"])
