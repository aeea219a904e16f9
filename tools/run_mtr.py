# tools/run_mtr.py
# Usage examples:
#   python3 -m tools.run_mtr fake
#   python3 -m tools.run_mtr fake --hops 8 --dest-ttl 5 --rounds 3
#   python3 -m tools.run_mtr replay --records records.jsonl --dest 10.0.0.1
#
# replay reads one JSON record per line: {"ttl": 3, "ip": "10.0.0.3", "success": true}

import json
import argparse
import logging
from mtrview.config import LOG_LEVELS, Settings
from mtrview.session import MtrSession

def build_settings(args) -> Settings:
    return Settings(
        max_ttl=args.max_ttl,
        rounds=args.rounds,
        flow_ids=tuple(args.flow_ids),
        pace_ms=args.pace_ms,
        log_level=args.log_level,
    )

def run_with_fake(args):
    from mtrview.source.fake import FakeProber, linear_path_script
    dest = args.dest or "8.8.8.8"
    script = linear_path_script(dest, args.hops, args.dest_ttl, rounds=args.rounds)
    sess = MtrSession(FakeProber(script=script), build_settings(args))
    res = sess.run(dest)
    print(json.dumps(res, indent=2))

def load_records(path):
    records = []
    with open(path, encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError:
                # kept so the store counts it as a dropped record
                records.append(None)
    return records

def run_replay(args, ap):
    if not args.records:
        ap.error("replay needs --records FILE")
    try:
        records = load_records(args.records)
    except OSError as e:
        ap.error(f"cannot read {args.records}: {e}")
    sess = MtrSession(None, build_settings(args))
    sess.set_destination(args.dest)
    sess.feed(records)
    print(json.dumps(sess.summary(args.dest or ""), indent=2))

def configure_logging(settings: Settings):
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

def build_argparser():
    ap = argparse.ArgumentParser(description="MTR path aggregation runner")
    ap.add_argument("mode", choices=["fake", "replay"], help="Scripted fake path, or replay a JSON-lines record file")
    ap.add_argument("--dest", help="Destination IP used to detect the end of the path")
    ap.add_argument("--records", help="JSON-lines record file (replay mode)")
    ap.add_argument("--hops", type=int, default=6, help="Path length for the fake prober")
    ap.add_argument("--dest-ttl", type=int, default=None, help="TTL at which the fake destination answers")
    ap.add_argument("--max-ttl", type=int, default=30, help="Maximum TTL to probe")
    ap.add_argument("--rounds", type=int, default=3, help="Number of passes over the path")
    ap.add_argument("--flow-ids", type=int, nargs="+", default=[0], help="Flow IDs to cycle")
    ap.add_argument("--pace-ms", type=int, default=0, help="Pause between probes (milliseconds)")
    ap.add_argument("--log-level", default="WARNING", type=str.upper, choices=LOG_LEVELS,
                    help="Logging level")
    return ap

if __name__ == "__main__":
    ap = build_argparser()
    args = ap.parse_args()
    try:
        settings = build_settings(args)
    except ValueError as e:
        ap.error(str(e))
    configure_logging(settings)

    if args.mode == "fake":
        run_with_fake(args)
    else:
        run_replay(args, ap)
