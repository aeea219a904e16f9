# mtrview/source/fake.py
from collections import deque

from mtrview.source.base import Prober
from mtrview.schemas import ProbeEvent

class FakeProber(Prober):
    """
    script: dict[(ttl,flow_id)] -> sequence of ProbeEvent-like dicts to return each call
    If no scripted event left, returns a timeout event.
    """
    def __init__(self, script=None):
        self.script = {}
        self.calls = []
        if script:
            for k, v in script.items():
                self.script[k] = deque(v)

    def probe_once(self, dest: str, ttl: int, flow_id: int = 0) -> ProbeEvent:
        key = (ttl, flow_id)
        self.calls.append(key)
        dq = self.script.get(key)
        if dq:
            return dq.popleft()
        return {
            "target": dest,
            "ttl": ttl,
            "flow_id": flow_id,
            "protocol": "fake",
            "status": "timeout",
            "hop_ip": None,
            "hop_host": None,
            "rtt_ms": None,
            "timestamp": None,
            "raw": {}
        }

def linear_path_script(dest: str, hops: int, dest_ttl: int | None = None, rounds: int = 1):
    """
    Script a simple path: TTL k answers from 10.0.0.k, and the destination
    answers at dest_ttl (defaults to hops) and at every TTL beyond it.
    """
    dest_ttl = dest_ttl or hops
    script = {}
    for ttl in range(1, hops + 1):
        hit = ttl >= dest_ttl
        script[(ttl, 0)] = [{
            "target": dest,
            "ttl": ttl, "flow_id": 0, "protocol": "fake",
            "status": "dest_reached" if hit else "ttl_exceeded",
            "hop_ip": dest if hit else f"10.0.0.{ttl}",
            "hop_host": None,
            "rtt_ms": 10.0 + ttl, "timestamp": None, "raw": {}
        } for _ in range(rounds)]
    return script
