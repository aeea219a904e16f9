# mtrview/source/base.py
from abc import ABC, abstractmethod

from mtrview.schemas import ProbeEvent, ProbeRecord

REPLY_STATUSES = ("ttl_exceeded", "dest_reached")

class Prober(ABC):
    @abstractmethod
    def probe_once(self, dest: str, ttl: int, flow_id: int = 0) -> ProbeEvent:
        """Send exactly one probe for dest@ttl and return a ProbeEvent dict."""
        raise NotImplementedError

def record_from_event(ev: ProbeEvent) -> ProbeRecord:
    """Reduce a ProbeEvent to the fields the aggregate store consumes."""
    return {
        "ttl": ev.get("ttl"),
        "ip": ev.get("hop_ip") or "",
        "host": ev.get("hop_host") or "",
        "success": ev.get("status") in REPLY_STATUSES,
    }
