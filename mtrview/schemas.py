from typing import Literal, TypedDict, Optional

ReplyType = Literal["ttl_exceeded", "dest_reached", "unreach", "timeout"]

class ProbeEvent(TypedDict, total=False):
    target: str
    ttl: int
    flow_id: int
    protocol: str
    status: ReplyType
    hop_ip: Optional[str]
    hop_host: Optional[str]
    rtt_ms: Optional[float]
    timestamp: str
    raw: dict  # source payload kept for debugging

class ProbeRecord(TypedDict, total=False):
    ttl: int
    ip: str
    host: str
    success: bool
