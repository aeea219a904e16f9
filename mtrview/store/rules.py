# mtrview/store/rules.py
import math
from typing import Optional, Union

Number = Union[int, float]
RowKey = tuple  # (ttl, kind, identity)

def coerce_ttl(value) -> Optional[Number]:
    """
    Lenient TTL conversion. Returns None for anything that is not a finite
    number: missing, bools, blank or non-numeric strings, NaN and infinities.
    Integral values come back as int.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(num):
        return None
    return int(num) if num.is_integer() else num

def clean(value) -> str:
    if not value:
        return ""
    return str(value).strip()

def row_key(ttl: Number, ip=None, host=None) -> RowKey:
    ip = clean(ip)
    if ip:
        return (ttl, "ip", ip)
    host = clean(host).lower()
    if host:
        return (ttl, "host", host)
    return (ttl, "unknown", "")

def is_destination_hit(success, ip, destination: str) -> bool:
    """True if a successful reply came from the destination itself."""
    if not success or not destination:
        return False
    ip = clean(ip)
    return bool(ip) and ip == destination

def tightens(ttl: Number, known_final_ttl: Optional[int]) -> bool:
    # equal TTL is already as tight as it gets
    return known_final_ttl is None or ttl < known_final_ttl
