# mtrview/store/state.py
from dataclasses import asdict, dataclass

@dataclass
class HopRow:
    ttl: int
    order: int
    ip: str = ""
    host: str = ""
    sent: int = 0
    received: int = 0

    @property
    def loss_pct(self) -> float:
        if self.sent == 0:
            return 0.0
        return 100.0 * (1.0 - (self.received / self.sent))

    def as_dict(self) -> dict:
        d = asdict(self)
        d["loss_pct"] = round(self.loss_pct, 1)
        return d
