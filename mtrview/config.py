# mtrview/config.py
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

@dataclass
class Settings:
    max_ttl: int = 30
    rounds: int = 10                 # full passes over 1..max_ttl, like mtr -c
    flow_ids: tuple[int, ...] = (0,)
    pace_ms: int = 0
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.max_ttl < 1:
            raise ValueError(f"max_ttl must be positive, got {self.max_ttl}")
        if self.rounds < 1:
            raise ValueError(f"rounds must be positive, got {self.rounds}")
        if not self.flow_ids:
            raise ValueError("flow_ids must not be empty")
        self.flow_ids = tuple(self.flow_ids)
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level}")
