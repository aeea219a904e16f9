# mtrview/session.py

import logging
import time
from typing import Iterable, Optional

from mtrview.config import Settings
from mtrview.destination import StaticDestination
from mtrview.source.base import Prober, record_from_event
from mtrview.store.aggregate import AggregateStore

logger = logging.getLogger(__name__)


class MtrSession:
    """
    One monitoring session: a prober feeding a single aggregate store.
    prober may be None for sessions that only feed() pre-recorded records.
    """

    def __init__(self, prober: Optional[Prober], settings: Settings, destination: Optional[StaticDestination] = None):
        self.prober = prober
        self.s = settings
        self.destination = destination if destination is not None else StaticDestination()
        self.store = AggregateStore(self.destination)
        self.records_ingested = 0
        self.records_dropped = 0
        self.rounds_done = 0

    def set_destination(self, identity: Optional[str]) -> None:
        self.destination.set(identity)

    def reset(self) -> None:
        """Throw away all rows and the known path length."""
        self.store = AggregateStore(self.destination)
        self.records_ingested = 0
        self.records_dropped = 0
        self.rounds_done = 0
        logger.info("session reset")

    def _ingest(self, record) -> bool:
        if self.store.ingest(record):
            self.records_ingested += 1
            return True
        self.records_dropped += 1
        return False

    def feed(self, records: Iterable) -> int:
        applied = 0
        for rec in records:
            if self._ingest(rec):
                applied += 1
        return applied

    def run(self, dest: str) -> dict:
        if self.prober is None:
            raise ValueError("session has no prober; use feed() for recorded records")
        if not self.destination.get_destination_identity():
            self.destination.set(dest)
        logger.info("mtr session to %s: %d rounds, max ttl %d", dest, self.s.rounds, self.s.max_ttl)

        flow_ids = list(self.s.flow_ids)
        for rnd in range(self.s.rounds):
            ttl = 1
            # re-read the boundary each step; it can tighten mid-round
            while ttl <= self.s.max_ttl:
                final = self.store.known_final_ttl
                if final is not None and ttl > final:
                    break
                flow_id = flow_ids[(rnd + ttl) % len(flow_ids)]
                ev = self.prober.probe_once(dest, ttl, flow_id=flow_id)
                self._ingest(record_from_event(ev))
                if self.s.pace_ms:
                    time.sleep(self.s.pace_ms / 1000.0)
                ttl += 1
            self.rounds_done += 1

        return self.summary(dest)

    def summary(self, dest: str) -> dict:
        snap = self.store.snapshot()
        return {
            "target": dest,
            "known_final_ttl": snap["known_final_ttl"],
            "rounds": self.rounds_done,
            "records_ingested": self.records_ingested,
            "records_dropped": self.records_dropped,
            "rows": snap["rows"],
        }
