# mtrview/store/aggregate.py

import logging
from dataclasses import replace
from typing import Optional

from mtrview.destination import DestinationSource
from mtrview.schemas import ProbeRecord
from mtrview.store.rules import clean, coerce_ttl, is_destination_hit, row_key, tightens
from mtrview.store.state import HopRow

logger = logging.getLogger(__name__)


class AggregateStore:
    """
    Live per-(ttl, responder) view of an MTR path.

    Records are folded in one at a time, in whatever order they arrive.
    Once a successful reply from the destination is seen at some TTL, that
    TTL becomes the known end of the path: deeper rows are pruned and later
    records beyond it are dropped. The boundary only ever moves down.
    """

    def __init__(self, destination: Optional[DestinationSource] = None):
        self.destination = destination
        self._rows: dict = {}
        self._order_seq = 0
        self._known_final_ttl: Optional[int] = None

    @property
    def known_final_ttl(self) -> Optional[int]:
        """Smallest TTL confirmed to reach the destination; None while unbounded."""
        return self._known_final_ttl

    def __len__(self) -> int:
        return len(self._rows)

    def _destination_identity(self) -> str:
        if self.destination is None:
            return ""
        return clean(self.destination.get_destination_identity())

    def ingest(self, record: Optional[ProbeRecord]) -> bool:
        """
        Fold one probe record into the store.

        Malformed records (not a dict, missing or non-numeric ttl) are dropped
        without error, as are records beyond the known final TTL. Returns
        True if the record updated a row.
        """
        if not isinstance(record, dict):
            logger.debug("dropping non-record %r", type(record).__name__)
            return False
        ttl = coerce_ttl(record.get("ttl"))
        if ttl is None:
            logger.debug("dropping record with bad ttl: %r", record.get("ttl"))
            return False

        # 1) beyond the end of the path
        if self._known_final_ttl is not None and ttl > self._known_final_ttl:
            return False

        # 2) destination reply at a shallower TTL tightens the boundary
        success = bool(record.get("success"))
        ip = record.get("ip")
        if is_destination_hit(success, ip, self._destination_identity()) \
                and tightens(ttl, self._known_final_ttl):
            self._tighten(ttl)

        # 3) upsert
        key = row_key(ttl, ip, record.get("host"))
        row = self._rows.get(key)
        if row is None:
            row = HopRow(ttl=ttl, order=self._order_seq)
            self._order_seq += 1
            self._rows[key] = row
            logger.debug("new row %s (order %d)", key, row.order)
        row.sent += 1
        if clean(ip):
            row.ip = clean(ip)
        if clean(record.get("host")):
            row.host = clean(record.get("host"))
        if success:
            row.received += 1
        return True

    def _tighten(self, ttl: int) -> None:
        previous = self._known_final_ttl
        self._known_final_ttl = ttl
        stale = [k for k, r in self._rows.items() if r.ttl > ttl]
        for k in stale:
            del self._rows[k]
        logger.info("final ttl %s -> %s, pruned %d rows", previous, ttl, len(stale))

    def rows(self) -> list[HopRow]:
        """Copies of all rows ordered by ttl, then creation order."""
        ordered = sorted(self._rows.values(), key=lambda r: (r.ttl, r.order))
        return [replace(r) for r in ordered]

    def ttls(self) -> list:
        return [r.ttl for r in self.rows()]

    def snapshot(self) -> dict:
        return {
            "known_final_ttl": self._known_final_ttl,
            "rows": [r.as_dict() for r in self.rows()],
        }
