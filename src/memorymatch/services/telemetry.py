from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from memorymatch.engine.serialize import SessionSnapshot

logger = logging.getLogger(__name__)


@dataclass
class TelemetryService:
    path: Path
    enabled: bool = True

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        if not self.enabled:
            return
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(rec, ensure_ascii=False) + "\n")
        except OSError as e:
            logger.warning("Dropping telemetry event %s: %s", event_type, e)

    def log_result(self, face_set_id: str, snap: SessionSnapshot) -> None:
        self.log(
            "session_won",
            {
                "face_set": face_set_id,
                "pairs": snap.total_pairs,
                "moves": snap.moves,
                "best_score": snap.best_score,
            },
        )
