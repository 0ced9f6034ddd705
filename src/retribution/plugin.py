"""Best-effort game state snapshots for external plugins.

After each turn the session hands the state to StateWriter.dispatch, which
writes a JSON snapshot on a background thread. Nothing that goes wrong here
is ever reported back to the game.
"""

import json
import threading
from pathlib import Path
from typing import Any

from .engine.state import GameState
from .logging import get_logger

logger = get_logger(__name__)

VERSION = "0.1.0"


def plugin_output(state: GameState) -> dict[str, Any]:
    return {"version": VERSION, "game_state": state.to_dict()}


class StateWriter:
    """Write state snapshots to `output_file`.

    Snapshots carry a sequence number so a slow write of an older turn never
    overwrites a newer one.
    """

    def __init__(self, output_file: Path):
        self.output_file = Path(output_file)
        self._lock = threading.Lock()
        self._threads: list[threading.Thread] = []
        self._dispatched = 0
        self._written = 0

    def write_state(self, state: GameState) -> None:
        """Write a snapshot synchronously. Raises on failure."""
        self._dispatched += 1
        self._write(self._dispatched, plugin_output(state))

    def _write(self, seq: int, payload: dict[str, Any]) -> None:
        text = json.dumps(payload)
        with self._lock:
            if seq < self._written:
                return
            self.output_file.write_text(text)
            self._written = seq

    def _worker(self, seq: int, payload: dict[str, Any]) -> None:
        try:
            self._write(seq, payload)
        except Exception as exc:
            logger.warning(
                "snapshot_failed", path=str(self.output_file), error=str(exc)
            )
        else:
            logger.debug("snapshot_written", path=str(self.output_file), seq=seq)

    def dispatch(self, state: GameState) -> None:
        """Snapshot `state` in the background. Never raises."""
        try:
            # Serialize on this thread; the worker only sees plain data.
            payload = plugin_output(state)
        except Exception as exc:
            logger.warning("snapshot_failed", error=str(exc))
            return

        self._dispatched += 1
        thread = threading.Thread(
            target=self._worker, args=(self._dispatched, payload), daemon=True
        )
        self._threads = [t for t in self._threads if t.is_alive()]
        self._threads.append(thread)
        thread.start()

    def flush(self) -> None:
        """Wait for dispatched snapshots to finish."""
        for thread in self._threads:
            thread.join()
        self._threads = []

    def close(self) -> None:
        """Finish pending writes and remove the snapshot file."""
        self.flush()
        try:
            self.output_file.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(
                "snapshot_cleanup_failed", path=str(self.output_file), error=str(exc)
            )
