"""
Telemetry recording for the physics engine.

One CSV row per logged frame. Rows are held in memory and written in
batches; the logger doubles as a context manager so the file is always
closed with its last batch.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from parasim.dynamics.state import FORCE_NAMES

if TYPE_CHECKING:
    from parasim.core.engine import PhysicsEngine

VECTOR_FIELDS = {"p": "position", "v": "velocity", "a": "acceleration"}
DEFAULT_FIELDS = ["p", "v", "a", "forces", "rho", "deployed"]


class TelemetryLogger:
    """
    Buffered CSV logger for engine telemetry.

    Parameters
    ----------
    filepath : str | Path
        Destination CSV. Parent folders are created.
    buffer_size : int
        Frames held in memory between writes. At 60 fps the default
        batches roughly 17 s of flight.
    fields : list[str] | None
        Column groups to record. Default: ["p", "v", "a", "forces", "rho", "deployed"]
        Options: "p" (position), "v" (velocity), "a" (acceleration),
                 "forces" (all six force vectors), "rho" (air density),
                 "deployed" (canopy flag as 0/1)

    Notes
    -----
    Header layout for the default fields::

        t, p_x, p_y, p_z, v_x, ..., a_z,
        gravity_x, ..., wind_z, rho, deployed

    Examples
    --------
    >>> with TelemetryLogger("jump.csv") as logger:
    ...     for _ in range(100):
    ...         engine.update(1 / 60)
    ...         logger.log(engine)
    """

    def __init__(
        self,
        filepath: str | Path,
        buffer_size: int = 1000,
        fields: list[str] | None = None
    ) -> None:
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.fields = list(DEFAULT_FIELDS) if fields is None else list(fields)

        unknown = [f for f in self.fields if f not in DEFAULT_FIELDS]
        if unknown:
            raise ValueError(
                f"Invalid fields: {unknown}. Valid options: {DEFAULT_FIELDS}"
            )

        self._pending: list[list[str]] = []
        self._stream: TextIO | None = None
        self._csv: Any = None  # csv.writer instance
        self._has_header = False

        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> TelemetryLogger:
        self._open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _open(self) -> None:
        # Reopening after close() appends below the rows already written
        mode = "a" if self._has_header else "w"
        self._stream = open(self.filepath, mode, newline="", encoding="utf-8")
        self._csv = csv.writer(self._stream)

    def header(self) -> list[str]:
        columns = ["t"]
        for group in self.fields:
            if group in VECTOR_FIELDS:
                columns += [f"{group}_{axis}" for axis in "xyz"]
            elif group == "forces":
                columns += [f"{name}_{axis}" for name in FORCE_NAMES for axis in "xyz"]
            else:
                columns.append(group)
        return columns

    def _row(self, engine: PhysicsEngine) -> list[str]:
        s = engine.state
        row = [f"{s.time:.10f}"]
        for group in self.fields:
            if group in VECTOR_FIELDS:
                row += [f"{v:.10e}" for v in getattr(s, VECTOR_FIELDS[group])]
            elif group == "forces":
                row += [f"{v:.10e}" for _, vec in s.forces.items() for v in vec]
            elif group == "rho":
                row.append(f"{engine.parameters.air_density:.10e}")
            elif group == "deployed":
                row.append("1" if engine.parameters.deployed else "0")
        return row

    def log(self, engine: PhysicsEngine) -> None:
        """
        Record the engine's current frame.

        Opens the file on first use when the logger is not used as a context
        manager. The header goes to disk immediately; frames are written
        once ``buffer_size`` of them are pending.
        """
        if self._stream is None:
            self._open()

        if not self._has_header:
            self._csv.writerow(self.header())
            self._stream.flush()
            self._has_header = True

        self._pending.append(self._row(engine))
        if len(self._pending) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write pending frames."""
        if self._csv is None or not self._pending:
            return
        self._csv.writerows(self._pending)
        self._stream.flush()
        self._pending.clear()

    def close(self) -> None:
        """Write pending frames and release the file. A later log() appends."""
        self.flush()
        if self._stream is not None:
            self._stream.close()
        self._stream = None
        self._csv = None
