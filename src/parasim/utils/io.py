# src/parasim/utils/io.py
import pandas as pd
import numpy as np
from pathlib import Path
from typing import List, Dict, Any


def _flatten(record: Dict[str, Any]) -> Dict[str, Any]:
    """Expand 3-vectors into <key>_x/_y/_z columns."""
    row: Dict[str, Any] = {}
    for key, value in record.items():
        if isinstance(value, (np.ndarray, list, tuple)) and len(value) == 3:
            for axis, component in zip("xyz", value):
                row[f"{key}_{axis}"] = float(component)
        else:
            row[key] = value
    return row


def save_simulation_history(history: List[Dict[str, Any]], filepath: str) -> Path:
    """
    Write polled jump snapshots to CSV, one row per snapshot.

    Args:
        history: Snapshot dicts, e.g. PhysicsData.as_dict() results.
            Vector entries such as 'position' become position_x/_y/_z.
        filepath: Destination path (e.g., 'output/jump/logs/history.csv')

    Returns:
        The path written.
    """
    if not history:
        raise ValueError("No snapshots recorded. Step the simulation before saving history.")

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    pd.DataFrame([_flatten(r) for r in history]).to_csv(path, index=False)
    print(f"Jump history saved to {path.absolute()}")
    return path


def load_simulation_history(filepath: str) -> pd.DataFrame:
    """Read a CSV written by save_simulation_history back into a DataFrame."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"No history file at {path}")
    return pd.read_csv(path)
