"""Gantt-style timeline of job service slices.

Draws one row per job with a bar for every stretch of CPU time it
received. The slice that completes a job is drawn in a second color so
preemptions stand out.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from schedvis.instrumentation.recorder import EventRecorder

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from schedvis.engine.events import ExecutionEvent

logger = logging.getLogger(__name__)

SERVICE_COLOR = "steelblue"
FINISH_COLOR = "seagreen"


def _as_recorder(source: EventRecorder | Iterable[ExecutionEvent]) -> EventRecorder:
    if isinstance(source, EventRecorder):
        return source
    recorder = EventRecorder()
    recorder.extend(source)
    return recorder


def plot_timeline(
    source: EventRecorder | Iterable[ExecutionEvent],
    ax: Axes | None = None,
    title: str = "CPU Schedule",
) -> Axes:
    """Draw service slices on ``ax`` (a new figure when omitted).

    Args:
        source: A recorder or any iterable of engine events.
        ax: Axes to draw on.
        title: Axes title.

    Returns:
        The Axes drawn on.
    """
    import matplotlib.pyplot as plt
    from matplotlib.patches import Patch

    recorder = _as_recorder(source)
    slices = recorder.slices()

    if ax is None:
        _fig, ax = plt.subplots(figsize=(10, max(2.0, 0.4 * len({s.job_id for s in slices}) + 1)))

    job_ids = sorted({s.job_id for s in slices})
    rows = {job_id: row for row, job_id in enumerate(job_ids)}
    for s in slices:
        ax.broken_barh(
            [(s.start, s.duration)],
            (rows[s.job_id] - 0.4, 0.8),
            facecolors=FINISH_COLOR if s.finished else SERVICE_COLOR,
        )

    ax.set_yticks(range(len(job_ids)))
    ax.set_yticklabels([f"Job {job_id}" for job_id in job_ids])
    ax.invert_yaxis()
    ax.set_xlabel("Time (ticks)")
    ax.set_title(title)
    ax.grid(True, alpha=0.3, axis="x")
    ax.legend(
        handles=[
            Patch(facecolor=SERVICE_COLOR, label="Serviced"),
            Patch(facecolor=FINISH_COLOR, label="Finished"),
        ],
        loc="lower right",
    )
    return ax


def save_timeline(
    source: EventRecorder | Iterable[ExecutionEvent],
    path: str | Path,
    title: str = "CPU Schedule",
) -> Path:
    """Render the timeline to a PNG file and return its path."""
    import matplotlib.pyplot as plt

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    ax = plot_timeline(source, title=title)
    fig = ax.get_figure()
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    logger.info("Saved timeline to %s", path)
    return path
