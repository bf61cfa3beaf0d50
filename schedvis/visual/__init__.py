"""Static charts built from recorded execution events."""

from schedvis.visual.timeline import plot_timeline, save_timeline

__all__ = ["plot_timeline", "save_timeline"]
