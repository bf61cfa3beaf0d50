"""Recording of execution events for analysis."""

from schedvis.instrumentation.recorder import EventRecorder, ServiceSlice

__all__ = ["EventRecorder", "ServiceSlice"]
