"""Real-time cadence metronome and its feedback sinks."""

from .feedback import FeedbackChain, FeedbackSink, HapticSink, LogSink, ToneSink
from .scheduler import CadenceScheduler

__all__ = [
    "CadenceScheduler",
    "FeedbackChain",
    "FeedbackSink",
    "HapticSink",
    "LogSink",
    "ToneSink",
]
