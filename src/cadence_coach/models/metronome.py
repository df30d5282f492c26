"""Metronome state snapshot."""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class SchedulerState(CamelModel):
    """Point-in-time view of a CadenceScheduler."""

    bpm: float = Field(..., description="Current or stored tempo")
    beat_index: int = Field(0, description="Beats fired since the last start")
    running: bool = Field(False, description="True while beats are being generated")
    start_epoch_ms: Optional[int] = Field(None, description="Wall-clock start of the current run")
