"""Real-time cadence metronome using APScheduler.

Beats are armed one at a time as one-shot jobs at absolute wall-clock
times (start + n * interval), so scheduling latency on one beat does not
push back the following ones.
"""

import logging
import math
import threading
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Sequence

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger

from ..config import Settings, get_settings
from ..exceptions import InvalidTempoError, ValidationError
from ..models.metronome import SchedulerState
from .feedback import FeedbackChain, FeedbackSink

logger = logging.getLogger(__name__)

BeatCallback = Callable[[int, bool], None]


def _validate_tempo(bpm: Any) -> float:
    """Return bpm as float, or raise InvalidTempoError."""
    if isinstance(bpm, bool):
        raise InvalidTempoError(bpm)
    try:
        value = float(bpm)
    except (TypeError, ValueError):
        raise InvalidTempoError(bpm) from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidTempoError(bpm)
    return value


class CadenceScheduler:
    """Metronome that fires on_beat(beat_index, is_accent) at a steady tempo.

    Owns a private BackgroundScheduler with a single worker thread; beat
    callbacks and feedback run on that thread. One re-entrant lock guards
    every state change and every beat, so once stop() returns no further
    callback or feedback happens for the stopped run.

    Usage:
        metronome = CadenceScheduler(sinks=[ToneSink(player)])
        metronome.start(180, on_beat)
        # ... runner is active ...
        metronome.update_tempo(185, on_beat)
        metronome.stop()
        metronome.cleanup()
    """

    def __init__(
        self,
        sinks: Optional[Sequence[FeedbackSink]] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the metronome.

        Args:
            sinks: Feedback sinks in fallback order. A log-only sink is
                always appended as the last resort.
            settings: Settings to use instead of the cached global ones.
        """
        self._settings = settings or get_settings()
        self._chain = FeedbackChain(sinks)
        self._lock = threading.RLock()
        self.scheduler: Optional[BackgroundScheduler] = None

        self._bpm = _validate_tempo(self._settings.default_bpm)
        self._accent_every = max(1, self._settings.accent_every)
        self._volume = min(1.0, max(0.0, self._settings.volume))
        self._feedback_enabled = self._settings.feedback_enabled

        self._running = False
        self._beat_index = 0
        self._on_beat: Optional[BeatCallback] = None
        self._interval_s = 60.0 / self._bpm
        self._reference_s = 0.0
        self._start_epoch_ms: Optional[int] = None
        # Bumped on every start/stop; beats armed under an older value are dropped
        self._generation = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        """Check if the metronome is running."""
        return self._running

    @property
    def bpm(self) -> float:
        return self._bpm

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def feedback_enabled(self) -> bool:
        return self._feedback_enabled

    @property
    def interval_ms(self) -> float:
        """Milliseconds between beats at the current tempo."""
        return 60000.0 / self._bpm

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, bpm: float, on_beat: Optional[BeatCallback]) -> None:
        """Start generating beats.

        Does nothing if already running.

        Raises:
            InvalidTempoError: bpm is not a positive finite number
        """
        tempo = _validate_tempo(bpm)

        with self._lock:
            if self._running:
                logger.debug("Metronome is already running")
                return

            self._ensure_scheduler()
            self._generation += 1
            self._bpm = tempo
            self._interval_s = 60.0 / tempo
            self._on_beat = on_beat
            self._beat_index = 0

            now = time.time()
            self._reference_s = now
            self._start_epoch_ms = int(now * 1000)
            self._running = True

            self._arm_next_beat(self._generation)

        logger.info(f"Metronome started at {tempo:g} BPM ({self.interval_ms:.1f} ms interval)")

    def stop(self) -> None:
        """Stop generating beats and reset the beat counter."""
        with self._lock:
            if not self._running:
                return

            self._generation += 1
            self._running = False
            self._beat_index = 0
            self._start_epoch_ms = None
            if self.scheduler is not None:
                self.scheduler.remove_all_jobs()

        logger.info("Metronome stopped")

    def update_tempo(self, bpm: float, on_beat: Optional[BeatCallback] = None) -> None:
        """Change tempo.

        While running this is a stop followed by a start at the new tempo,
        done under one lock hold: the beat counter restarts at 0 and no beat
        from the old tempo fires afterwards. While idle only the stored tempo
        changes.

        Args:
            bpm: New tempo
            on_beat: Callback for the new run; keeps the current one if None

        Raises:
            InvalidTempoError: bpm is not a positive finite number
        """
        tempo = _validate_tempo(bpm)

        with self._lock:
            callback = on_beat if on_beat is not None else self._on_beat
            if not self._running:
                self._bpm = tempo
                self._interval_s = 60.0 / tempo
                self._on_beat = callback
                logger.debug(f"Stored tempo {tempo:g} BPM (metronome idle)")
                return

            old_bpm = self._bpm
            self.stop()
            self.start(tempo, callback)

        logger.info(f"Metronome tempo changed {old_bpm:g} -> {tempo:g} BPM")

    def set_volume(self, volume: float) -> None:
        """Set feedback volume, clamped to [0, 1]. Applies from the next beat.

        At 0 a ToneSink reports the beat as not delivered, so the chain falls
        through to haptic or log feedback.
        """
        try:
            value = float(volume)
        except (TypeError, ValueError):
            raise ValidationError(f"Volume must be a number, got {volume!r}", field="volume") from None
        if math.isnan(value):
            raise ValidationError("Volume must be a number, got NaN", field="volume")
        with self._lock:
            self._volume = min(1.0, max(0.0, value))

    def set_feedback_enabled(self, enabled: bool) -> None:
        """Turn audio/haptic feedback on or off. Beat callbacks keep firing either way."""
        with self._lock:
            self._feedback_enabled = bool(enabled)

    def get_state(self) -> SchedulerState:
        """Snapshot of the current metronome state."""
        with self._lock:
            return SchedulerState(
                bpm=self._bpm,
                beat_index=self._beat_index,
                running=self._running,
                start_epoch_ms=self._start_epoch_ms,
            )

    def cleanup(self) -> None:
        """Stop, shut down the background scheduler and release feedback sinks.

        Safe to call more than once. A later start() creates a new
        background scheduler.
        """
        with self._lock:
            self.stop()
            scheduler, self.scheduler = self.scheduler, None

        if scheduler is not None and scheduler.running:
            logger.debug("Shutting down metronome scheduler...")
            scheduler.shutdown(wait=False)
        self._chain.close()

    def get_scheduler_status(self) -> Dict[str, Any]:
        """Get the current scheduler status.

        Returns:
            Dictionary with metronome status information.
        """
        with self._lock:
            return {
                "is_running": self._running,
                "bpm": self._bpm,
                "interval_ms": round(self.interval_ms, 1),
                "beat_index": self._beat_index,
                "start_epoch_ms": self._start_epoch_ms,
                "volume": self._volume,
                "feedback_enabled": self._feedback_enabled,
                "accent_every": self._accent_every,
                "sinks": [s.name for s in self._chain.sinks],
            }

    def __enter__(self) -> "CadenceScheduler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    # ------------------------------------------------------------------
    # Beat generation
    # ------------------------------------------------------------------

    def _ensure_scheduler(self) -> None:
        if self.scheduler is not None:
            return
        self.scheduler = BackgroundScheduler(
            executors={"default": ThreadPoolExecutor(max_workers=1)},
            job_defaults={"coalesce": False, "misfire_grace_time": None},
            timezone=timezone.utc,
        )
        self.scheduler.start()

    def _arm_next_beat(self, generation: int) -> None:
        """Schedule the next beat at its ideal absolute time. Caller holds the lock."""
        next_index = self._beat_index + 1
        fire_at = self._reference_s + next_index * self._interval_s
        now = time.time()

        lateness = now - fire_at
        if lateness > self._interval_s:
            # A whole slot was missed (system stall); shift the reference instead
            # of firing a burst of catch-up beats.
            logger.warning(
                f"Metronome fell behind by {lateness * 1000:.0f} ms; re-anchoring at beat {next_index}"
            )
            self._reference_s = now - next_index * self._interval_s
            fire_at = now

        self.scheduler.add_job(
            self._fire_beat,
            DateTrigger(run_date=datetime.fromtimestamp(fire_at, tz=timezone.utc)),
            args=[generation],
            id=f"beat-{generation}-{next_index}",
            name="Metronome beat",
        )

    def _fire_beat(self, generation: int) -> None:
        """Scheduled job: deliver one beat, then arm the next."""
        with self._lock:
            if not self._running or generation != self._generation:
                return

            self._beat_index += 1
            beat_index = self._beat_index
            is_accent = beat_index % self._accent_every == 0

            if self._on_beat is not None:
                try:
                    self._on_beat(beat_index, is_accent)
                except Exception as e:
                    logger.error(f"Beat callback failed on beat {beat_index}: {e}")

            # The callback may have stopped or retuned the metronome
            if generation != self._generation:
                return

            if self._feedback_enabled:
                delivered_by = self._chain.play(is_accent, self._volume)
                if delivered_by is None:
                    logger.warning(f"No feedback sink delivered beat {beat_index}")

            self._arm_next_beat(generation)
