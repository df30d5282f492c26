"""
Feedback sinks that turn a logical beat into something the runner perceives.

Sound and vibration hardware live outside this package; the sinks wrap
caller-supplied callables:

    tone = ToneSink(player=lambda hz, ms, volume: speaker.beep(hz, ms, volume))
    haptic = HapticSink(pulse=lambda ms: watch.vibrate(ms))
    chain = FeedbackChain([tone, haptic])

The chain tries sinks in order and stops at the first one that delivers.
A LogSink is always last, so a beat is at least observable in the logs.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from ..config import Settings, get_settings
from ..exceptions import FeedbackUnavailableError

logger = logging.getLogger(__name__)

TonePlayer = Callable[[float, int, float], None]
HapticPulse = Callable[[int], None]


class FeedbackSink(ABC):
    """A way of signaling a beat."""

    name: str = "sink"

    @abstractmethod
    def try_play(self, is_accent: bool, volume: float = 1.0) -> bool:
        """Signal one beat. Return False (or raise) if the signal was not delivered."""

    def close(self) -> None:
        """Release any held device resources."""


class ToneSink(FeedbackSink):
    """Audible click through an external tone player."""

    name = "tone"

    def __init__(
        self,
        player: Optional[TonePlayer],
        accent_hz: Optional[float] = None,
        normal_hz: Optional[float] = None,
        duration_ms: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            player: Callable taking (frequency_hz, duration_ms, volume)
            accent_hz: Pitch of accented beats
            normal_hz: Pitch of normal beats
            duration_ms: Click length
            settings: Source of any value not given; the cached settings by default
        """
        settings = settings or get_settings()
        self._player = player
        self.accent_hz = accent_hz if accent_hz is not None else settings.accent_tone_hz
        self.normal_hz = normal_hz if normal_hz is not None else settings.normal_tone_hz
        self.duration_ms = duration_ms if duration_ms is not None else settings.tone_duration_ms

    def try_play(self, is_accent: bool, volume: float = 1.0) -> bool:
        if self._player is None:
            return False
        if volume <= 0:
            # Muted: nothing audible to deliver
            return False
        frequency = self.accent_hz if is_accent else self.normal_hz
        self._player(frequency, self.duration_ms, volume)
        return True

    def close(self) -> None:
        self._player = None


class HapticSink(FeedbackSink):
    """Vibration pulse through an external haptic device."""

    name = "haptic"

    def __init__(
        self,
        pulse: Optional[HapticPulse],
        accent_ms: Optional[int] = None,
        normal_ms: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            pulse: Callable taking a pulse duration in milliseconds
            accent_ms: Pulse length for accented beats
            normal_ms: Pulse length for normal beats
            settings: Source of any value not given; the cached settings by default
        """
        settings = settings or get_settings()
        self._pulse = pulse
        self.accent_ms = accent_ms if accent_ms is not None else settings.accent_pulse_ms
        self.normal_ms = normal_ms if normal_ms is not None else settings.normal_pulse_ms

    def try_play(self, is_accent: bool, volume: float = 1.0) -> bool:
        if self._pulse is None:
            return False
        self._pulse(self.accent_ms if is_accent else self.normal_ms)
        return True

    def close(self) -> None:
        self._pulse = None


class LogSink(FeedbackSink):
    """Last resort: record the beat in the log."""

    name = "log"

    def try_play(self, is_accent: bool, volume: float = 1.0) -> bool:
        logger.debug("TICK" if is_accent else "tick")
        return True


class FeedbackChain:
    """Ordered fallback over feedback sinks."""

    def __init__(self, sinks: Optional[Sequence[FeedbackSink]] = None):
        self._sinks: List[FeedbackSink] = list(sinks or [])
        if not any(isinstance(s, LogSink) for s in self._sinks):
            self._sinks.append(LogSink())

    @property
    def sinks(self) -> List[FeedbackSink]:
        return list(self._sinks)

    def play(self, is_accent: bool, volume: float = 1.0) -> Optional[str]:
        """
        Deliver a beat through the first sink that can.

        Failures are logged and never raised.

        Returns:
            Name of the sink that delivered the beat, or None if none did
        """
        for sink in self._sinks:
            try:
                if sink.try_play(is_accent, volume):
                    return sink.name
                logger.debug(f"Feedback sink '{sink.name}' unavailable, falling back")
            except FeedbackUnavailableError as e:
                logger.debug(f"Feedback sink '{sink.name}' unavailable: {e.message}")
            except Exception as e:
                logger.warning(f"Feedback sink '{sink.name}' failed: {e}")
        return None

    def close(self) -> None:
        """Close every sink; failures are logged."""
        for sink in self._sinks:
            try:
                sink.close()
            except Exception as e:
                logger.warning(f"Error closing feedback sink '{sink.name}': {e}")
