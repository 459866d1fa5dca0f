"""Square-wave buzzer implementing the CPU speaker interface.

The speaker does not talk to an audio device. It tracks the requested tone
and renders PCM samples for the host to play.
"""

import numpy as np

from chip8cpu.constants import DEFAULT_TONE_FREQUENCY

DEFAULT_SAMPLE_RATE = 44100
AMPLITUDE = 0.25


class ToneSpeaker:
    """Single square-wave voice with mute control."""

    def __init__(self, sample_rate: int = DEFAULT_SAMPLE_RATE, volume: float = 1.0):
        self.sample_rate = sample_rate
        self.volume = volume
        self.gain = volume
        self.playing = False
        self.frequency = float(DEFAULT_TONE_FREQUENCY)
        self.starts = 0
        self._phase = 0

    def play(self, frequency: float = DEFAULT_TONE_FREQUENCY):
        """Start the tone, or retune it; playing again is harmless."""
        if frequency <= 0:
            raise ValueError(f"Frequency must be positive, got {frequency}")
        if not self.playing:
            self.starts += 1
            self._phase = 0
        self.playing = True
        self.frequency = float(frequency)

    def stop(self):
        self.playing = False

    def mute(self):
        self.gain = 0.0

    def unmute(self):
        self.gain = self.volume

    @property
    def muted(self) -> bool:
        return self.gain == 0.0

    def samples(self, count: int) -> np.ndarray:
        """Render the next ``count`` int16 samples of the current tone."""
        if not self.playing or self.muted:
            return np.zeros(count, dtype=np.int16)

        t = (self._phase + np.arange(count)) * self.frequency / self.sample_rate
        self._phase += count
        wave = np.where((t % 1.0) < 0.5, 1.0, -1.0)
        return (wave * AMPLITUDE * self.gain * np.iinfo(np.int16).max).astype(np.int16)
