"""CPU configuration."""

from flax.struct import dataclass, field

from chip8cpu.constants import DEFAULT_SPEED, DEFAULT_TONE_FREQUENCY


@dataclass(frozen=True)
class CPUConfig:
    """Static settings of a CPU session.

    Attributes:
        speed: Instructions executed per call to ``cycle()``
        tone_frequency: Frequency in Hz requested from the speaker while the sound timer runs
        seed: Seed of the PRNG key used by the random instruction when no key is given
        log_level: Threshold of the CPU logger
        trace: Log every executed instruction at DEBUG level
    """
    speed: int = field(pytree_node=False, default=DEFAULT_SPEED)
    tone_frequency: float = field(pytree_node=False, default=DEFAULT_TONE_FREQUENCY)
    seed: int = field(pytree_node=False, default=0)
    log_level: str = field(pytree_node=False, default="INFO")
    trace: bool = field(pytree_node=False, default=False)

    def __post_init__(self):
        if self.speed < 1:
            raise ValueError(f"speed must be a positive number of instructions, got {self.speed}")
        if self.tone_frequency <= 0:
            raise ValueError(f"tone_frequency must be positive, got {self.tone_frequency}")
