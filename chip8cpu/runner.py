"""Headless frame loop."""

from tqdm import tqdm

from chip8cpu.cpu import CPU


def run_frames(cpu: CPU, num_frames: int, progress: bool = False, desc: str = None) -> CPU:
    """Call ``cpu.cycle()`` ``num_frames`` times, back to back.

    No pacing is applied: a host that wants real time calls ``cycle()`` from
    its own 60 Hz loop instead. Errors raised by the CPU propagate.
    """
    if num_frames < 0:
        raise ValueError(f"num_frames must be >= 0, got {num_frames}")

    frames = range(num_frames)
    if progress:
        frames = tqdm(frames, total=num_frames, desc=desc or f"Running ({num_frames:,} frames)", unit="frame")

    for _ in frames:
        cpu.cycle()
    return cpu
