import sys
import time

from chip8cpu import CPU, CPUConfig, FrameBuffer, Keypad, ToneSpeaker, run_frames
from chip8cpu.rendering import FrameRecorder

if __name__ == "__main__":
    rom_path = sys.argv[1] if len(sys.argv) > 1 else "roms/pong.ch8"
    num_frames = int(sys.argv[2]) if len(sys.argv) > 2 else 600

    framebuffer = FrameBuffer()
    recorder = FrameRecorder(max_frames=num_frames)
    framebuffer.add_listener(recorder)

    cpu = CPU(framebuffer, Keypad(), ToneSpeaker(), config=CPUConfig(speed=10))
    cpu.load_sprites_into_memory()
    cpu.load_rom(rom_path)

    start = time.time()
    run_frames(cpu, num_frames, progress=True)
    print("Execution time (s):", time.time() - start)
    print(cpu)
    print(framebuffer)

    recorder.save_png("last_frame.png", color_scheme="octo")
    recorder.save_video("run.mp4", fps=60)
