"""
Microbenchmark: gas step time vs number of particles, chain step time vs length.
Run:
  python benchmarks/bench_steps.py
"""
import time
from physics_lab.animation import AnimationDriver, ManualScheduler
from physics_lab.labs import ChainFountainLab, ChainParams, GasMode, GasParams, ThermodynamicsLab
from physics_lab.profiler import FRAME_BUDGET_MS, Profiler
from physics_lab.renderer import NullRenderer


def run(lab, frames: int = 300):
    prof = Profiler()
    scheduler = ManualScheduler()
    driver = AnimationDriver(lab, scheduler, render_sink=NullRenderer(), profiler=prof)

    driver.play()
    # warmup (the first fire only arms the clock)
    scheduler.run(i / 60 for i in range(31))

    t0 = time.perf_counter()
    scheduler.run((31 + i) / 60 for i in range(frames))
    t1 = time.perf_counter()
    driver.close()

    per_frame = (t1 - t0) / frames
    return per_frame, prof.stats.summary()


if __name__ == "__main__":
    for n in [100, 200, 350, 500]:
        # STATES mode runs the O(N²) pair bonds.
        lab = ThermodynamicsLab(GasParams(mode=GasMode.STATES, particle_count=n, seed=12345))
        per_frame, summary = run(lab)
        print(f"gas N={n:4d}  frame={1e3*per_frame:8.3f} ms  over budget={per_frame * 1e3 > FRAME_BUDGET_MS}")
        for k in ["physics", "render"]:
            if k in summary:
                print(" ", k, summary[k])
        print()

    for n in [50, 100, 200]:
        per_frame, summary = run(ChainFountainLab(ChainParams(chain_length=n, seed=12345)))
        print(f"chain N={n:4d}  frame={1e3*per_frame:8.3f} ms")
        print("  physics", summary.get("physics"))
        print()
