# examples/black_hole_merger.py
from physics_lab.animation import AnimationDriver, ManualScheduler
from physics_lab.labs import BlackHoleLab
from physics_lab.renderer import BufferedRenderer
from physics_lab.types import BlackHole

lab = BlackHoleLab([BlackHole(36.0, spin=0.5), BlackHole(29.0, spin=0.3)], merger_time=4.0)
scheduler = ManualScheduler()
sink = BufferedRenderer()
driver = AnimationDriver(lab, scheduler, render_sink=sink)

driver.play()
i = 0
while scheduler.pending:
    scheduler.fire(i / 60)
    i += 1

print("stopped:", driver.state, "at t =", round(lab.time, 3))
print("peak strain:", lab.peak_strain())
print("frames recorded:", len(sink.frames))
print(lab.summary())
