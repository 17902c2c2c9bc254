# examples/pendulum.py
from physics_lab.animation import AnimationDriver, ManualScheduler
from physics_lab.labs import PendulumLab, PendulumParams
from physics_lab.renderer import DebugRenderer

lab = PendulumLab(PendulumParams(length=1.5, initial_angle_deg=30.0, material="steel"))
scheduler = ManualScheduler()
driver = AnimationDriver(lab, scheduler, render_sink=DebugRenderer())

driver.play()
# Ten seconds at 60 Hz; the sink prints every second frame.
scheduler.run(i / 60 for i in range(601))
driver.pause()

print("ideal period:", lab.ideal_period(), "large-angle period:", lab.large_angle_period())
print(lab.summary())
