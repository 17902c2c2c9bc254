# examples/gas_piston.py
from physics_lab.labs import GasParams, ThermodynamicsLab, volume_liters

lab = ThermodynamicsLab(GasParams(temperature=300.0, volume=80.0, seed=7))

for volume in (80.0, 60.0, 40.0, 20.0):
    lab.set_params(volume=volume)
    for _ in range(180):
        lab.advance(1 / 60)
    print(f"V={volume_liters(volume):.1f} L  pressure={lab.state.pressure:.1f}")

lab.set_params(mode="friction_heat")
for _ in range(5):
    lab.heat()
print(lab.summary())
