# examples/chain_fountain.py
from physics_lab.labs import ChainFountainLab, ChainParams

lab = ChainFountainLab(ChainParams(kick_strength=15.0, chain_length=100, seed=42))

while lab.time < 5.0:
    lab.advance(1 / 60)

print("t:", lab.time)
print("peak fountain height:", lab.peak_height, "px")
print(lab.summary())
