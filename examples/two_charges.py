from particle_sim.simulator import Simulator
from particle_sim.geometry import BoxGeometry
from particle_sim.core.fields import Coulomb

sim = Simulator(geometry=BoxGeometry.from_box_size(2.0))
sim.add_field(Coulomb(sim.scales, k=0.05))

# Opposite charges fall towards each other, bounce off the walls, and repeat
a = sim.add_particle((-5.0, 10.0, 10.0), mass=1.0, radius=1.0, charge=+1, velocity=(0.0, 0.05, 0.0))
b = sim.add_particle((+5.0, 10.0, 10.0), mass=1.0, radius=1.0, charge=-1, velocity=(0.0, -0.05, 0.0))

for _ in range(2000):
    sim.tick()

print("a pos", a.position, "v", a.velocity)
print("b pos", b.position, "v", b.velocity)
