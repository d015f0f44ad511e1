from particle_sim.simulator import Simulator
from particle_sim.core.fields import UniformGravity
from particle_sim.renderer import DebugRenderer

sim = Simulator(table_height=1.0)
sim.add_field(UniformGravity(sim.scales, g=(0.0, -0.01, 0.0)))
ball = sim.add_particle((0.0, 8.0, 5.0), mass=1.0, radius=1.0, charge=0)

renderer = DebugRenderer()
for i in range(300):
    sim.tick()
    if i % 50 == 0:
        renderer.render_simulator(sim)

print("final y", ball.position[1], "vy", ball.velocity[1])
