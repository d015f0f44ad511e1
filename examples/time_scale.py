from particle_sim import SimConfig, SimulationManager, setup_logging

setup_logging("INFO")

mgr = SimulationManager(SimConfig(num_particles=8, seed=4))
sim = mgr.create_simulator()

for _ in range(100):
    mgr.tick()

# Slow time down by 10x, then restore it: trajectories stay continuous
speeds = [float((p.velocity ** 2).sum() ** 0.5) for p in sim.particles]
sim.set_time_scale(1.0, -1)
for _ in range(1000):
    mgr.tick()
sim.set_time_scale(1.0, 0)

print("speeds before", [round(s, 4) for s in speeds])
print("speeds after ", [round(float((p.velocity ** 2).sum() ** 0.5), 4) for p in sim.particles])
