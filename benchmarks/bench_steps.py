"""
Microbenchmark: time per tick vs number of particles.
Run:
  python benchmarks/bench_steps.py
"""
import time

from particle_sim.simulator import Simulator
from particle_sim.geometry import BoxGeometry
from particle_sim.core.fields import Coulomb, LennardJones


def run(n: int, ticks: int = 200):
    sim = Simulator(geometry=BoxGeometry.from_box_size(4.0), seed=12345)
    sim.add_field(LennardJones(sim.scales))
    sim.add_field(Coulomb(sim.scales))
    sim.add_random_particles(n)

    # warmup
    sim.run(10)

    t0 = time.perf_counter()
    corrections = sim.run(ticks)
    t1 = time.perf_counter()

    per_tick = (t1 - t0) / ticks
    return per_tick, corrections


if __name__ == "__main__":
    for n in [5, 10, 20, 50, 100]:
        per_tick, corrections = run(n)
        print(f"N={n:4d}  tick={1e3*per_tick:8.3f} ms  ticks/s={1/per_tick:8.1f}  oob={corrections}")
