import numpy as np
import pytest

from particle_sim.core.fields import Coulomb, LennardJones, StaticField
from particle_sim.core.invariants import linear_momentum
from particle_sim.errors import ValidationError
from particle_sim.geometry import BoxGeometry
from particle_sim.simulator import Simulator


def test_two_opposite_charges_attract():
    """
    Two unit masses with charges +1 and -1 at (0,0,0) and (5,0,0), one
    Coulomb field, one tick at time scale (1, 0): they accelerate towards
    each other with equal speeds.
    """
    sim = Simulator(geometry=BoxGeometry(box_length=100.0, wall_thickness=0.0))
    sim.add_field(Coulomb(sim.scales))
    a = sim.add_particle((0.0, 0.0, 0.0), mass=1, radius=1, charge=1)
    b = sim.add_particle((5.0, 0.0, 0.0), mass=1, radius=1, charge=-1)

    sim.tick()

    assert a.velocity[0] > 0
    assert b.velocity[0] < 0
    assert abs(a.velocity[0]) == abs(b.velocity[0])


def _three_body(order):
    specs = [
        ((0.0, 5.0, 5.0), 1.0, 1),
        ((3.0, 5.0, 5.0), 1.5, -1),
        ((1.0, 7.0, 5.5), 1.2, 1),
    ]
    sim = Simulator()
    sim.add_field(Coulomb(sim.scales, k=0.5))
    sim.add_field(LennardJones(sim.scales, epsilon=0.01))
    made = {}
    for i in order:
        pos, mass, charge = specs[i]
        made[i] = sim.add_particle(pos, mass=mass, radius=1.0, charge=charge)
    sim.tick()
    return [made[i].get_vel() for i in range(3)], [made[i].get_pos() for i in range(3)]


def test_tick_independent_of_particle_order():
    v_fwd, x_fwd = _three_body([0, 1, 2])
    v_rev, x_rev = _three_body([2, 1, 0])
    v_mix, x_mix = _three_body([1, 0, 2])
    for v1, v2, v3 in zip(v_fwd, v_rev, v_mix):
        assert np.allclose(v1, v2, rtol=1e-12, atol=1e-15)
        assert np.allclose(v1, v3, rtol=1e-12, atol=1e-15)
    for x1, x2 in zip(x_fwd, x_rev):
        assert np.allclose(x1, x2, rtol=1e-12, atol=1e-15)


def test_pairwise_fields_conserve_momentum_inside_box():
    sim = Simulator(geometry=BoxGeometry(box_length=1000.0, wall_thickness=0.0), seed=11)
    sim.add_field(Coulomb(sim.scales, k=0.5))
    sim.add_field(LennardJones(sim.scales))
    for x in (-20.0, -5.0, 4.0, 17.0):
        sim.add_particle((x, 500.0, 500.0 + x / 3), mass=1.0 + abs(x) / 20, radius=1.0)
    p0 = linear_momentum(sim.particles)
    sim.run(5)
    assert np.allclose(linear_momentum(sim.particles), p0, atol=1e-12)


def test_time_rescale_round_trip():
    sim = Simulator()
    sim.add_particle((0.0, 5.0, 5.0), velocity=(0.1, -0.3, 0.7))
    sim.add_particle((2.0, 5.0, 5.0), velocity=(-1.5, 0.2, 0.0))
    before = [p.get_vel() for p in sim.particles]

    sim.set_time_scale(2.0, 0)
    for p, v in zip(sim.particles, before):
        assert np.array_equal(p.velocity, 2.0 * v)
    assert sim.scales.time.value() == 2.0

    sim.set_time_scale(1.0, 0)
    for p, v in zip(sim.particles, before):
        assert np.allclose(p.velocity, v)


def test_time_rescale_uses_exponents():
    sim = Simulator()
    p = sim.add_particle((0.0, 5.0, 5.0), velocity=(1.0, 0.0, 0.0))
    sim.set_time_scale(5.0, -2)
    assert p.velocity[0] == pytest.approx(0.05)
    sim.set_time_scale(1.0, 1)
    assert p.velocity[0] == pytest.approx(10.0)


def test_zero_time_scale_freezes_and_resumes():
    sim = Simulator()
    p = sim.add_particle((0.0, 5.0, 5.0), velocity=(0.2, 0.0, 0.0))
    sim.set_time_scale(0.0, 0)
    assert sim.is_paused
    assert p.velocity[0] == 0.2

    sim.tick()
    assert np.array_equal(p.position, [0.0, 5.0, 5.0])

    sim.set_time_scale(3.0, 0)
    assert not sim.is_paused
    assert p.velocity[0] == pytest.approx(0.6)


def test_negative_time_scale_rejected():
    sim = Simulator()
    with pytest.raises(ValidationError):
        sim.set_time_scale(-1.0, 0)


def test_out_of_range_time_exponent_rejected():
    sim = Simulator()
    p = sim.add_particle((0.0, 5.0, 5.0), velocity=(0.2, 0.0, 0.0))
    for exponent in (400, -400):
        with pytest.raises(ValidationError):
            sim.set_time_scale(1.0, exponent)
    assert sim.scales.time.exponent == 0
    assert p.velocity[0] == 0.2

    sim.set_time_scale(1.0, 100)
    sim.set_time_scale(1.0, -100)
    assert p.velocity[0] == pytest.approx(0.2e-100)


def test_out_of_bounds_safety_net_on_z():
    sim = Simulator()
    full = sim.geometry.upper(1.0)[2]
    p = sim.add_particle((0.0, 5.0, full - 0.75), mass=1, radius=1, charge=0, velocity=(0.0, 0.0, 40.0))
    corrections = sim.tick()
    assert corrections == 1
    assert p.position[2] == full
    assert p.velocity[2] == -40.0


def test_particles_stay_inside_box():
    sim = Simulator(seed=5)
    sim.add_field(Coulomb(sim.scales, k=0.5))
    sim.add_field(LennardJones(sim.scales))
    sim.add_random_particles(12)
    sim.run(200)
    for p in sim.particles:
        assert sim.geometry.contains(p.get_pos(), p.radius)
        assert p.is_finite()


def test_random_particles_respect_minimums_and_bounds():
    sim = Simulator(seed=42)
    particles = sim.add_random_particles(20)
    for p in particles:
        assert 1.0 <= p.mass < 2.0
        assert 1.0 <= p.radius < 2.0
        assert p.charge in (-1, 0, 1)
        assert sim.geometry.contains(p.get_pos(), p.radius)
    assert [p.id for p in particles] == list(range(1, 21))


def test_same_seed_same_particles():
    a = Simulator(seed=9).add_random_particles(5)
    b = Simulator(seed=9).add_random_particles(5)
    for p, q in zip(a, b):
        assert np.array_equal(p.position, q.position)
        assert (p.mass, p.radius, p.charge) == (q.mass, q.radius, q.charge)


def test_invalid_particle_is_not_added():
    sim = Simulator()
    with pytest.raises(ValidationError):
        sim.add_particle((0.0, 5.0, 5.0), mass=0.5)
    with pytest.raises(ValidationError):
        sim.add_particle((0.0, 5.0, 5.0), radius=0.2)
    assert sim.particles == ()


def test_remove_particle():
    sim = Simulator()
    p = sim.add_particle((0.0, 5.0, 5.0))
    q = sim.add_particle((2.0, 5.0, 5.0))
    sim.remove_particle(p)
    assert sim.particles == (q,)
    with pytest.raises(KeyError):
        sim.remove_particle(p)
    assert sim.find_particle(q.id) is q
    assert sim.find_particle(p.id) is None


def test_removal_during_tick_is_deferred():
    sim = Simulator()
    doomed = sim.add_particle((0.0, 5.0, 5.0), velocity=(0.5, 0.0, 0.0))
    other = sim.add_particle((2.0, 5.0, 5.0))
    seen = []

    class Remover(StaticField):
        def field_dynamics(self, p):
            seen.append(len(sim.particles))
            if p is doomed:
                sim.remove_particle(doomed)
            return np.zeros(3)

    sim.add_field(Remover(sim.scales))
    sim.tick()

    assert seen == [2, 2]
    # Still integrated this tick, gone afterwards.
    assert doomed.position[0] == 0.5
    assert sim.particles == (other,)


def test_paused_simulator_skips_physics_but_removes():
    sim = Simulator()
    sim.add_field(Coulomb(sim.scales))
    a = sim.add_particle((0.0, 5.0, 5.0), charge=1, velocity=(0.1, 0.0, 0.0))
    b = sim.add_particle((3.0, 5.0, 5.0), charge=-1)
    sim.toggle_pause()
    assert sim.tick() == 0
    assert np.array_equal(a.position, [0.0, 5.0, 5.0])
    assert np.array_equal(b.velocity, np.zeros(3))
    assert sim.tick_count == 0

    sim.remove_particle(b)
    assert sim.particles == (a,)

    sim.toggle_pause()
    sim.tick()
    assert a.position[0] == pytest.approx(0.1)
    assert sim.tick_count == 1


def test_add_field_dispatch():
    sim = Simulator()
    c = sim.add_field(Coulomb(sim.scales))
    g = sim.add_field(StaticField(sim.scales))
    assert sim.dynamic_fields == [c]
    assert sim.static_fields == [g]
    sim.remove_field(c)
    assert sim.dynamic_fields == []
    with pytest.raises(KeyError):
        sim.remove_field(c)
    with pytest.raises(TypeError):
        sim.add_field(object())


def test_update_box_size():
    sim = Simulator()
    sim.update_box_size(2.0)
    assert sim.geometry.box_length == 20.0
    assert sim.geometry.wall_thickness == pytest.approx(0.5)


def test_snapshot_uses_table_height():
    sim = Simulator(table_height=2.0)
    p = sim.add_particle((1.0, 5.0, 5.0), charge=-1)
    (state,) = sim.snapshot()
    assert state.id == p.id
    assert state.position == (1.0, 7.0, 5.0)
    assert state.color == "red"


def test_addition_during_tick_is_deferred():
    sim = Simulator()
    first = sim.add_particle((0.0, 5.0, 5.0), velocity=(0.5, 0.0, 0.0))
    seen = []
    added = []

    class Spawner(StaticField):
        def field_dynamics(self, p):
            seen.append(len(sim.particles))
            if not added:
                late = sim.add_particle((3.0, 5.0, 5.0), mass=1.0, radius=1.0, velocity=(0.5, 0.0, 0.0))
                added.append(late)
            return np.full(3, 0.1)

    sim.add_field(Spawner(sim.scales))
    sim.tick()

    (late,) = added
    assert seen == [1]
    assert late.id == first.id + 1
    # Neither pushed nor moved by the tick it was added in.
    assert np.array_equal(late.position, [3.0, 5.0, 5.0])
    assert np.array_equal(late.velocity, [0.5, 0.0, 0.0])
    assert sim.particles == (first, late)

    sim.tick()
    assert late.position[0] == pytest.approx(3.6)


def test_removing_a_particle_added_in_the_same_tick():
    sim = Simulator()
    sim.add_particle((0.0, 5.0, 5.0))

    class Flicker(StaticField):
        def field_dynamics(self, p):
            sim.remove_particle(sim.add_particle((3.0, 5.0, 5.0)))
            return np.zeros(3)

    sim.add_field(Flicker(sim.scales))
    sim.tick()
    assert len(sim.particles) == 1


def test_box_too_small_for_a_particle_is_rejected():
    with pytest.raises(ValidationError):
        BoxGeometry.from_box_size(0.15)
    with pytest.raises(ValidationError):
        BoxGeometry(box_length=1.5, wall_thickness=0.0)

    sim = Simulator()
    before = sim.geometry
    with pytest.raises(ValidationError):
        sim.update_box_size(0.15)
    assert sim.geometry is before


def test_box_must_fit_particles_already_inside():
    sim = Simulator()
    sim.add_particle((0.0, 5.0, 5.0), radius=1.9)
    with pytest.raises(ValidationError):
        sim.update_box_size(0.3)
    assert sim.geometry.box_length == 10.0
    sim.update_box_size(0.5)
    assert sim.geometry.box_length == 5.0


def test_radius_larger_than_box_is_rejected():
    sim = Simulator(geometry=BoxGeometry.from_box_size(0.3))
    with pytest.raises(ValidationError):
        sim.add_particle(radius=1.9)
    assert sim.particles == ()
    for p in sim.add_random_particles(20):
        assert sim.geometry.fits(p.radius)
        assert sim.geometry.contains(p.position, p.radius)
