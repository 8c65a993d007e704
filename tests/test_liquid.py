import numpy as np
import pytest

from tiles.cells import Direction, LiquidCell, SolidCell
from tiles.chunk import Chunk
from tiles.grid import Grid
from tiles.liquid import active_cells, step, total_amount
from tiles.world import WorldTiles

DT = 0.1


def _grids(chunk_size=16):
    return Grid(LiquidCell, chunk_size, track_writes=True), Grid(SolidCell, chunk_size)


def _amount(liquid, point):
    cell = liquid.get(point)
    return 0.0 if cell is None else cell.amount


@pytest.mark.parametrize("point", [(0, 5), (15, 15), (-16, 0)])
def test_isolated_cell_first_tick(point):
    liquid, solid = _grids()
    liquid.set(point, LiquidCell(1.0))
    stats = step(liquid, solid, DT)

    # gradient 1.0 each way, +0.1 down, -0.1 up; velocity = force * dt; all of it flows.
    expected = {Direction.RIGHT: 0.1, Direction.DOWN: 0.11, Direction.LEFT: 0.1, Direction.UP: 0.09}
    cell = liquid.get(point)
    for direction, v in expected.items():
        assert cell.velocity[direction] == pytest.approx(v)
        assert _amount(liquid, direction.neighbor(point)) == pytest.approx(v)
    assert cell.amount == pytest.approx(0.6)
    assert stats.active_cells == 1
    assert stats.total_outflow == pytest.approx(0.4)
    assert total_amount(liquid) == pytest.approx(1.0)


def test_reads_come_from_start_of_tick():
    liquid, solid = _grids()
    liquid.set((0, 0), LiquidCell(1.0))
    liquid.set((1, 0), LiquidCell(1.0))
    step(liquid, solid, DT)

    left, right = liquid.get((0, 0)), liquid.get((1, 0))
    # Neither cell sees the other's partial update: equal levels push nothing sideways.
    assert left.velocity[Direction.RIGHT] == 0.0
    assert right.velocity[Direction.LEFT] == 0.0
    assert left.amount == pytest.approx(0.7)
    assert right.amount == pytest.approx(0.7)
    assert total_amount(liquid) == pytest.approx(2.0)


def test_solid_neighbor_blocks_flow():
    liquid, solid = _grids()
    solid.set((0, 0), SolidCell.from_index(0))
    liquid.set((0, 1), LiquidCell(1.0))
    step(liquid, solid, DT)

    cell = liquid.get((0, 1))
    assert cell.velocity[Direction.DOWN] == 0.0
    assert _amount(liquid, (0, 0)) == 0.0
    assert cell.amount == pytest.approx(1.0 - 0.29)


def test_solid_without_index_does_not_block():
    liquid, solid = _grids()
    solid.set((0, 0), SolidCell())
    liquid.set((0, 1), LiquidCell(1.0))
    step(liquid, solid, DT)
    assert _amount(liquid, (0, 0)) == pytest.approx(0.11)


def test_outflow_never_exceeds_amount():
    liquid, solid = _grids()
    liquid.set((0, 0), LiquidCell(0.05, np.full(4, 10.0)))
    stats = step(liquid, solid, DT)

    assert stats.total_outflow <= 0.05 + 1e-12
    assert liquid.get((0, 0)).amount >= -1e-12
    received = [_amount(liquid, d.neighbor((0, 0))) for d in Direction]
    assert all(r > 0.0 for r in received)
    assert sum(received) == pytest.approx(0.05)
    assert total_amount(liquid) == pytest.approx(0.05)


def test_zero_velocity_skips_distribution():
    liquid, solid = _grids()
    # Walled in on all four sides: every velocity component is zeroed.
    for direction in Direction:
        solid.set(direction.neighbor((3, 3)), SolidCell.from_index(0))
    liquid.set((3, 3), LiquidCell(0.8))
    stats = step(liquid, solid, DT)
    cell = liquid.get((3, 3))
    assert cell.amount == 0.8
    assert not cell.velocity.any()
    assert stats.total_outflow == 0.0


def test_empty_cells_are_still():
    liquid, solid = _grids()
    liquid.set((3, 3), LiquidCell(0.005, np.array([1.0, 0.0, 0.0, 0.0])))
    liquid.set((8, 8), LiquidCell(0.0))
    stats = step(liquid, solid, DT)

    cell = liquid.get((3, 3))
    assert cell.amount == 0.005
    assert list(cell.velocity) == [1.0, 0.0, 0.0, 0.0]
    assert _amount(liquid, (4, 3)) == 0.0
    assert liquid.get((8, 8)).amount == 0.0
    assert stats.active_cells == 0
    assert list(active_cells(liquid)) == []


def test_disabled_step_leaves_grid_untouched():
    liquid, solid = _grids()
    liquid.set((0, 0), LiquidCell(1.0))
    stats = step(liquid, solid, DT, enabled=False)
    assert liquid.get((0, 0)).amount == 1.0
    assert liquid.get((1, 0)).amount == 0.0
    assert stats.active_cells == 0
    assert liquid.modified_chunks() == ((0, 0),)


def test_step_marks_touched_cells_modified():
    liquid, solid = _grids()
    liquid.set((0, 0), LiquidCell(1.0))
    liquid.clear_modified()
    step(liquid, solid, DT)

    assert liquid.modified_chunks() == ((-1, 0), (0, -1), (0, 0))
    touched = sorted(p for p, _ in liquid.modified_cells())
    assert touched == [(-1, 0), (0, -1), (0, 0), (0, 1), (1, 0)]


def test_requires_write_tracking():
    with pytest.raises(ValueError):
        step(Grid(LiquidCell), Grid(SolidCell), DT)


def test_step_leaves_untouched_chunks_alone(monkeypatch):
    liquid, solid = _grids()
    for cx in range(8):
        for cy in range(8):
            liquid.get_chunk_or_create((cx, cy))
    liquid.set((0, 0), LiquidCell(1.0))
    liquid.clear_modified()
    before = dict(liquid.chunks)
    source = liquid.get((0, 0))

    def no_scan(self):
        raise AssertionError("step scanned a whole chunk")

    monkeypatch.setattr(Chunk, "indexed_cells", no_scan)
    stats = step(liquid, solid, DT)

    assert stats.active_cells == 1
    assert liquid.get((0, 0)) is source
    for coord, chunk in before.items():
        assert liquid.chunks[coord] is chunk
    assert liquid.modified_chunks() == ((-1, 0), (0, -1), (0, 0))
    assert liquid.chunks[(5, 5)].modified_cells() == ()


def test_active_set_carries_across_ticks():
    liquid, solid = _grids()
    liquid.set((0, 0), LiquidCell(1.0))
    counts = [step(liquid, solid, DT).active_cells for _ in range(2)]
    # Source plus the four neighbors it filled above epsilon.
    assert counts == [1, 5]


def test_cells_written_between_ticks_join_next_tick():
    liquid, solid = _grids()
    assert step(liquid, solid, DT).active_cells == 0
    liquid.get_or_create((4, 4)).amount = 1.0
    assert step(liquid, solid, DT).active_cells == 1
    assert _amount(liquid, (4, 3)) == pytest.approx(0.11)


def test_floor_scenario_conserves_mass_and_settles():
    world = WorldTiles.new(chunk_size=16)
    floor = [(x, 0) for x in range(10)]
    for p in floor:
        world.solid.set(p, SolidCell.from_index(0))
    world.liquid.set((0, 5), LiquidCell(1.0))

    def tick():
        step(world.liquid, world.solid, DT)
        assert total_amount(world.liquid) == pytest.approx(1.0, abs=1e-9)
        assert all(_amount(world.liquid, p) == 0.0 for p in floor)

    source, row4, row3 = [1.0], [0.0], [0.0]
    for _ in range(3):
        tick()
        source.append(_amount(world.liquid, (0, 5)))
        row4.append(_amount(world.liquid, (0, 4)))
        row3.append(_amount(world.liquid, (0, 3)))
    assert source[0] > source[1] > source[2]
    assert row4[0] < row4[1] < row4[2]
    assert row3[1] < row3[2] < row3[3]

    reached = set()
    for _ in range(1000):
        tick()
        reached.update(x for x in range(6) if _amount(world.liquid, (x, 1)) > 0.0)
        if 5 in reached:
            break
    assert reached == {0, 1, 2, 3, 4, 5}
