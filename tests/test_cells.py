import pytest

from tiles.cells import Direction, LiquidCell, SolidCell


def test_solid_cell_defaults_to_absent():
    cell = SolidCell()
    assert cell.index is None
    assert not cell.needs_visual()
    assert cell == SolidCell()

def test_solid_cell_from_index():
    assert SolidCell.from_index(0).needs_visual()
    assert SolidCell.from_index(3) == SolidCell(3)
    assert SolidCell.from_index(1) != SolidCell.from_index(0)
    with pytest.raises(ValueError):
        SolidCell.from_index(-1)

def test_liquid_cell_emptiness_threshold():
    assert LiquidCell().is_empty()
    assert LiquidCell(0.01).is_empty()
    assert not LiquidCell(0.02).is_empty()

def test_liquid_cells_do_not_share_velocity():
    a, b = LiquidCell(), LiquidCell()
    a.velocity[Direction.DOWN] = 1.0
    assert b.velocity[Direction.DOWN] == 0.0

def test_liquid_display_rounds_to_tenth():
    assert str(LiquidCell(0.96)) == "1.0"
    assert str(LiquidCell(0.44)) == "0.4"
    assert str(LiquidCell(0.0)) == "0.0"

def test_liquid_display_rounds_ties_up():
    assert str(LiquidCell(0.25)) == "0.3"
    assert str(LiquidCell(0.75)) == "0.8"

def test_direction_neighbors_y_up():
    assert Direction.RIGHT.neighbor((0, 0)) == (1, 0)
    assert Direction.DOWN.neighbor((0, 0)) == (0, -1)
    assert Direction.LEFT.neighbor((0, 0)) == (-1, 0)
    assert Direction.UP.neighbor((0, 0)) == (0, 1)
