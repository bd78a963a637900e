"""
Unit tests for the grid layout engine.

Covers slot mapping, the top-down to bottom-up conversion, cell
partitioning and scale-to-fit placement.
"""

import pytest

from pdfgrid.layout import (
    MAX_SLOTS,
    SheetConfig,
    cell_size,
    compute_grid,
    degenerate_reason,
    fit_to_cell,
    slot_position,
    to_bottom_origin,
)

A4 = (595.28, 841.89)


@pytest.fixture
def config():
    return SheetConfig()


@pytest.fixture
def cells(config):
    return compute_grid(9, *A4, config)


class TestSlotPosition:
    """Tests for slot_position()."""

    @pytest.mark.parametrize("index, expected", [
        (0, (0, 0)), (1, (0, 1)), (2, (0, 2)),
        (3, (1, 0)), (4, (1, 1)), (5, (1, 2)),
        (6, (2, 0)), (7, (2, 1)), (8, (2, 2)),
    ])
    def test_slot_position_when_valid_index_then_row_major(self, index, expected):
        """Slots run left to right, then top to bottom."""
        assert slot_position(index) == expected

    @pytest.mark.parametrize("index", [-1, 9])
    def test_slot_position_when_out_of_range_then_raises_error(self, index):
        with pytest.raises(ValueError, match="slot index"):
            slot_position(index)


class TestToBottomOrigin:
    """Tests for the top-down to PDF Y conversion."""

    def test_box_at_sheet_top_then_ends_at_sheet_height(self):
        """A box touching the top edge has its bottom at sheet_height - height."""
        assert to_bottom_origin(0, 100, 800) == 700

    def test_box_at_sheet_bottom_then_zero(self):
        assert to_bottom_origin(700, 100, 800) == 0

    def test_lower_box_then_smaller_y(self):
        """Moving a box down the page decreases its PDF Y."""
        upper = to_bottom_origin(10, 50, 800)
        lower = to_bottom_origin(200, 50, 800)
        assert lower < upper


class TestCellSize:
    """Tests for cell_size()."""

    def test_cell_size_when_defaults_then_gap_counted_twice(self, config):
        """Three cells and two gaps fill the content area exactly."""
        width, height = cell_size(config)

        assert 3 * width + 2 * config.gap == pytest.approx(config.content_width)
        assert 3 * height + 2 * config.gap == pytest.approx(config.content_height)

    def test_cell_size_when_simple_numbers_then_exact(self):
        config = SheetConfig(margin=10, gap=5, page_width=330, page_height=630)

        assert cell_size(config) == (100, 200)


class TestComputeGrid:
    """Tests for compute_grid()."""

    @pytest.mark.parametrize("count", range(0, 10))
    def test_compute_grid_when_any_count_then_nine_entries(self, config, count):
        """Always nine cells; the first `count` are occupied."""
        cells = compute_grid(count, *A4, config)

        assert len(cells) == MAX_SLOTS
        assert [c.occupied for c in cells] == [i < count for i in range(MAX_SLOTS)]

    def test_compute_grid_when_overcount_then_clamped(self, config):
        cells = compute_grid(14, *A4, config)

        assert len(cells) == MAX_SLOTS
        assert all(c.occupied for c in cells)

    def test_compute_grid_when_negative_count_then_raises_error(self, config):
        with pytest.raises(ValueError, match="item_count"):
            compute_grid(-1, *A4, config)

    def test_compute_grid_when_default_then_first_cell_in_top_left_corner(self, cells, config):
        """Slot 0 sits at the margin from the left and top edges."""
        _, cell_height = cell_size(config)
        first = cells[0]

        assert first.x == 20
        assert first.y == pytest.approx(A4[1] - 20 - cell_height)
        assert first.top == pytest.approx(20)

    def test_compute_grid_when_row_increases_then_cell_moves_down(self, cells):
        """Higher rows are visually lower: smaller PDF Y, larger top offset."""
        for col in range(3):
            top, middle, bottom = cells[col], cells[col + 3], cells[col + 6]
            assert top.y > middle.y > bottom.y
            assert top.top < middle.top < bottom.top

    def test_compute_grid_when_col_increases_then_cell_moves_right(self, cells):
        for row in range(3):
            left, centre, right = cells[row * 3: row * 3 + 3]
            assert left.x < centre.x < right.x
            assert left.y == centre.y == right.y

    def test_compute_grid_when_default_then_cells_do_not_overlap(self, cells, config):
        """Adjacent cells are separated by exactly the gap."""
        assert cells[1].x - cells[0].right == pytest.approx(config.gap)
        assert cells[0].y - (cells[3].y + cells[3].height) == pytest.approx(config.gap)

    def test_compute_grid_when_default_then_last_cell_touches_margin(self, cells):
        last = cells[8]

        assert last.right == pytest.approx(A4[0] - 20)
        assert last.y == pytest.approx(20)

    def test_compute_grid_when_sheet_size_differs_from_config_then_uses_sheet(self, config):
        cells = compute_grid(1, 330, 630, SheetConfig(margin=10, gap=5))

        assert cells[0].width == 100
        assert cells[0].height == 200
        assert cells[0].y == 420

    def test_compute_grid_when_margin_too_large_then_cells_degenerate(self):
        cells = compute_grid(3, *A4, SheetConfig(margin=300))

        assert all(c.is_degenerate for c in cells)


class TestFitToCell:
    """Tests for fit_to_cell() and degenerate_reason()."""

    @pytest.mark.parametrize("source", [
        (595, 842),     # A4 portrait
        (842, 595),     # A4 landscape
        (100, 100),     # small square, upscaled
        (5000, 30),     # extreme banner
        (30, 5000),     # extreme strip
        (612, 792),     # US Letter
    ])
    def test_fit_when_positive_sizes_then_inside_cell(self, cells, source):
        """Drawn rectangle lies within the cell and uses the min axis ratio."""
        cell = cells[4]
        placement = fit_to_cell(cell, *source)

        assert placement.scale == min(cell.width / source[0], cell.height / source[1])
        assert placement.x >= cell.x
        assert placement.y >= cell.y
        assert placement.x + placement.width <= cell.right + 1e-9
        assert placement.y + placement.height <= cell.y + cell.height + 1e-9

    @pytest.mark.parametrize("source", [(595, 842), (842, 595), (300, 300)])
    def test_fit_when_placed_then_centred(self, cells, source):
        """Offsets are half the leftover space on each axis."""
        cell = cells[0]
        placement = fit_to_cell(cell, *source)

        assert cell.width - placement.width == 2 * placement.x_offset
        assert cell.height - placement.height == 2 * placement.y_offset
        assert placement.x_offset >= 0
        assert placement.y_offset >= 0

    def test_fit_when_landscape_in_portrait_cell_then_width_bound(self, cells):
        """A wide page fills the cell width and is padded vertically."""
        cell = cells[0]
        placement = fit_to_cell(cell, 842, 595)

        assert placement.width == pytest.approx(cell.width)
        assert placement.x_offset == pytest.approx(0)
        assert placement.y_offset > 0

    def test_fit_when_same_aspect_different_sizes_then_identical_geometry(self, cells):
        """Pages with equal aspect ratio end up the same size in any cell."""
        placements = [fit_to_cell(cells[i], 300 * (i + 1), 600 * (i + 1)) for i in range(9)]

        for p in placements:
            assert p.scale <= 1
            assert p.width == pytest.approx(placements[0].width)
            assert p.height == pytest.approx(placements[0].height)
            assert p.x_offset == pytest.approx(placements[0].x_offset)
            assert p.y_offset == pytest.approx(placements[0].y_offset)

    def test_fit_when_moved_to_other_slot_then_same_scale_and_offsets(self, cells):
        """Slot assignment changes position only."""
        a = fit_to_cell(cells[0], 400, 300)
        b = fit_to_cell(cells[7], 400, 300)

        assert a.scale == b.scale
        assert (a.width, a.height) == (b.width, b.height)
        assert (a.x_offset, a.y_offset) == (b.x_offset, b.y_offset)
        assert (a.x, a.y) != (b.x, b.y)

    @pytest.mark.parametrize("source", [(0, 100), (100, 0), (0, 0)])
    def test_fit_when_zero_size_source_then_raises_error(self, cells, source):
        assert "zero size" in degenerate_reason(cells[0], *source)
        with pytest.raises(ValueError, match="zero size"):
            fit_to_cell(cells[0], *source)

    def test_fit_when_cell_degenerate_then_raises_error(self):
        cell = compute_grid(1, *A4, SheetConfig(gap=400))[0]

        assert "no drawable area" in degenerate_reason(cell, 595, 842)
        with pytest.raises(ValueError, match="no drawable area"):
            fit_to_cell(cell, 595, 842)

    def test_degenerate_reason_when_valid_then_none(self, cells):
        assert degenerate_reason(cells[0], 595, 842) is None
