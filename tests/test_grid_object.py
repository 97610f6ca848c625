"""Tests for the GridObject value type."""

import dataclasses

import pygame
import pytest

from gridsnake.grid_object import GridObject, rects_intersect


class TestGridObject:

    def test_square_sets_both_dimensions(self):
        obj = GridObject.square(32, 64, 16)
        assert (obj.x, obj.y, obj.width, obj.height) == (32, 64, 16, 16)

    def test_is_immutable(self):
        obj = GridObject.square(0, 0, 32)
        with pytest.raises(dataclasses.FrozenInstanceError):
            obj.x = 5

    @pytest.mark.parametrize("width,height,empty", [
        (32, 32, False),
        (0, 32, True),
        (32, 0, True),
        (-1, 10, True),
    ])
    def test_is_empty(self, width, height, empty):
        assert GridObject(0, 0, width, height).is_empty is empty

    def test_extend_offsets_corner_and_grows_single_sided(self):
        obj = GridObject(100, 100, 32, 32).extend(3, 2)
        assert (obj.x, obj.y, obj.width, obj.height) == (97, 98, 35, 34)

    def test_extend_with_one_value_uses_it_for_both_axes(self):
        assert GridObject(10, 10, 20, 20).extend(4) == GridObject(6, 6, 24, 24)

    def test_reduce_undoes_extend(self):
        obj = GridObject(10.5, 20, 32, 32)
        assert obj.extend(2.5).reduce(2.5) == obj

    def test_extend_returns_new_instance(self):
        obj = GridObject(10, 10, 20, 20)
        obj.extend(4)
        assert obj == GridObject(10, 10, 20, 20)

    def test_to_rect_rounds(self):
        assert GridObject(1.6, 2.4, 31.6, 32.2).to_rect() == pygame.Rect(2, 2, 32, 32)

    def test_from_rect_round_trip(self):
        rect = pygame.Rect(4, 8, 16, 32)
        assert GridObject.from_rect(rect).to_rect() == rect

    def test_from_point_is_empty(self):
        assert GridObject.from_point((3, 4)).is_empty

    def test_translated_and_moved_to(self):
        obj = GridObject.square(32, 32, 32)
        assert obj.translated(-32, 64) == GridObject.square(0, 96, 32)
        assert obj.moved_to(5, 6) == GridObject.square(5, 6, 32)


class TestIntersection:

    def test_overlapping_rectangles_intersect(self):
        assert GridObject.square(0, 0, 32).intersects(GridObject.square(16, 16, 32))

    def test_touching_edges_do_not_intersect(self):
        assert not GridObject.square(0, 0, 32).intersects(GridObject.square(32, 0, 32))

    def test_identical_rectangles_intersect(self):
        assert GridObject.square(64, 64, 32).intersects(GridObject.square(64, 64, 32))

    def test_accepts_pygame_rect(self):
        assert GridObject.square(0, 0, 32).intersects(pygame.Rect(10, 10, 5, 5))

    def test_empty_rectangles_never_intersect(self):
        assert not rects_intersect(pygame.Rect(0, 0, 0, 10), pygame.Rect(0, 0, 10, 10))
