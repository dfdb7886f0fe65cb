"""Tests for the voting pass."""

import pytest
import numpy as np
from houghcircles.config import RadiusBand
from houghcircles.detection.accumulator import Accumulator
from houghcircles.detection.rasterizer import midpoint_circle
from houghcircles.detection.voting import VotingPass, count_voting_pixels, voting_pixels
from houghcircles.errors import DetectionCancelled
from houghcircles.preprocessing.edges import EdgeMap


def edge_map_with(width, height, points):
    pixels = np.zeros((height, width), dtype=bool)
    for u, v in points:
        pixels[v, u] = True
    return EdgeMap(pixels)


def votes_per_pixel(band):
    return sum(len(midpoint_circle(r)) for r in band.radii())


class TestVotingPixels:
    """Test selection of edge pixels that vote."""

    def test_margin_excludes_border_pixels(self):
        """Test pixels closer than radius_max to the border do not vote."""
        band = RadiusBand(5, 10)
        edges = edge_map_with(50, 40, [(9, 20), (10, 20), (39, 20), (40, 20),
                                       (20, 9), (20, 10), (20, 29), (20, 30)])
        pixels = {tuple(p) for p in voting_pixels(edges, (50, 40), band)}
        assert pixels == {(10, 20), (39, 20), (20, 10), (20, 29)}

    def test_order_u_outer(self):
        """Test pixels are visited column by column."""
        band = RadiusBand(1, 2)
        edges = edge_map_with(10, 10, [(5, 2), (3, 7), (3, 4)])
        order = [tuple(p) for p in voting_pixels(edges, (10, 10), band)]
        assert order == [(3, 4), (3, 7), (5, 2)]

    def test_no_voting_area(self):
        """Test a band as wide as the region gives no pixels."""
        edges = edge_map_with(10, 10, [(5, 5)])
        assert count_voting_pixels(edges, (10, 10), RadiusBand(1, 5)) == 0


class TestVotingPass:
    """Test accumulation of votes."""

    def test_empty_edge_map(self):
        """Test no edges means no votes."""
        band = RadiusBand(10, 20)
        acc = Accumulator(100, 100, band.radius_count)
        voted = VotingPass().vote(edge_map_with(100, 100, []), acc, band)
        assert voted == 0
        assert acc.total_votes() == 0

    def test_single_pixel_votes(self):
        """Test one pixel draws one circle per radius plane."""
        band = RadiusBand(10, 12)
        acc = Accumulator(100, 100, band.radius_count)
        VotingPass().vote(edge_map_with(100, 100, [(50, 50)]), acc, band)

        assert acc[60, 50, 0] >= 1
        assert acc[61, 50, 1] >= 1
        assert acc[60, 50, 1] == 0
        assert acc[50, 50, :].sum() == 0
        assert acc[:, :, 0].sum() == len(midpoint_circle(10))
        assert acc[:, :, 1].sum() == len(midpoint_circle(11))

    def test_vote_conservation(self):
        """Test total votes = voting pixels x votes per pixel over the band."""
        band = RadiusBand(4, 9)
        rng = np.random.default_rng(3)
        pixels = rng.random((60, 80)) < 0.05
        edges = EdgeMap(pixels)
        acc = Accumulator(80, 60, band.radius_count)

        voted = VotingPass().vote(edges, acc, band)

        assert voted == count_voting_pixels(edges, (80, 60), band)
        assert voted > 0
        assert acc.total_votes() == voted * votes_per_pixel(band)

    def test_border_pixels_do_not_vote(self):
        """Test pixels inside the margin leave the accumulator untouched."""
        band = RadiusBand(10, 20)
        acc = Accumulator(100, 100, band.radius_count)
        edges = edge_map_with(100, 100, [(5, 5), (19, 50), (50, 80), (95, 95)])
        assert VotingPass().vote(edges, acc, band) == 0
        assert acc.total_votes() == 0

    def test_edge_map_unchanged(self):
        """Test voting does not modify the edge map."""
        band = RadiusBand(3, 6)
        edges = edge_map_with(30, 30, [(10, 10), (15, 12)])
        before = edges.pixels.copy()
        VotingPass().vote(edges, Accumulator(30, 30, band.radius_count), band)
        assert np.array_equal(edges.pixels, before)

    def test_accumulator_smaller_than_edge_map(self):
        """Test the accumulator extent bounds the voting area."""
        band = RadiusBand(2, 4)
        edges = edge_map_with(40, 40, [(10, 10), (30, 30)])
        acc = Accumulator(20, 20, band.radius_count)
        assert VotingPass().vote(edges, acc, band) == 1

    def test_cancellation(self):
        """Test the stop check ends voting early."""
        band = RadiusBand(3, 6)
        edges = edge_map_with(30, 30, [(10, 10), (15, 12)])
        acc = Accumulator(30, 30, band.radius_count)
        with pytest.raises(DetectionCancelled):
            VotingPass().vote(edges, acc, band, should_stop=lambda: True)

    def test_stop_check_called_per_pixel(self):
        """Test the stop check runs once per voting pixel."""
        band = RadiusBand(3, 6)
        edges = edge_map_with(30, 30, [(10, 10), (15, 12), (20, 20)])
        calls = []

        def should_stop():
            calls.append(1)
            return False

        VotingPass().vote(edges, Accumulator(30, 30, band.radius_count), band, should_stop)
        assert len(calls) == 3
