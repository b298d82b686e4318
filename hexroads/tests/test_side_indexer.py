"""Tests for side letters and directional asset keys."""
import math

import pytest
from hexroads.hex_coords import HEX_NEIGHBOR_OFFSETS, neighbors
from hexroads.issues import IssueCode
from hexroads.schemas import RoadShape
from hexroads.side_indexer import (
    SIDE_LETTERS,
    AssetCatalog,
    angle_between,
    angle_to_side_index,
    asset_path,
    compose_asset_key,
    neighbor_delta_to_side_index,
    normalize_angle,
    resolve_asset,
    side_index_to_letter,
    side_letter_to_index,
)


@pytest.fixture
def catalog():
    return AssetCatalog.default()


class TestNeighborDelta:
    def test_delta_matches_direction_index(self):
        """Side index i is the same step as neighbors() index i."""
        for index, (dq, dr) in enumerate(HEX_NEIGHBOR_OFFSETS):
            assert neighbor_delta_to_side_index(dq, dr) == index

    def test_letters_for_compass_steps(self):
        assert side_index_to_letter(neighbor_delta_to_side_index(1, -1)) == "a"
        assert side_index_to_letter(neighbor_delta_to_side_index(1, 0)) == "b"
        assert side_index_to_letter(neighbor_delta_to_side_index(-1, 0)) == "e"

    @pytest.mark.parametrize("delta", [(0, 0), (2, 0), (1, 1), (-1, -1), (3, -3)])
    def test_non_adjacent_delta_is_none(self, delta):
        assert neighbor_delta_to_side_index(*delta) is None


class TestAngleToSide:
    def test_grid_angles_agree_with_delta_table(self):
        for index, neighbor in enumerate(neighbors(0, 0)):
            angle = angle_between((0, 0), neighbor)
            assert angle_to_side_index(angle) == index

    def test_agreement_holds_for_any_size(self):
        for index, neighbor in enumerate(neighbors(4, -2)):
            angle = angle_between((4, -2), neighbor, size=3.5)
            assert angle_to_side_index(angle) == index

    def test_east_is_b(self):
        assert side_index_to_letter(angle_to_side_index(0.0)) == "b"

    def test_north_east_is_a(self):
        assert angle_to_side_index(math.pi / 3) == 0

    def test_nearest_side_wins(self):
        # 10 degrees off east still lands on b
        assert angle_to_side_index(math.radians(10)) == 1
        assert angle_to_side_index(math.radians(-10)) == 1

    def test_west_band_uses_sign(self):
        # Raw 150 degrees lands exactly on +-180 after the offset
        just_below = math.radians(150) - 1e-12
        just_above = math.radians(150) + 1e-12
        assert angle_to_side_index(just_below) == 5  # f
        assert angle_to_side_index(just_above) == 4  # e

    def test_west_band_edges(self):
        assert angle_to_side_index(math.radians(140)) == 5
        assert angle_to_side_index(math.radians(160)) == 4

    def test_full_turns_are_equivalent(self):
        for degrees in (-170, -95, -20, 0, 45, 100, 179):
            a = math.radians(degrees)
            assert angle_to_side_index(a) == angle_to_side_index(a + 2 * math.pi)
            assert angle_to_side_index(a) == angle_to_side_index(a - 4 * math.pi)

    def test_normalize_angle_range(self):
        assert normalize_angle(math.pi) == pytest.approx(math.pi)
        assert normalize_angle(-math.pi) == pytest.approx(math.pi)
        assert normalize_angle(3 * math.pi / 2) == pytest.approx(-math.pi / 2)

    @pytest.mark.parametrize("angle", [1e17, -1e17, 1e300, 2**60 * math.pi])
    def test_huge_angles_still_resolve(self, angle):
        assert -math.pi < normalize_angle(angle) <= math.pi
        assert angle_to_side_index(angle) in range(6)

    def test_many_turns_match_single_turn(self):
        a = math.radians(10)
        assert angle_to_side_index(a + 1000 * 2 * math.pi) == angle_to_side_index(a)

    @pytest.mark.parametrize("angle", [math.inf, -math.inf, math.nan])
    def test_non_finite_angle_rejected(self, angle):
        with pytest.raises(ValueError):
            normalize_angle(angle)
        with pytest.raises(ValueError):
            angle_to_side_index(angle)


class TestLetters:
    def test_six_letters(self):
        assert SIDE_LETTERS == ("a", "b", "c", "d", "e", "f")

    def test_index_wraps(self):
        assert side_index_to_letter(6) == "a"
        assert side_index_to_letter(-1) == "f"

    def test_letter_to_index(self):
        assert side_letter_to_index("d") == 3
        assert side_letter_to_index("F") == 5

    def test_unknown_letter_rejected(self):
        with pytest.raises(ValueError):
            side_letter_to_index("g")


class TestComposeAssetKey:
    def test_key_format(self):
        assert compose_asset_key(0, 3) == "entry_a_exit_d"

    def test_key_is_stable(self):
        assert compose_asset_key(2, 5) == compose_asset_key(2, 5)

    def test_asset_path(self):
        assert asset_path("entry_a_exit_d") == "tiles/entry_a_exit_d.glb"


class TestAssetCatalog:
    def test_default_catalog_has_eighteen_keys(self, catalog):
        assert len(catalog.available) == 18
        assert "entry_c_exit_a" in catalog.blocked
        assert len(catalog.usable) == 17
        assert not catalog.is_usable("entry_c_exit_a")

    def test_available_key_resolves(self, catalog):
        result = catalog.resolve(0, 3)
        assert not result.is_fallback
        assert result.key == "entry_a_exit_d"
        assert result.path == "tiles/entry_a_exit_d.glb"
        assert result.issue is None

    def test_missing_key_falls_back(self, catalog):
        """entry_a_exit_b was never authored."""
        result = catalog.resolve(0, 1)
        assert result.is_fallback
        assert result.key is None
        assert result.path is None
        assert result.requested == "entry_a_exit_b"
        assert result.issue.code == IssueCode.ASSET_KEY_UNAVAILABLE
        assert result.fallback.shape == RoadShape.TURN60_LEFT

    def test_blocklisted_key_falls_back(self, catalog):
        result = catalog.resolve(2, 0)
        assert result.requested == "entry_c_exit_a"
        assert result.is_fallback
        assert "blocklisted" in result.issue.message

    def test_fallback_uses_given_connections(self, catalog):
        result = catalog.resolve(0, 1, fallback_connections=[1, 4])
        assert result.fallback.shape == RoadShape.STRAIGHT

    def test_resolve_asset_uses_packaged_catalog(self):
        assert resolve_asset(1, 3).key == "entry_b_exit_d"

    def test_custom_catalog_from_toml(self, tmp_path):
        path = tmp_path / "assets.toml"
        path.write_text('[entry_exit]\navailable = ["entry_a_exit_b"]\nblocked = []\n')
        custom = AssetCatalog.from_toml(path)
        assert resolve_asset(0, 1, catalog=custom).key == "entry_a_exit_b"
        assert resolve_asset(0, 3, catalog=custom).is_fallback

    def test_empty_toml_gives_empty_catalog(self, tmp_path):
        path = tmp_path / "empty.toml"
        path.write_text("")
        custom = AssetCatalog.from_toml(path)
        assert custom.usable == frozenset()
