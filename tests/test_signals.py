"""Tests for similarity signals: Jaccard, haversine distance, gender compatibility."""

import itertools

import pytest

from spark_ranker.matching.signals import (
    haversine_distance_km,
    is_gender_compatible,
    keyword_similarity,
    shared_keywords,
    target_gender,
)


class TestKeywordSimilarity:
    """Tests for keyword_similarity."""

    def test_partial_overlap(self):
        """Intersection over union."""
        assert keyword_similarity(["hiking", "coffee"], ["hiking", "coffee", "travel"]) == pytest.approx(2 / 3)
        assert keyword_similarity(["a", "b", "c"], ["b", "c", "d"]) == pytest.approx(0.5)

    def test_identical_sets_score_one(self):
        assert keyword_similarity(["a", "b"], ["b", "a"]) == 1.0

    @pytest.mark.parametrize(
        "left,right",
        [([], ["a"]), (["a"], []), ([], []), (None, ["a"]), ("", "a")],
    )
    def test_empty_side_scores_zero(self, left, right):
        """Either side empty means no similarity."""
        assert keyword_similarity(left, right) == 0.0

    def test_case_insensitive(self):
        assert keyword_similarity(["Hiking"], ["hiking"]) == 1.0

    def test_duplicates_collapse(self):
        """Keywords are compared as sets."""
        assert keyword_similarity(["a", "a", "b"], ["a"]) == pytest.approx(0.5)

    def test_accepts_stored_encodings(self):
        """JSON text and CSV text are normalized before comparison."""
        assert keyword_similarity('["hiking","coffee"]', "coffee, hiking") == 1.0

    def test_symmetric(self):
        sets = [["a"], ["a", "b"], ["b", "c", "d"], [], ["x", "A"]]
        for left, right in itertools.product(sets, repeat=2):
            assert keyword_similarity(left, right) == keyword_similarity(right, left)

    def test_no_overlap_scores_zero(self):
        assert keyword_similarity(["hiking"], ["football"]) == 0.0


class TestSharedKeywords:
    """Tests for shared_keywords."""

    def test_keeps_requester_order_and_casing(self):
        assert shared_keywords(["Coffee", "hiking", "jazz"], ["HIKING", "coffee"], limit=3) == [
            "Coffee",
            "hiking",
        ]

    def test_respects_limit(self):
        assert shared_keywords(["a", "b", "c", "d"], ["a", "b", "c", "d"], limit=3) == ["a", "b", "c"]

    def test_reports_duplicates_once(self):
        assert shared_keywords(["a", "A", "b"], ["a", "b"], limit=3) == ["a", "b"]


class TestHaversineDistance:
    """Tests for haversine_distance_km."""

    def test_same_point_is_zero(self):
        assert haversine_distance_km(40.7, -74.0, 40.7, -74.0) == pytest.approx(0.0)

    def test_one_degree_of_latitude(self):
        """One degree along a meridian is R * pi / 180."""
        assert haversine_distance_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.195, abs=0.01)

    def test_new_york_to_london(self):
        distance = haversine_distance_km(40.7128, -74.0060, 51.5074, -0.1278)
        assert distance == pytest.approx(5570, abs=10)

    def test_symmetric(self):
        forward = haversine_distance_km(48.8566, 2.3522, 52.52, 13.405)
        backward = haversine_distance_km(52.52, 13.405, 48.8566, 2.3522)
        assert forward == pytest.approx(backward)

    def test_antipodal_points(self):
        """Near-antipodal points stay finite (half the circumference)."""
        distance = haversine_distance_km(0.0, 0.0, 0.0, 180.0)
        assert distance == pytest.approx(20015.09, abs=0.1)

    @pytest.mark.parametrize(
        "coords",
        [(None, 0.0, 1.0, 1.0), (0.0, None, 1.0, 1.0), (0.0, 0.0, None, 1.0), (0.0, 0.0, 1.0, None)],
    )
    def test_missing_coordinate_returns_none(self, coords):
        assert haversine_distance_km(*coords) is None

    def test_zero_is_a_valid_coordinate(self):
        """Equator and prime meridian are real locations."""
        assert haversine_distance_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(111.195, abs=0.01)


class TestGenderCompatibility:
    """Tests for is_gender_compatible and target_gender."""

    def test_target_gender_maps_women(self):
        assert target_gender("W") == "F"
        assert target_gender("M") == "M"
        assert target_gender("B") == "B"
        assert target_gender(None) is None

    def test_mutual_preference(self):
        """A woman seeking men and a man seeking women are compatible."""
        assert is_gender_compatible("F", "M", "M", "W")

    def test_one_sided_preference_is_incompatible(self):
        """The candidate must also want the requester's gender."""
        assert not is_gender_compatible("F", "M", "M", "M")

    def test_both_accepts_anyone(self):
        assert is_gender_compatible("M", "B", "O", "B")

    def test_both_still_needs_other_side(self):
        assert is_gender_compatible("M", "B", "F", "M")
        assert not is_gender_compatible("F", "B", "M", "M")

    def test_other_gender_preference(self):
        assert is_gender_compatible("O", "O", "O", "O")
        assert not is_gender_compatible("O", "O", "M", "O")

    def test_missing_gender_only_matches_both(self):
        assert is_gender_compatible(None, "B", None, "B")
        assert not is_gender_compatible(None, "B", "M", "M")

    def test_symmetric(self):
        genders = ["M", "F", "O", None]
        preferences = ["M", "W", "B", "O"]
        for ga, pa, gb, pb in itertools.product(genders, preferences, genders, preferences):
            assert is_gender_compatible(ga, pa, gb, pb) == is_gender_compatible(gb, pb, ga, pa)
