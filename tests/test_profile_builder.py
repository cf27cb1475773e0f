"""Tests for ProfileBuilder: interest signature and preference derivation."""

from conftest import make_activity, make_feedback

from app.models.activity import ActivityHistory
from app.services.profile.builder import ProfileBuilder
from app.services.profile.categories import CATEGORY_NAMES


def _builder() -> ProfileBuilder:
    return ProfileBuilder()


class TestInterestProfile:
    def test_price_drop_views_build_single_interest(self) -> None:
        activity = [make_activity(f"p{i}", "view", priceDropPercent=10, potentialROI=5) for i in range(3)]

        profile = _builder().build_interest_profile(activity)

        assert profile.counters["priceDrops"] == 3
        assert profile.counters["highROI"] == 0
        assert profile.top_categories == ["priceDrops"]

    def test_counters_cover_every_category(self) -> None:
        profile = _builder().build_interest_profile([])

        assert set(profile.counters) == set(CATEGORY_NAMES)
        assert all(value == 0 for value in profile.counters.values())
        assert profile.top_categories == []

    def test_top_categories_capped_at_three_and_positive(self) -> None:
        activity = [
            make_activity(
                "p1",
                priceDropPercent=20,
                potentialROI=20,
                daysOnMarket=2,
                propertyType="Single Family",
                bedrooms=4,
                equity=250000,
                ownerOccupied=True,
                distressed=True,
            ),
            make_activity("p2", equity=300000, distressed=True),
        ]

        profile = _builder().build_interest_profile(activity)

        assert len(profile.top_categories) == 3
        assert all(profile.counters[name] > 0 for name in profile.top_categories)
        assert profile.top_categories == ["highEquity", "distressed", "priceDrops"]

    def test_ties_keep_declaration_order(self) -> None:
        activity = [
            make_activity("p1", ownerOccupied=True, bedrooms=3, propertyType="Single Family", priceDropPercent=9)
        ]

        profile = _builder().build_interest_profile(activity)

        assert profile.top_categories == ["priceDrops", "singleFamily", "beds3Plus"]

    def test_absent_fields_are_no_signal(self) -> None:
        profile = _builder().build_interest_profile([make_activity("p1", "save")])

        assert profile.top_categories == []
        assert profile.counters["nonOwnerOccupied"] == 0
        assert profile.counters["beds2Minus"] == 0

    def test_thresholds_are_strict(self) -> None:
        activity = [make_activity("p1", priceDropPercent=5, potentialROI=12, daysOnMarket=7, equity=100000)]

        profile = _builder().build_interest_profile(activity)

        assert profile.top_categories == []

    def test_owner_occupied_false_is_investor_owned(self) -> None:
        activity = [make_activity("p1", attomData={"equity": 150000, "owner_occupied": False, "distressed": True})]

        profile = _builder().build_interest_profile(activity)

        assert profile.counters["highEquity"] == 1
        assert profile.counters["nonOwnerOccupied"] == 1
        assert profile.counters["ownerOccupied"] == 0
        assert profile.counters["distressed"] == 1

    def test_bedroom_buckets(self) -> None:
        activity = [make_activity("p1", bedrooms=3), make_activity("p2", bedrooms=2), make_activity("p3", bedrooms=1)]

        profile = _builder().build_interest_profile(activity)

        assert profile.counters["beds3Plus"] == 1
        assert profile.counters["beds2Minus"] == 2

    def test_positive_feedback_adds_weight(self) -> None:
        activity = [make_activity("p1", potentialROI=15)]
        feedback = [make_feedback("p2", "up", potentialROI=18)]

        profile = _builder().build_interest_profile(activity, feedback)

        assert profile.counters["highROI"] == 3

    def test_negative_feedback_suppresses_dominant_category(self) -> None:
        activity = [
            make_activity("p1", propertyType="Single Family"),
            make_activity("p2", propertyType="Single Family"),
            make_activity("p3", propertyType="Multi-Family"),
        ]
        before = _builder().build_interest_profile(activity)
        assert before.top_categories == ["singleFamily", "multiFamily"]

        feedback = [make_feedback(f"d{i}", "down", propertyType="Single Family") for i in range(3)]
        after = _builder().build_interest_profile(activity, feedback)

        assert after.counters["singleFamily"] == -1
        assert after.top_categories == ["multiFamily"]

    def test_feedback_without_property_details_is_ignored(self) -> None:
        profile = _builder().build_interest_profile([], [make_feedback("p1", "down")])

        assert all(value == 0 for value in profile.counters.values())

    def test_engagement_weights_per_property(self) -> None:
        activity = [
            make_activity("p1", "view"),
            make_activity("p1", "save"),
            make_activity("p2", "offer"),
            make_activity("p3", "feedback"),
        ]

        profile = _builder().build_interest_profile(activity)

        assert profile.engagement == {"p1": 4, "p2": 5, "p3": 2}

    def test_deterministic(self) -> None:
        activity = [make_activity(f"p{i}", bedrooms=i, priceDropPercent=i * 3) for i in range(6)]

        first = _builder().build_interest_profile(activity)
        second = _builder().build_interest_profile(activity)

        assert first == second


class TestTopInterests:
    def test_drops_zero_and_negative_counters(self) -> None:
        counters = {name: 0 for name in CATEGORY_NAMES}
        counters.update({"highROI": 2, "distressed": -1, "newListings": 5})

        assert ProfileBuilder.top_interests(counters) == ["newListings", "highROI"]

    def test_respects_limit(self) -> None:
        counters = {name: index + 1 for index, name in enumerate(CATEGORY_NAMES)}

        assert ProfileBuilder.top_interests(counters, limit=2) == ["distressed", "nonOwnerOccupied"]


class TestPreferences:
    def _preferences(self, activity, feedback=(), saved=frozenset()):
        history = ActivityHistory(activity=activity, feedback=list(feedback), saved_ids=set(saved))
        builder = _builder()
        profile = builder.build_interest_profile(history.activity, history.feedback)
        return builder.build_preferences(history, profile)

    def test_defaults_without_history(self) -> None:
        preferences = self._preferences([])

        assert preferences.preferredZipcodes == []
        assert preferences.preferredPropertyType == "single_family"
        assert preferences.minBedrooms == 2
        assert preferences.minBathrooms == 1
        assert preferences.maxPrice == 500000
        assert preferences.targetPrice == 300000
        assert preferences.alreadyViewed == []

    def test_zipcodes_ranked_by_engagement(self) -> None:
        activity = [
            make_activity("p1", "view", zipCode="11111"),
            make_activity("p2", "view", zipCode="11111"),
            make_activity("p3", "save", zipCode="22222"),
        ]

        preferences = self._preferences(activity)

        assert preferences.preferredZipcodes == ["22222", "11111"]

    def test_downvoted_zipcode_is_dropped(self) -> None:
        activity = [make_activity("p1", "view", zipCode="33333"), make_activity("p2", "view", zipCode="44444")]
        feedback = [make_feedback("p1", "down", zipCode="33333")]

        preferences = self._preferences(activity, feedback)

        assert preferences.preferredZipcodes == ["44444"]

    def test_zipcodes_capped_at_five(self) -> None:
        activity = [make_activity(f"p{i}", zipCode=f"9000{i}") for i in range(8)]

        assert len(self._preferences(activity).preferredZipcodes) == 5

    def test_most_engaged_property_type(self) -> None:
        activity = [
            make_activity("p1", "view", propertyType="Single Family"),
            make_activity("p2", "view", propertyType="Single Family"),
            make_activity("p3", "offer", propertyType="Multi-Family"),
        ]

        assert self._preferences(activity).preferredPropertyType == "Multi-Family"

    def test_price_preferences_from_upper_median(self) -> None:
        activity = [make_activity(f"p{i}", price=price) for i, price in enumerate([400000, 200000, 1000000, 300000])]

        preferences = self._preferences(activity)

        assert preferences.targetPrice == 400000
        assert preferences.maxPrice == 600000

    def test_max_price_capped_by_highest_seen(self) -> None:
        activity = [make_activity("p1", price=100000), make_activity("p2", price=110000)]

        preferences = self._preferences(activity)

        assert preferences.targetPrice == 110000
        assert preferences.maxPrice == 110000 * 1.2

    def test_already_viewed_includes_saved(self) -> None:
        preferences = self._preferences([make_activity("p2"), make_activity("p1")], saved={"s1"})

        assert preferences.alreadyViewed == ["p1", "p2", "s1"]

    def test_top_interests_reported(self) -> None:
        activity = [make_activity("p1", priceDropPercent=12)]

        assert self._preferences(activity).topInterests == ["priceDrops"]
