from app.models.profile import UserPreferences
from app.services.profile.constants import EXPLANATION_ZIPCODES_LIMIT


def format_currency(value: float) -> str:
    """Format a dollar amount with no cents, e.g. ``$300,000``."""
    return f"${value:,.0f}"


def build_reasoning_text(preferences: UserPreferences) -> str:
    """Human-readable paragraph explaining what the recommendations are based on."""
    sentences = []

    if preferences.preferredZipcodes:
        zipcodes = ", ".join(preferences.preferredZipcodes[:EXPLANATION_ZIPCODES_LIMIT])
        sentences.append(f"Based on your activity, we've focused on {zipcodes} and similar areas.")

    property_type = preferences.preferredPropertyType.replace("_", " ", 1)
    sentences.append(
        f"We're showing you {property_type} properties with at least {preferences.minBedrooms} bedrooms "
        f"and {preferences.minBathrooms} bathrooms."
    )
    sentences.append(f"Your ideal price range appears to be around {format_currency(preferences.targetPrice)}.")

    return " ".join(sentences)
