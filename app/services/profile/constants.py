from typing import Final

# Engagement weights (how much each interaction type says about a property)
ENGAGEMENT_WEIGHT_VIEW: Final[int] = 1
ENGAGEMENT_WEIGHT_SAVE: Final[int] = 3
ENGAGEMENT_WEIGHT_FEEDBACK: Final[int] = 2
ENGAGEMENT_WEIGHT_OFFER: Final[int] = 5

# Explicit feedback adjustments (applied to categories and preferences)
FEEDBACK_WEIGHT_UP: Final[int] = 2
FEEDBACK_WEIGHT_DOWN: Final[int] = -1

# Category thresholds
PRICE_DROP_MIN_PERCENT: Final[float] = 5
HIGH_ROI_MIN_PERCENT: Final[float] = 12
NEW_LISTING_MAX_DAYS: Final[int] = 7
LARGE_HOME_MIN_BEDROOMS: Final[int] = 3
SMALL_HOME_MAX_BEDROOMS: Final[int] = 2
HIGH_EQUITY_MIN: Final[float] = 100_000

PROPERTY_TYPE_SINGLE_FAMILY: Final[str] = "Single Family"
PROPERTY_TYPE_MULTI_FAMILY: Final[str] = "Multi-Family"

# Interest signature size
TOP_INTERESTS_LIMIT: Final[int] = 3

# Scoring
BASE_SCORE_WEIGHT: Final[float] = 0.5
MATCH_SCORE_MIN: Final[int] = 0
MATCH_SCORE_MAX: Final[int] = 100
DEFAULT_MATCH_REASON: Final[str] = "Matches your search criteria"

# Preference derivation
PREFERRED_ZIPCODES_LIMIT: Final[int] = 5
EXPLANATION_ZIPCODES_LIMIT: Final[int] = 3
DEFAULT_PROPERTY_TYPE: Final[str] = "single_family"
DEFAULT_MIN_BEDROOMS: Final[int] = 2
DEFAULT_MIN_BATHROOMS: Final[int] = 1
DEFAULT_MAX_PRICE: Final[float] = 500_000
DEFAULT_TARGET_PRICE: Final[float] = 300_000
MAX_PRICE_MEDIAN_FACTOR: Final[float] = 1.5
MAX_PRICE_CEILING_FACTOR: Final[float] = 1.2
