from app.models.activity import ActivityRecord, FeedbackRecord
from app.services.profile.constants import (
    ENGAGEMENT_WEIGHT_FEEDBACK,
    ENGAGEMENT_WEIGHT_OFFER,
    ENGAGEMENT_WEIGHT_SAVE,
    ENGAGEMENT_WEIGHT_VIEW,
    FEEDBACK_WEIGHT_DOWN,
    FEEDBACK_WEIGHT_UP,
)


class EvidenceCalculator:
    """
    Weights for user interactions.

    Pure functions: no side effects, easy to test.
    """

    @staticmethod
    def engagement_weight(record: ActivityRecord) -> int:
        """Engagement weight of one interaction (view < feedback < save < offer)."""
        weights = {
            "view": ENGAGEMENT_WEIGHT_VIEW,
            "save": ENGAGEMENT_WEIGHT_SAVE,
            "feedback": ENGAGEMENT_WEIGHT_FEEDBACK,
            "offer": ENGAGEMENT_WEIGHT_OFFER,
        }
        return weights.get(record.activityType, 0)

    @staticmethod
    def feedback_weight(record: FeedbackRecord) -> int:
        """Signed adjustment for explicit feedback: thumbs up adds, thumbs down subtracts."""
        return FEEDBACK_WEIGHT_UP if record.feedbackType == "up" else FEEDBACK_WEIGHT_DOWN
