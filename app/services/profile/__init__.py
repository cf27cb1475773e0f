"""
Personalization profile system.

Reduces a user's interaction history to an interest signature and scores
candidate properties against it. Everything here is pure and request-scoped.
"""

from app.services.profile.builder import ProfileBuilder
from app.services.profile.evidence import EvidenceCalculator
from app.services.profile.scorer import ProfileScorer

__all__ = [
    "ProfileBuilder",
    "ProfileScorer",
    "EvidenceCalculator",
]
