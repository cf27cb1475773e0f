import math
from datetime import datetime, timezone
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError

from app.core.exceptions import DataAccessError
from app.core.security import redact_token
from app.models.activity import ActivityRecord, FeedbackRecord, FeedbackType
from app.models.digest import RecipientProfile
from app.models.property import CandidateProperty, CandidateQuery
from app.services.store import PropertyStore
from app.services.supabase.client import SupabaseClient, in_list

CANDIDATE_COLUMNS = (
    "id,address,zipCode,price,priceDropPercent,bedrooms,bathrooms,sqft,yearBuilt,"
    "propertyType,potentialROI,dealScore,daysOnMarket,imageUrl,attom_data"
)


def _parse_rows(model: type[BaseModel], rows: list[dict[str, Any]], resource: str) -> list[Any]:
    """Validate rows one by one, skipping (and logging) malformed ones."""
    parsed = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            logger.debug(f"Skipping malformed {resource} row: {e.errors()[:1]}")
    return parsed


class SupabasePropertyStore(PropertyStore):
    """PropertyStore backed by Supabase tables through PostgREST."""

    def __init__(self, client: SupabaseClient | None = None):
        self.client = client or SupabaseClient()

    async def close(self) -> None:
        await self.client.close()

    async def get_activity(self, user_id: str, limit: int) -> list[ActivityRecord]:
        rows = await self.client.select(
            "user_activity",
            [
                ("select", "activity_type,property_id,details,created_at"),
                ("user_id", f"eq.{user_id}"),
                ("order", "created_at.desc"),
                ("limit", str(limit)),
            ],
        )
        mapped = [
            {
                "propertyId": row.get("property_id"),
                "activityType": row.get("activity_type") or "",
                "details": row.get("details"),
                "timestamp": row.get("created_at"),
            }
            for row in rows
            if row.get("property_id")
        ]
        return _parse_rows(ActivityRecord, mapped, "user_activity")

    async def get_feedback(self, user_id: str, limit: int) -> list[FeedbackRecord]:
        rows = await self.client.select(
            "property_feedback",
            [
                ("select", "property_id,feedback_type,created_at,property:properties(*)"),
                ("user_id", f"eq.{user_id}"),
                ("order", "created_at.desc"),
                ("limit", str(limit)),
            ],
        )
        mapped = [
            {
                "propertyId": row.get("property_id"),
                "feedbackType": row.get("feedback_type"),
                "details": row.get("property"),
                "createdAt": row.get("created_at"),
            }
            for row in rows
            if row.get("property_id")
        ]
        return _parse_rows(FeedbackRecord, mapped, "property_feedback")

    async def get_saved_property_ids(self, user_id: str) -> set[str]:
        rows = await self.client.select(
            "saved_properties",
            [("select", "property_id"), ("user_id", f"eq.{user_id}")],
        )
        return {str(row["property_id"]) for row in rows if row.get("property_id") is not None}

    async def get_candidates(self, query: CandidateQuery) -> list[CandidateProperty]:
        params: list[tuple[str, str]] = [("select", CANDIDATE_COLUMNS)]
        if query.zipcodes:
            params.append(("zipCode", f"in.{in_list(query.zipcodes)}"))
        if query.min_bedrooms is not None:
            params.append(("bedrooms", f"gte.{query.min_bedrooms}"))
        if query.min_bathrooms is not None:
            params.append(("bathrooms", f"gte.{query.min_bathrooms}"))
        if query.max_price is not None:
            params.append(("price", f"lte.{math.ceil(query.max_price)}"))
        if query.property_types:
            params.append(("propertyType", f"in.{in_list(query.property_types)}"))
        if query.exclude_ids:
            params.append(("id", f"not.in.{in_list(query.exclude_ids)}"))
        params.append(("order", "dealScore.desc.nullslast"))
        params.append(("limit", str(query.limit)))

        rows = await self.client.select("properties", params)
        return _parse_rows(CandidateProperty, rows, "properties")

    async def get_recipient(self, user_id: str) -> RecipientProfile | None:
        rows = await self.client.select(
            "profiles",
            [
                ("select", "id,email,full_name,email_preferences,search_preferences"),
                ("id", f"eq.{user_id}"),
                ("limit", "1"),
            ],
        )
        if not rows:
            return None
        row = dict(rows[0])
        row["id"] = str(row.get("id") or user_id)
        row["email_preferences"] = row.get("email_preferences") or {}
        try:
            return RecipientProfile.model_validate(row)
        except ValidationError as e:
            raise DataAccessError("profiles", f"Malformed profile for {redact_token(user_id)}: {e}") from e

    async def list_digest_recipients(self) -> list[str]:
        rows = await self.client.select(
            "profiles",
            [
                ("select", "id"),
                ("email_verified", "is.true"),
                ("email_preferences->weeklyPicks", "not.is.false"),
            ],
        )
        return [str(row["id"]) for row in rows if row.get("id") is not None]

    async def log_email(self, user_id: str, email_type: str, properties_count: int, status: str) -> None:
        await self.client.insert(
            "email_logs",
            {
                "user_id": user_id,
                "email_type": email_type,
                "properties_count": properties_count,
                "status": status,
            },
        )

    async def save_feedback(
        self, user_id: str, property_id: str, feedback_type: FeedbackType, context: str | None = None
    ) -> str:
        data = await self.client.insert(
            "property_feedback",
            {
                "user_id": user_id,
                "property_id": property_id,
                "feedback_type": feedback_type,
                "context": context,
                "created_at": datetime.now(timezone.utc).isoformat(),
            },
            returning="id",
        )
        if not isinstance(data, list) or not data or data[0].get("id") is None:
            raise DataAccessError("property_feedback", "Insert returned no id")
        return str(data[0]["id"])

    async def get_top_rated_properties(self, limit: int) -> list[dict[str, Any]]:
        data = await self.client.rpc("get_top_rated_properties", {"limit_count": limit})
        return data if isinstance(data, list) else []


supabase_store = SupabasePropertyStore()
