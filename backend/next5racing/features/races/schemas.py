"""
Pydantic schemas for the racing feed payload.

Shape of `GET ?method=nextraces&count=10`:

    {
      "status": 200,
      "data": {
        "next_to_go_ids": ["id1", ...],
        "race_summaries": {"id1": {"race_id": "id1", ..., "advertised_start": {"seconds": 1732200000}}}
      },
      "message": "Next 10 races from each category"
    }
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import RaceBatch, RaceRecord


class FeedSchema(BaseModel):
    """Base for feed payload pieces: unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class AdvertisedStartSchema(FeedSchema):
    seconds: Optional[int] = None


class RaceSummarySchema(FeedSchema):
    race_id: Optional[str] = None
    race_name: Optional[str] = None
    race_number: Optional[int] = None
    meeting_id: Optional[str] = None
    meeting_name: Optional[str] = None
    category_id: Optional[str] = None
    advertised_start: Optional[AdvertisedStartSchema] = None
    venue_id: Optional[str] = None
    venue_name: Optional[str] = None
    venue_state: Optional[str] = None
    venue_country: Optional[str] = None

    def to_record(self, fallback_id: str) -> RaceRecord:
        """
        Convert to a RaceRecord, using the summaries key when race_id is missing.

        Race numbers are 1-based; anything below 1 is treated as unknown.
        """
        race_number = self.race_number
        if race_number is not None and race_number < 1:
            race_number = None

        return RaceRecord(
            race_id=self.race_id or fallback_id,
            meeting_name=self.meeting_name,
            race_number=race_number,
            category_id=self.category_id,
            advertised_start=(
                self.advertised_start.seconds if self.advertised_start else None
            ),
            race_name=self.race_name,
            meeting_id=self.meeting_id,
            venue_name=self.venue_name,
            venue_state=self.venue_state,
            venue_country=self.venue_country,
        )


class RaceDataSchema(FeedSchema):
    next_to_go_ids: list[str] = Field(default_factory=list)
    race_summaries: dict[str, RaceSummarySchema] = Field(default_factory=dict)

    def to_batch(self) -> RaceBatch:
        races = {}
        for key, summary in self.race_summaries.items():
            record = summary.to_record(key)
            races[record.race_id] = record
        return RaceBatch(races=races, next_to_go_ids=tuple(self.next_to_go_ids))


class RaceFeedResponse(FeedSchema):
    status: Optional[int] = None
    data: Optional[RaceDataSchema] = None
    message: Optional[str] = None
