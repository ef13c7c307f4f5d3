# api/lifecycle/models.py
from pydantic import BaseModel, Field


class _TransitionBase(BaseModel):
    acting_user_id: str | None = Field(None, max_length=100)
    # Optional optimistic-concurrency check; send the value you last saw
    # (null included). Omit it to transition from whatever is stored.
    expected_current_id: int | None = None

    def expectation(self) -> dict:
        if "expected_current_id" in self.model_fields_set:
            return {"expected_current": self.expected_current_id}
        return {}


class StatusTransition(_TransitionBase):
    status_id: int | None


class LocationTransition(_TransitionBase):
    location_id: int | None


class AssignmentTransition(_TransitionBase):
    assignment_id: int | None
