from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class PolicyDocument(BaseModel):
    """Policy text as served by the policy endpoint.

    The endpoint may grow extra keys over time; only the ones below are kept.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    content: str
    name: Annotated[str, Field(min_length=1)] | None = None
    updated_at: datetime | None = None
