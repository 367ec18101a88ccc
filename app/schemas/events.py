from typing import Annotated, Literal, Union
from pydantic import BaseModel, Field, TypeAdapter


class ThoughtEvent(BaseModel):
    type: Literal["thought"] = "thought"
    content: str


class ActionEvent(BaseModel):
    type: Literal["action"] = "action"
    content: str


class ProgressUpdateEvent(BaseModel):
    type: Literal["progress"] = "progress"
    percent: int = Field(..., ge=0, le=100)
    step: str


class ResultEvent(BaseModel):
    type: Literal["result"] = "result"
    content: str


class DeliverableEvent(BaseModel):
    type: Literal["deliverable"] = "deliverable"
    key: str
    url: str


class CompleteEvent(BaseModel):
    type: Literal["complete"] = "complete"


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    content: str


ProgressEvent = Annotated[
    Union[
        ThoughtEvent,
        ActionEvent,
        ProgressUpdateEvent,
        ResultEvent,
        DeliverableEvent,
        CompleteEvent,
        ErrorEvent,
    ],
    Field(discriminator="type"),
]

progress_event_adapter = TypeAdapter(ProgressEvent)


def parse_event(data: str) -> ProgressEvent:
    """Decode one JSON event payload into its typed variant."""
    return progress_event_adapter.validate_json(data)
