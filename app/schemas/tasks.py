from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

REQUIRED_FIELDS = (
    "task_id",
    "project_id",
    "project_title",
    "stage_index",
    "stage_name",
    "stage_description",
    "agent_id",
)


class StageRequest(BaseModel):
    """Body of POST /tasks/execute.

    Fields are optional at the schema level so that missing values are
    reported by the executor with the same error on every entry point.
    """
    model_config = ConfigDict(populate_by_name=True)

    task_id: Optional[str] = Field(None, alias="taskId", examples=["task_1712345678"])
    project_id: Optional[str] = Field(None, alias="projectId")
    project_title: Optional[str] = Field(None, alias="projectTitle", examples=["Recipe Sharing App"])
    stage_index: Optional[int] = Field(None, alias="stageIndex")
    stage_name: Optional[str] = Field(None, alias="stageName", examples=["2. Research"])
    stage_description: Optional[str] = Field(None, alias="stageDescription")
    agent_id: Optional[str] = Field(None, alias="agentId", examples=["product_researcher"])
    deliverable_key: Optional[str] = Field(None, alias="deliverableKey", examples=["research"])

    def missing_fields(self) -> List[str]:
        """Aliases of required fields that are absent or empty."""
        missing = []
        for name in REQUIRED_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(StageRequest.model_fields[name].alias)
        return missing
