from dataclasses import dataclass
from typing import Dict, List, Optional
from app.core.workflow import AgentPersona, DeliverableKind
from app.agents import prompts


def _require_all(table: Dict, enum_cls, name: str) -> None:
    missing = [member.value for member in enum_cls if member not in table]
    if missing:
        raise ValueError(f"{name} has no entry for: {', '.join(missing)}")


@dataclass
class PromptRegistry:
    system_prompts: Dict[AgentPersona, str]
    deliverable_templates: Dict[DeliverableKind, str]
    status_messages: Dict[DeliverableKind, List[str]]
    deliverable_titles: Dict[DeliverableKind, str]

    def __post_init__(self):
        _require_all(self.system_prompts, AgentPersona, "system_prompts")
        _require_all(self.deliverable_templates, DeliverableKind, "deliverable_templates")
        _require_all(self.status_messages, DeliverableKind, "status_messages")
        _require_all(self.deliverable_titles, DeliverableKind, "deliverable_titles")

    def system_prompt(self, agent_id: Optional[str], stage_name: str, stage_description: str, project_title: str) -> str:
        persona = AgentPersona.resolve(agent_id)
        return self.system_prompts[persona].format(
            project_title=project_title,
            stage_name=stage_name,
            stage_description=stage_description,
        )

    def deliverable_prompt(self, deliverable_key: Optional[str], project_title: str) -> str:
        kind = DeliverableKind.resolve(deliverable_key)
        return self.deliverable_templates[kind].format(project_title=project_title)

    def progress_messages(self, deliverable_key: Optional[str]) -> List[str]:
        return list(self.status_messages[DeliverableKind.resolve(deliverable_key)])

    def deliverable_title(self, deliverable_key: Optional[str]) -> str:
        return self.deliverable_titles[DeliverableKind.resolve(deliverable_key)]

    @staticmethod
    def default() -> "PromptRegistry":
        return PromptRegistry(
            system_prompts=dict(prompts.SYSTEM_PROMPTS),
            deliverable_templates=dict(prompts.DELIVERABLE_TEMPLATES),
            status_messages={kind: list(messages) for kind, messages in prompts.STATUS_MESSAGES.items()},
            deliverable_titles=dict(prompts.DELIVERABLE_TITLES),
        )
