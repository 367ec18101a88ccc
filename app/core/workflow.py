from enum import Enum

class StageState(str, Enum):
    VALIDATING = "VALIDATING"
    PROVISIONING = "PROVISIONING"
    STREAMING = "STREAMING"
    PUBLISHING = "PUBLISHING"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"


class AgentPersona(str, Enum):
    CEO = "ceo"
    PRODUCT_RESEARCHER = "product_researcher"
    PRODUCT_MANAGER = "product_manager"
    ARCHITECT = "architect"
    FRONTEND_DESIGNER = "frontend_designer"
    DEVELOPER = "developer"
    USER_TESTING = "user_testing"
    SECURITY_ENGINEER = "security_engineer"
    TECHNICAL_WRITER = "technical_writer"

    @classmethod
    def resolve(cls, agent_id: str | None) -> "AgentPersona":
        """Map a free-form agent id to a persona; unknown ids get the CEO."""
        try:
            return cls(agent_id)
        except ValueError:
            return cls.CEO


class DeliverableKind(str, Enum):
    INTAKE = "intake"
    RESEARCH = "research"
    SPEC = "spec"
    ARCHITECTURE = "architecture"
    DESIGN = "design"
    CODEBASE = "codebase"
    TEST_REPORT = "testReport"
    SECURITY_REPORT = "securityReport"
    DOCUMENTATION = "documentation"
    DEFAULT = "default"

    @classmethod
    def resolve(cls, deliverable_key: str | None) -> "DeliverableKind":
        """Map a deliverable key to its kind; absent or unknown keys get DEFAULT."""
        try:
            return cls(deliverable_key)
        except ValueError:
            return cls.DEFAULT
