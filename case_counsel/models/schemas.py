from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RequestType = Literal["chat", "analyze"]


class ChatMessage(BaseModel):
    """A single chat message in the conversation.

    Attributes:
        role: The speaker identifier (user, assistant, or system).
        content: The message text.
    """

    role: str = Field(..., min_length=1, description="Message role: 'user', 'assistant', or 'system'")
    content: str = Field(..., description="The message content")


class AssistantRequest(BaseModel):
    """Request payload for the assistant proxy endpoint.

    Attributes:
        type: ``chat`` for a streamed reply, ``analyze`` for a one-shot case analysis.
        messages: Conversation so far, oldest first.
    """

    type: RequestType
    messages: list[ChatMessage] = Field(..., min_length=1)


class ErrorResponse(BaseModel):
    """Error body returned by the proxy."""

    error: str


class LegalSection(BaseModel):
    section: str
    description: str = ""


class CasePrecedent(BaseModel):
    name: str
    relevance: str = ""


class AnalysisData(BaseModel):
    """Structured case analysis produced by the ``analyze`` request.

    Field names on the wire are camelCase, matching the JSON the model is
    instructed to emit.
    """

    model_config = ConfigDict(populate_by_name=True)

    legal_sections: list[LegalSection] = Field(default_factory=list, alias="legalSections")
    punishment_range: str = Field("", alias="punishmentRange")
    presentation_strategy: str = Field("", alias="presentationStrategy")
    case_precedents: list[CasePrecedent] = Field(default_factory=list, alias="casePrecedents")
    court_document: str = Field("", alias="courtDocument")


class CaseAnalysis(BaseModel):
    """Result of analysing a new case.

    Attributes:
        title: Display title derived from category and offence.
        prompt: The user prompt that was sent upstream.
        analysis: Parsed analysis payload.
    """

    title: str
    prompt: str
    analysis: AnalysisData


class Profile(BaseModel):
    """Account flags that gate access to the assistant."""

    name: str = ""
    username: str = ""
    phone: str | None = None
    access_enabled: bool = True
    subscription_active: bool = True
