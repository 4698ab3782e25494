"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatMessage: Individual message in conversation
    - AssistantRequest: Incoming proxy request payload
    - AnalysisData: Structured legal analysis of a case
    - CaseAnalysis: Analysis plus derived case title and prompt
    - Profile: Account flags checked before each request
"""

from case_counsel.models.schemas import (
    AnalysisData,
    AssistantRequest,
    CaseAnalysis,
    CasePrecedent,
    ChatMessage,
    ErrorResponse,
    LegalSection,
    Profile,
    RequestType,
)

__all__ = [
    "AnalysisData",
    "AssistantRequest",
    "CaseAnalysis",
    "CasePrecedent",
    "ChatMessage",
    "ErrorResponse",
    "LegalSection",
    "Profile",
    "RequestType",
]
