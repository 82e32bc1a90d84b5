"""
Pydantic request/response models for the HTTP service
"""

from pydantic import BaseModel, Field

from whisperscribe_core.text import SummaryLength


class CleanRequest(BaseModel):
    """Text to clean of runaway repetition"""

    text: str = Field(description="Transcription text")
    max_repetitions: int | None = Field(
        default=None, ge=1, description="Allowed repetitions; service default when omitted"
    )
    threshold: float | None = Field(
        default=None, ge=0.0, description="Unique-token ratio threshold for detection"
    )


class CleanResponse(BaseModel):
    cleaned_text: str
    had_hallucination: bool


class DetectRequest(BaseModel):
    text: str
    threshold: float | None = Field(default=None, ge=0.0)


class DetectResponse(BaseModel):
    had_hallucination: bool


class ParseRequest(BaseModel):
    text: str = Field(description="Raw AI response")
    include_features: bool = Field(
        default=True, description="False treats the whole text as the transcription"
    )


class ParseResponse(BaseModel):
    """Parsed sections; null marks a missing section"""

    transcription: str | None = None
    summary: str | None = None
    tags: list[str] | None = None
    diagram: str | None = None


class ProcessRequest(BaseModel):
    """Raw AI response plus the extras that were requested from the model"""

    text: str
    include_summary: bool = False
    propose_tags: bool = False
    generate_diagram: bool = False
    summary_length: SummaryLength = SummaryLength.BULLET
    use_fallback: bool = Field(
        default=False, description="Fill missing extras with the extractive fallback"
    )


class ProcessResponse(BaseModel):
    transcription: str
    summary: str | None = None
    tags: list[str] = Field(default_factory=list)
    diagram: str | None = None
    had_hallucination: bool = False
    markdown: str
