"""Models for importing extracted vocabulary."""

from pydantic import BaseModel, Field

from lingoflow.models.flashcard import CandidateWord, Flashcard


class ArticleData(BaseModel):
    """Output of the extraction pipeline for one article."""

    title: str = Field("", max_length=500)
    author: str = Field("", max_length=200)
    summary: str = Field("", max_length=5000)
    url: str = Field("", max_length=2000)
    words: list[CandidateWord] = Field(default_factory=list)

    @property
    def source_label(self) -> str:
        return self.title or self.url


class ImportResponse(BaseModel):
    """Result of filtering candidates against the user's cards."""

    accepted: list[Flashcard]
    rejected: list[CandidateWord]
    acceptedCount: int
    rejectedCount: int
