"""Text normalization schemas."""

from pydantic import BaseModel, Field


class NormalizeRequest(BaseModel):
    """Text to normalize."""

    text: str = Field(..., max_length=2000)


class NormalizeResponse(BaseModel):
    """Signature and candidate words of a text."""

    signature: str
    candidate_words: list[str]


class SimilarityRequest(BaseModel):
    """Two texts to compare."""

    a: str = Field(..., max_length=2000)
    b: str = Field(..., max_length=2000)


class SimilarityResponse(BaseModel):
    """Jaccard similarity of the normalized texts."""

    signature_a: str
    signature_b: str
    jaccard: float
