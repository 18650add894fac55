"""Text normalization API endpoints."""

from fastapi import APIRouter

from logrecall.schemas.text import (
    NormalizeRequest,
    NormalizeResponse,
    SimilarityRequest,
    SimilarityResponse,
)
from logrecall.services.text_similarity import (
    extract_candidate_words,
    jaccard_similarity,
    preprocess_text,
)

router = APIRouter(prefix="/api/v1/text", tags=["text"])


@router.post("/normalize", response_model=NormalizeResponse)
def normalize_text(request: NormalizeRequest):
    """Get the signature and candidate food words of a text."""
    return NormalizeResponse(
        signature=preprocess_text(request.text),
        candidate_words=extract_candidate_words(request.text),
    )


@router.post("/similarity", response_model=SimilarityResponse)
def compare_texts(request: SimilarityRequest):
    """Compare two texts by the Jaccard similarity of their signatures."""
    signature_a = preprocess_text(request.a)
    signature_b = preprocess_text(request.b)
    return SimilarityResponse(
        signature_a=signature_a,
        signature_b=signature_b,
        jaccard=jaccard_similarity(signature_a, signature_b),
    )
