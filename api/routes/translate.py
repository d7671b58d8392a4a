"""
Translation endpoints.
"""

from fastapi import APIRouter, Depends

from api.deps import get_catalog, get_lookup
from api.models import EnginesResponse, ErrorResponse, NotFoundResponse, TranslationResponse
from core.translation import CachedLookup, EngineCatalog, MalformedRequest, TranslationNotFound

router = APIRouter(tags=["Translate"])


@router.get(
    "/translate/{word}/to/{language}",
    response_model=TranslationResponse,
    responses={404: {"model": NotFoundResponse}, 422: {"model": ErrorResponse}},
)
async def translate_word(
    word: str,
    language: str,
    lookup: CachedLookup = Depends(get_lookup),
):
    """
    Translate a single word into ``language``.

    Served from the cache when possible; otherwise engines are tried in
    catalog order and the first translation is cached.
    """
    if word.startswith("-"):
        raise MalformedRequest(f"option-like word {word!r}")
    translation = await lookup.lookup(language, word)
    if translation is None:
        raise TranslationNotFound(language, word)
    return TranslationResponse(word=word, language=language, translation=translation)


@router.get("/engines", response_model=EnginesResponse)
async def list_engines(catalog: EngineCatalog = Depends(get_catalog)):
    """Engines in the order they are tried"""
    return EnginesResponse(engines=list(catalog.list()))
