import logging

from fastapi import APIRouter, HTTPException, Request

from datamagic.dependencies import DataMagicDep
from datamagic.exceptions import ConfigurationNotFound, InvalidData
from datamagic.schemas.search import SearchResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Search"])


@router.get("/{endpoint}", response_model=SearchResult)
def search_endpoint(endpoint: str, request: Request, data_magic: DataMagicDep) -> SearchResult:
    """
    Search the index behind a configured API endpoint.

    Every query parameter is a filter term; distance, zip, page and per_page
    have their special meanings.
    """
    terms = dict(request.query_params)
    try:
        return data_magic.search(terms, {"api": endpoint})
    except ConfigurationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidData as e:
        raise HTTPException(status_code=400, detail=str(e))
