"""API-key protected endpoint for server-to-server callers."""

import hmac
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, status

from app.core.config import Settings, get_settings
from app.schemas.external import ExternalRequest, ExternalResponse

router = APIRouter()


def require_api_key(
    settings: Annotated[Settings, Depends(get_settings)],
    x_api_key: Annotated[str | None, Header()] = None,
) -> None:
    """Dependency: X-API-Key must equal API_KEY. Always 401 when API_KEY is unset."""
    expected = settings.API_KEY.get_secret_value() if settings.API_KEY else ""
    if not expected or not x_api_key or not hmac.compare_digest(
        x_api_key.encode("utf-8"), expected.encode("utf-8")
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Invalid API Key",
        )


@router.post("", response_model=ExternalResponse, dependencies=[Depends(require_api_key)])
def post_external(body: ExternalRequest) -> ExternalResponse:
    """Echo the submitted data back to an authenticated external caller."""
    return ExternalResponse(received=body.data)
