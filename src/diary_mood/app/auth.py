import logging
import secrets

import requests
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from ..core.config import FRONTEND_URL
from ..core.spotify_oauth import SpotifyOAuth
from ..core.store import DiaryStore
from .dependencies import SESSION_USER_KEY, Principal, build_catalog, get_oauth, get_store

logger = logging.getLogger(__name__)

SESSION_STATE_KEY = "oauth_state"

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/login")
def login(request: Request, oauth: SpotifyOAuth = Depends(get_oauth)):
    """Starts the Spotify login by redirecting to the authorize page."""
    state = secrets.token_urlsafe(16)
    request.session[SESSION_STATE_KEY] = state
    return RedirectResponse(oauth.authorize_url(state))


@router.get("/callback")
def callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    oauth: SpotifyOAuth = Depends(get_oauth),
    store: DiaryStore = Depends(get_store),
):
    """
    Completes the Spotify login.

    Exchanges the code for an access token, looks up the Spotify profile,
    records the user and keeps the principal in the session.
    """
    expected_state = request.session.pop(SESSION_STATE_KEY, None)
    if error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Login denied: {error}")
    if not code or not state or state != expected_state:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid OAuth state")

    try:
        token = oauth.exchange_code(code)
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Spotify token exchange failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Spotify login failed")

    access_token = token.get("access_token")
    profile = build_catalog(request, access_token).get_current_user() if access_token else None
    if not profile or not profile.get("email"):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Spotify login failed")

    store.upsert_user(profile["email"], profile.get("display_name"), profile.get("id"))
    principal = Principal(
        email=profile["email"],
        name=profile.get("display_name"),
        access_token=access_token,
    )
    request.session[SESSION_USER_KEY] = principal.model_dump()
    logger.info(f"User '{principal.email}' signed in")
    return RedirectResponse(FRONTEND_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"status": "signed out"}
