from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel

from ..core.catalog import SpotifyCatalog
from ..core.classifier import SentimentClassifier
from ..core.spotify_oauth import SpotifyOAuth
from ..core.store import DiaryStore

SESSION_USER_KEY = "user"


class Principal(BaseModel):
    """The signed-in user as remembered by the session cookie."""

    email: str
    name: str | None = None
    access_token: str


def get_store(request: Request) -> DiaryStore:
    return request.app.state.store


def get_classifier(request: Request) -> SentimentClassifier:
    return request.app.state.classifier


def get_oauth(request: Request) -> SpotifyOAuth:
    return request.app.state.oauth


def get_principal(request: Request) -> Principal:
    data = request.session.get(SESSION_USER_KEY)
    if not data:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return Principal(**data)


def get_current_user(
    principal: Principal = Depends(get_principal),
    store: DiaryStore = Depends(get_store),
) -> dict:
    user = store.find_user_by_email(principal.email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def build_catalog(request: Request, access_token: str) -> SpotifyCatalog:
    state = request.app.state
    return state.catalog_factory(access_token, state.http_session)


def get_catalog(
    request: Request, principal: Principal = Depends(get_principal)
) -> SpotifyCatalog:
    return build_catalog(request, principal.access_token)
