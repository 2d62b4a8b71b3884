# /eduguru/services/oauth_service.py

"""
Authorization-code login with Google, GitHub and Microsoft.

The redirect step only builds a URL. The callback step trades the code for
an access token, reads the provider's profile, then hands the e-mail to
`user_service.find_or_create_oauth_user`. HTTP calls use `requests` in a
worker thread so the event loop is not blocked.
"""

import asyncio
import json
import logging
from typing import Dict, Optional
from urllib.parse import quote, urlencode

import requests

from ..core.config import settings
from . import user_service
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 15

PROVIDERS = {
    "google": {
        "label": "Google",
        "authorize_url": "https://accounts.google.com/o/oauth2/v2/auth",
        "token_url": "https://oauth2.googleapis.com/token",
        "scope": "https://www.googleapis.com/auth/userinfo.profile https://www.googleapis.com/auth/userinfo.email",
        "extra": {"response_type": "code", "access_type": "offline", "prompt": "consent"},
    },
    "github": {
        "label": "GitHub",
        "authorize_url": "https://github.com/login/oauth/authorize",
        "token_url": "https://github.com/login/oauth/access_token",
        "scope": "user:email",
        "extra": {},
    },
    "microsoft": {
        "label": "Microsoft",
        "authorize_url": "https://login.microsoftonline.com/common/oauth2/v2.0/authorize",
        "token_url": "https://login.microsoftonline.com/common/oauth2/v2.0/token",
        "scope": "openid profile email User.Read",
        "extra": {"response_type": "code", "response_mode": "query"},
    },
}


def _credentials(provider: str):
    return (
        getattr(settings, f"{provider}_client_id"),
        getattr(settings, f"{provider}_client_secret"),
    )


def redirect_uri(provider: str) -> str:
    return f"{settings.api_url}/api/auth/{provider}/callback"


def build_authorize_url(provider: str) -> str:
    config = PROVIDERS.get(provider)
    if config is None:
        raise KeyError(provider)
    client_id, _ = _credentials(provider)
    if not client_id:
        raise ValueError(f"{config['label']} Client ID not configured")

    params = {"client_id": client_id, "redirect_uri": redirect_uri(provider), "scope": config["scope"], **config["extra"]}
    return f"{config['authorize_url']}?{urlencode(params)}"


# --- Provider-specific profile lookups (blocking) ---

def _exchange_code(provider: str, code: str) -> str:
    client_id, client_secret = _credentials(provider)
    payload = {
        "client_id": client_id,
        "client_secret": client_secret,
        "code": code,
        "redirect_uri": redirect_uri(provider),
        "grant_type": "authorization_code",
    }
    response = requests.post(
        PROVIDERS[provider]["token_url"],
        data=payload,
        headers={"Accept": "application/json"},
        timeout=REQUEST_TIMEOUT,
    )
    response.raise_for_status()
    access_token = response.json().get("access_token")
    if not access_token:
        raise ValueError(f"{PROVIDERS[provider]['label']} did not return an access token")
    return access_token


def _get_json(url: str, access_token: str):
    response = requests.get(url, headers={"Authorization": f"Bearer {access_token}"}, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response.json()


def _google_profile(access_token: str) -> Dict:
    info = _get_json("https://www.googleapis.com/oauth2/v3/userinfo?alt=json", access_token)
    return {"email": info.get("email"), "name": info.get("name"), "avatar": info.get("picture")}


def _github_profile(access_token: str) -> Dict:
    info = _get_json("https://api.github.com/user", access_token)
    emails = _get_json("https://api.github.com/user/emails", access_token)
    primary = next((e.get("email") for e in emails if e.get("primary")), None)
    email = primary or info.get("email") or f"{info.get('login')}@github.com"
    return {"email": email, "name": info.get("name") or info.get("login"), "avatar": info.get("avatar_url")}


def _microsoft_profile(access_token: str) -> Dict:
    info = _get_json("https://graph.microsoft.com/v1.0/me", access_token)
    name = info.get("displayName")
    return {
        "email": info.get("mail") or info.get("userPrincipalName"),
        "name": name,
        "avatar": user_service.avatar_url(name or "", background="00A4EF"),
    }


_PROFILE_READERS = {"google": _google_profile, "github": _github_profile, "microsoft": _microsoft_profile}


def fetch_profile(provider: str, code: str) -> Dict:
    access_token = _exchange_code(provider, code)
    return _PROFILE_READERS[provider](access_token)


def client_redirect_url(token: str, user: Dict) -> str:
    return f"{settings.client_url}/?token={token}&user={quote(json.dumps(user))}"


def _sign_in(provider: str, profile: Dict, db: DatabaseService) -> str:
    user = user_service.find_or_create_oauth_user(db, profile["email"], profile.get("name"), profile.get("avatar"))
    logger.info("OAuth login via %s for %s", provider, user.username)
    return client_redirect_url(user_service.issue_token(user), user_service.serialize_user(user))


async def complete_login(provider: str, code: Optional[str], db: DatabaseService) -> str:
    """Runs the callback step and returns the frontend URL to redirect to."""
    if provider not in PROVIDERS:
        raise KeyError(provider)
    if not code:
        raise ValueError("Missing authorization code")

    profile = await asyncio.to_thread(fetch_profile, provider, code)
    if not profile.get("email"):
        raise ValueError(f"{PROVIDERS[provider]['label']} account has no e-mail address")

    return await asyncio.to_thread(_sign_in, provider, profile, db)
