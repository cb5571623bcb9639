import http.client
import json
import logging
import urllib.error
import urllib.request
from pathlib import Path

from pydantic import ValidationError

from models import UsageData

log = logging.getLogger(__name__)


class UsageFetchError(Exception):
    """The usage endpoint could not be reached or returned an unusable reply."""


def read_token(credentials_file: Path) -> str | None:
    """Return the OAuth access token stored by Claude Code, or None."""
    try:
        creds = json.loads(Path(credentials_file).read_text())
    except (OSError, ValueError) as exc:
        log.debug("Credentials unreadable at %s: %s", credentials_file, exc)
        return None

    if not isinstance(creds, dict):
        log.debug("Credentials file is not a JSON object")
        return None
    oauth = creds.get("claudeAiOauth")
    token = oauth.get("accessToken") if isinstance(oauth, dict) else None
    if not token or not isinstance(token, str):
        log.debug("No accessToken in credentials")
        return None
    return token


def fetch_usage(
    token: str,
    api_url: str,
    anthropic_beta: str,
    user_agent: str,
    timeout: float | None = None,
) -> UsageData:
    """Query Claude's live usage API once. Raises UsageFetchError on any failure."""
    req = urllib.request.Request(
        api_url,
        headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "anthropic-beta": anthropic_beta,
            "User-Agent": user_agent,
        },
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            body = resp.read()
    except urllib.error.HTTPError as exc:
        raise UsageFetchError(f"API error: {exc.code}") from exc
    except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
        raise UsageFetchError(f"Usage API unreachable: {exc}") from exc

    try:
        return UsageData.model_validate_json(body)
    except ValidationError as exc:
        raise UsageFetchError(f"Unexpected usage payload: {exc}") from exc
