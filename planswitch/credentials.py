"""
Credentials and scope resolution.

Reads the token and team scope from, in order of precedence: command-line
flags, the local project config, the global config directory and the
environment.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from planswitch.config import (
    AUTH_CONFIG_NAME,
    CREDENTIALS_PROVIDER,
    ENV_TOKEN,
    GLOBAL_CONFIG_NAME,
    logger,
)
from planswitch.core.errors import ConfigurationError


class Session(BaseModel):
    """Who the command acts for."""

    token: str = Field(..., min_length=1)
    team_id: Optional[str] = Field(None, description="Team scope sent to the API")
    team_slug: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.team_slug or self.username or self.email or "your account"


def _read_json(path: Path, required: bool = False) -> Dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        logger.debug("No config file at %s", path)
        return {}
    try:
        with path.open("r", encoding="utf8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a JSON object in {path}")
    return data


def _stored_token(auth: Dict[str, Any]) -> Optional[str]:
    for item in auth.get("credentials") or []:
        if isinstance(item, dict) and item.get("provider") == CREDENTIALS_PROVIDER:
            return item.get("token")
    return None


def load_session(
    global_dir: Path,
    local_config: Optional[Path] = None,
    token: Optional[str] = None,
    team: Optional[str] = None,
) -> Session:
    """
    Build the session for this invocation.

    Raises:
        ConfigurationError: If a config file is unreadable or no token is found
    """
    auth = _read_json(global_dir / AUTH_CONFIG_NAME)
    config = _read_json(global_dir / GLOBAL_CONFIG_NAME)
    local = _read_json(local_config, required=True) if local_config else {}

    token = token or _stored_token(auth) or ENV_TOKEN
    if not token:
        raise ConfigurationError(
            f"No login token found. Pass --token or add credentials to {global_dir / AUTH_CONFIG_NAME}"
        )

    sh = config.get(CREDENTIALS_PROVIDER) or {}
    if not isinstance(sh, dict):
        raise ConfigurationError(f"Expected an object under '{CREDENTIALS_PROVIDER}' in {global_dir / GLOBAL_CONFIG_NAME}")
    user = sh.get("user") or {}
    current_team = sh.get("currentTeam") or {}
    if not isinstance(user, dict) or not isinstance(current_team, dict):
        raise ConfigurationError(f"Malformed user or team entry in {global_dir / GLOBAL_CONFIG_NAME}")

    # Flag and local scope name a team by slug or id
    scope = team or local.get("scope")
    if scope and scope == user.get("username"):
        # Personal scope
        team_id, team_slug = None, None
    elif scope:
        team_id, team_slug = scope, scope
        if scope in (current_team.get("slug"), current_team.get("id")):
            team_id = current_team.get("id") or scope
            team_slug = current_team.get("slug") or scope
    else:
        team_id = current_team.get("id")
        team_slug = current_team.get("slug")

    return Session(
        token=token,
        team_id=team_id,
        team_slug=team_slug,
        username=user.get("username"),
        email=user.get("email"),
    )
