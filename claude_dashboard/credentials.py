"""
OAuth access-token lookup.

The CLI keeps its credentials in the macOS keychain, in the freedesktop
secret service on some Linux desktops, and otherwise in
~/.claude/.credentials.json.
"""

import json
import logging
import shutil
import subprocess
import sys

from .constants import CREDENTIALS_PATH, KEYCHAIN_SERVICE, KEYCHAIN_TIMEOUT

logger = logging.getLogger(__name__)


def _token_from_json(raw: str) -> str | None:
    try:
        creds = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(creds, dict):
        return None
    oauth = creds.get("claudeAiOauth") or {}
    token = oauth.get("accessToken") if isinstance(oauth, dict) else None
    return token if isinstance(token, str) and token else None


def _run_secret_command(cmd: list[str]) -> str | None:
    """Run a secret-store CLI and return its trimmed stdout, or None."""
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=KEYCHAIN_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("Secret store lookup %s failed: %s", cmd[0], e)
        return None
    if result.returncode != 0 or not result.stdout.strip():
        return None
    return result.stdout.strip()


def get_credentials_from_keychain() -> str | None:
    """macOS: read the generic password stored by the CLI."""
    raw = _run_secret_command(["security", "find-generic-password", "-s", KEYCHAIN_SERVICE, "-w"])
    return _token_from_json(raw) if raw else None


def get_credentials_from_secret_tool() -> str | None:
    """Linux: query libsecret when secret-tool is installed."""
    if not shutil.which("secret-tool"):
        return None
    raw = _run_secret_command(["secret-tool", "lookup", "service", KEYCHAIN_SERVICE])
    return _token_from_json(raw) if raw else None


def get_credentials_from_file(path: str | None = None) -> str | None:
    path = path or CREDENTIALS_PATH
    try:
        with open(path, encoding="utf-8") as f:
            return _token_from_json(f.read())
    except OSError as e:
        logger.debug("No credentials file at %s: %s", path, e)
        return None


def get_credentials() -> str | None:
    """Resolve the OAuth access token, or None when not logged in."""
    token = None
    if sys.platform == "darwin":
        token = get_credentials_from_keychain()
    elif sys.platform.startswith("linux"):
        token = get_credentials_from_secret_tool()
    return token or get_credentials_from_file()
