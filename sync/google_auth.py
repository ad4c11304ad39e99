import base64
import binascii
import json
import os
from pathlib import Path

from google.oauth2 import service_account


# -----------------------------
# Configuration
# -----------------------------

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
]

CREDENTIALS_BASE64_ENV = "GOOGLE_CREDENTIALS_BASE64"
CREDENTIALS_FILE_ENV = "GOOGLE_CREDENTIALS_FILE"


# -----------------------------
# Helpers
# -----------------------------

def decode_credentials(encoded: str) -> dict:
    """
    Decode a base64 encoded service-account JSON document.
    """
    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
        return json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RuntimeError(f"{CREDENTIALS_BASE64_ENV} is not valid base64 JSON: {exc}") from exc


def load_credentials_file(path) -> dict:
    path = Path(path).expanduser()
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"Cannot read credentials file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Credentials file {path} is not valid JSON: {exc.msg}") from exc


def load_credentials_info(environ=None) -> dict:
    environ = os.environ if environ is None else environ

    encoded = environ.get(CREDENTIALS_BASE64_ENV)
    if encoded:
        return decode_credentials(encoded)

    path = environ.get(CREDENTIALS_FILE_ENV)
    if path:
        return load_credentials_file(path)

    raise RuntimeError(f"{CREDENTIALS_BASE64_ENV} environment variable is not set.")


# -----------------------------
# Service account credentials
# -----------------------------

def get_credentials(environ=None):
    info = load_credentials_info(environ)
    return service_account.Credentials.from_service_account_info(
        info, scopes=SCOPES
    )
