"""Package bootstrap: populate os.environ from dotenv files before settings are read."""
from __future__ import annotations

from dotenv import find_dotenv, load_dotenv


def load_environment() -> None:
    """Load `.env` found from the working directory upward, then let `.env.local` override it."""

    base = find_dotenv(".env", usecwd=True)
    if base:
        load_dotenv(base)
    local = find_dotenv(".env.local", usecwd=True)
    if local:
        load_dotenv(local, override=True)


load_environment()
