"""Load configuration from environment."""
import os

from dotenv import load_dotenv

load_dotenv()


def parse_bool(value: str | None, default: bool = False) -> bool:
    """Interpret an env value such as '1', 'true', 'yes' or 'on'."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Export tools sorted by name instead of registration order
HYPERFN_SORT_TOOLS = parse_bool(os.getenv("HYPERFN_SORT_TOOLS"))
