import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

_SUPABASE_URL = os.getenv('SUPABASE_URL')
_SUPABASE_KEY = os.getenv('SUPABASE_KEY')

_ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY') or os.getenv('CLAUDE_API_KEY')

_CLAUDE_MODEL = os.getenv('CLAUDE_MODEL', 'claude-sonnet-4-5-20250929')

# Server functions live under the Supabase project by default; point this at
# this service's own /functions/v1 prefix to serve them in-process.
_FUNCTIONS_URL = os.getenv('FUNCTIONS_URL') or (
    f"{_SUPABASE_URL.rstrip('/')}/functions/v1" if _SUPABASE_URL else 'http://localhost:8000/functions/v1'
)
_FUNCTIONS_KEY = os.getenv('FUNCTIONS_KEY') or _SUPABASE_KEY

_LOCAL_CACHE_DIR = Path(os.getenv('LOCAL_CACHE_DIR', '.selfsight_cache'))


class Config:
    """Central configuration for the journaling service."""

    SERVICE_NAME = os.getenv('SERVICE_NAME', 'selfsight-journal-service')

    SUPABASE_URL = _SUPABASE_URL
    SUPABASE_KEY = _SUPABASE_KEY
    ENTRIES_TABLE = os.getenv('ENTRIES_TABLE', 'journal_entries')

    ANTHROPIC_API_KEY = _ANTHROPIC_API_KEY
    CLAUDE_MODEL = _CLAUDE_MODEL

    FUNCTIONS_URL = _FUNCTIONS_URL
    FUNCTIONS_KEY = _FUNCTIONS_KEY

    LOCAL_CACHE_DIR = _LOCAL_CACHE_DIR
    HTTP_TIMEOUT_SECONDS = float(os.getenv('HTTP_TIMEOUT_SECONDS', '30'))


settings = Config()
