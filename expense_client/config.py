import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from the package directory or its parent
env_path = Path(__file__).parent / '.env'
if not env_path.exists():
    env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)


def _optional_float(value):
    if value in (None, ''):
        return None
    return float(value)


class Config:
    API_BASE_URL = os.environ.get('API_BASE_URL') or 'http://localhost:5000/api'
    SESSION_FILE = os.environ.get('SESSION_FILE') or str(
        Path.home() / '.expense_client' / 'session.json'
    )

    # No timeout unless configured; a hung request stays pending
    REQUEST_TIMEOUT = _optional_float(os.environ.get('REQUEST_TIMEOUT'))

    NOTIFICATION_DURATION = float(os.environ.get('NOTIFICATION_DURATION') or 5)

    # Navigation targets
    LOGIN_PAGE = '/login.html'
    DASHBOARD_PAGE = '/index.html'

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
