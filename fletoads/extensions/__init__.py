# fletoads/extensions/__init__.py

from flask_cors import CORS
from .db import MongoDB, get_db

# Only app-aware extensions should be global
cors = CORS()

__all__ = [
    "cors",
    "MongoDB",
    "get_db",
]
