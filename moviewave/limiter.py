
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import get_settings

# key_func: identify the caller by IP address
# storage_uri: memory:// for a single process, redis://... when scaled out
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=get_settings().RATE_LIMIT_STORAGE_URI,
)
