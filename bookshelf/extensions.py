from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

csrf = CSRFProtect()

# Only write routes carry a limit; reads stay unlimited.
limiter = Limiter(key_func=get_remote_address, default_limits=[], headers_enabled=True)
