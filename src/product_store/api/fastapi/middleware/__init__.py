from .errors.catchall import CatchAllExceptionMiddleware
from .errors.handlers import register_error_handlers
from .request_size_limit import RequestSizeLimitMiddleware

__all__ = ["CatchAllExceptionMiddleware", "RequestSizeLimitMiddleware", "register_error_handlers"]
