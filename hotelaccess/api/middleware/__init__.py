from .access_log import AccessLogMiddleware

__all__ = ["AccessLogMiddleware"]
