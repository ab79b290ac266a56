"""Storage module - the request log behind ``/stats``."""

from synthdata.storage.request_log import RequestLog

__all__ = ["RequestLog"]
