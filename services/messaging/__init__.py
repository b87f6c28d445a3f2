from .processing import log_received_message

__all__ = ["log_received_message"]
