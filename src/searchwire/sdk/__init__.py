from .builder import RequestBuilder, prepare_request

__all__ = ["RequestBuilder", "prepare_request"]
