from json_resp.api.docs import collect_components, register_openapi
from json_resp.api.handlers import register_error_handlers

__all__ = [
    "collect_components",
    "register_error_handlers",
    "register_openapi",
]
