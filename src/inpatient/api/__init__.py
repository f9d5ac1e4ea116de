from inpatient.api.errors import register_exception_handlers
from inpatient.api.routes import router

__all__ = ["router", "register_exception_handlers"]
