from .compile import router as compile_router

__all__ = ["compile_router"]
