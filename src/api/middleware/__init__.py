"""FastAPI middleware package for cross-cutting request/response concerns.

- **RequestContextMiddleware**: Manages correlation and request IDs
- **RequestLoggingMiddleware**: Structured logging with timing
- **error_handler**: Centralized exception handling with consistent responses

Middleware are executed in reverse order of registration:
1. Request context (sets up correlation IDs)
2. Request logging (logs with correlation context)
"""
