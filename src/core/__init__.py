"""Core infrastructure package for shared application functionality.

- **config**: Centralized configuration management with environment support
- **constants**: Shared constants
- **context**: Request context and correlation ID management
- **exceptions**: Structured exception hierarchy with error codes
- **logging**: Structured logging with Loguru
- **types**: Type aliases for request data
"""
