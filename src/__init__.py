"""Bindery - request decoding samples on FastAPI.

Bindery shows several ways an HTTP boundary can turn request data into
typed values: query and form parameters, whole-object binding, raw JSON
bodies and structured JSON bodies. Every endpoint parses the same
``username``/``age`` pair with a different level of framework help.

Layers:
- **API Layer**: FastAPI routes, middleware and exception handlers
- **Decoding Layer**: The request decoder, its schemas and coercion rules
- **Core Layer**: Configuration, logging, request context and exceptions
"""
