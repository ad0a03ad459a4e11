"""HTTP API layer built on FastAPI.

Key components:
- **main**: Application factory, exception handlers and middleware wiring
- **binding**: Builds request payloads and exposes the decoder as dependencies
- **routes**: The request parameter and JSON body sample endpoints
- **middleware**: Request context, request logging and error handling
- **schemas**: Pydantic models for bound values and error responses
- **utils**: orjson-backed JSON responses

The API layer translates between HTTP and the request decoder: it gathers
the raw request data, asks the decoder for a typed value and turns decode
failures into 400 responses.
"""
