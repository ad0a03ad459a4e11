"""Pydantic schema models for the API.

- **hello**: ``HelloData``, the object the sample endpoints bind into
- **errors**: The standard error response body
"""
