"""Top-level application package for the receipt points API.

This package contains everything required to run the FastAPI backend
for the receipt points service: Pydantic schemas for receipts, the
points rule engine, the points store backends, the receipt service
that ties them together and the API routers. Each piece can be swapped
independently; the service only depends on the store protocol and an
ordered list of rules.

To run the API locally you can execute:

```bash
uvicorn receipt_points.api.main:app --reload
```

or use the ``receipt-points`` console script. The default configuration
keeps points in memory. You can override configuration values using
environment variables or a ``.env`` file at the project root.
"""

__all__: list[str] = []
