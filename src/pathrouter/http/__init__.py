"""HTTP primitives for the bundled ASGI host.

The pipeline core treats the request as opaque and writes only through the
``ResponseSink`` protocol; these types are what the host supplies.
"""
