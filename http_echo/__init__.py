"""http-echo: a tiny HTTP server that echoes a fixed string.

Used as a test fixture behind load balancers and canary routers. Every
response on ``/`` identifies the instance that produced it.
"""

__version__ = "0.3.0"

HUMAN_VERSION = f"http-echo v{__version__}"
