"""Version information for the HTTP Signatures Python SDK"""

__version__ = "0.1.0"
