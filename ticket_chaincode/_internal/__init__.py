"""Internal modules for the ticket chaincode.

WARNING: This package contains helpers shared by the public modules.
These are not intended for direct use in application code.

Modules:
    http - Shared HTTP client configuration
"""
