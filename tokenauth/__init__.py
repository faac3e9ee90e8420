"""
tokenauth - Bearer Token Authentication Service

A small service that exchanges credentials for a signed bearer token and
guards endpoints with it.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- auth: Credential verification, token issuance and validation
- identity: Identity store backends (in-memory, Redis)
- api: REST API models and public metadata routes
"""

__version__ = "1.0.0"
