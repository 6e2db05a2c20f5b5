"""
Mock implementations for testing.

Provides fakes for external collaborators:
- FakeCredentialStore: in-memory CredentialStore with call recording
"""

from tests.mocks.fake_credential_store import FakeCredentialStore, make_user, outage

__all__ = [
    "FakeCredentialStore",
    "make_user",
    "outage",
]
