"""
Tests for the admin console.
"""

import pytest

from ..admin import AdminConsole
from ..collaborators import InMemoryLedger, SignerAuthenticator, StubVerifier
from ..engine_core.errors import AdminAuthorizationError
from ..engine_core.result import ErrorCode
from .conftest import PLAYER1, PLAYER2, POINTS, TREASURE_HASH, VALID_PROOF


@pytest.fixture
def signer_auth():
    return SignerAuthenticator()


@pytest.fixture
def console(config, signer_auth):
    return AdminConsole(config, signer_auth)


class TestAdminConsole:

    def test_getters(self, console):
        assert console.get_admin() == "GADMIN"
        assert console.get_hub() == "hub"
        assert console.get_verifier() == "verifier"

    def test_setters_require_admin(self, console, signer_auth):
        with pytest.raises(AdminAuthorizationError):
            console.set_hub("other-hub")

        with signer_auth.signed_by(PLAYER1):
            with pytest.raises(AdminAuthorizationError):
                console.set_verifier("other-verifier")

        assert console.get_hub() == "hub"
        assert console.get_verifier() == "verifier"

    def test_admin_can_update(self, console, signer_auth):
        with signer_auth.signed_by("GADMIN"):
            console.set_hub("hub-2")
            console.set_verifier("verifier-2")

        assert console.config.hub_address == "hub-2"
        assert console.config.verifier_address == "verifier-2"

    def test_admin_handover(self, console, signer_auth):
        with signer_auth.signed_by("GADMIN"):
            console.set_admin("GNEWADMIN")

        with signer_auth.signed_by("GADMIN"):
            with pytest.raises(AdminAuthorizationError):
                console.set_hub("hub-3")

        with signer_auth.signed_by("GNEWADMIN"):
            console.set_hub("hub-3")
        assert console.get_hub() == "hub-3"

    def test_upgrade_records_hash(self, console, signer_auth):
        new_hash = bytes(range(32))
        with signer_auth.signed_by("GADMIN"):
            console.upgrade(new_hash)
        assert console.config.code_hash == new_hash
        assert console.config.to_dict()["code_hash"] == "0x" + new_hash.hex()

    def test_upgrade_requires_32_bytes(self, console, signer_auth):
        with signer_auth.signed_by("GADMIN"):
            with pytest.raises(ValueError):
                console.upgrade(b"\x01" * 16)

    def test_empty_address_rejected(self, console, signer_auth):
        with signer_auth.signed_by("GADMIN"):
            with pytest.raises(ValueError):
                console.set_hub("")


class TestAddressChangesReachEngine:
    """The engine resolves collaborators through the live config."""

    def test_new_verifier_used_for_next_submission(self, started, directory):
        replacement = StubVerifier()
        directory.register("verifier-2", replacement)
        started.admin.set_verifier("verifier-2")

        assert started.submit(1, PLAYER1, VALID_PROOF, TREASURE_HASH, 10).success
        assert replacement.calls == 1

    def test_new_hub_receives_registrations(self, engine, directory):
        new_hub = InMemoryLedger()
        directory.register("hub-2", new_hub)
        engine.admin.set_hub("hub-2")

        engine.start(3, PLAYER1, PLAYER2, POINTS, POINTS, TREASURE_HASH)

        assert 3 in new_hub.entries

    def test_unresolvable_verifier_aborts_submission(self, started):
        from ..engine_core.errors import ConfigurationError

        started.admin.set_verifier("missing")
        with pytest.raises(ConfigurationError):
            started.submit(1, PLAYER1, VALID_PROOF, TREASURE_HASH, 10)
        assert started.get_session(1).value.player1_result is None
        assert started.resolve(1).error_code == ErrorCode.NO_SUBMISSIONS
