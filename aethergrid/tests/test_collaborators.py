"""
Tests for collaborator implementations.

Tests:
- In-memory game hub bookkeeping
- Stub and command verifiers
- Signer-scoped authentication
- Address directory lookups
"""

import sys

import pytest

from ..collaborators import (
    CollaboratorDirectory,
    CommandVerifier,
    InMemoryLedger,
    SignerAuthenticator,
    StubVerifier,
)
from ..engine_core.errors import ConfigurationError, LedgerRejected, ProofRejected


class TestInMemoryLedger:

    def test_register_and_report(self):
        ledger = InMemoryLedger()
        ledger.register("game", 1, "a", "b", 10, 20)
        ledger.report(1, True)

        entry = ledger.entries[1]
        assert entry.is_settled
        assert entry.player1_won is True
        assert ledger.reports == [(1, True)]

    def test_duplicate_registration_rejected(self):
        ledger = InMemoryLedger()
        ledger.register("game", 1, "a", "b", 10, 20)
        with pytest.raises(LedgerRejected):
            ledger.register("game", 1, "a", "b", 10, 20)
        assert ledger.register_calls == 2

    def test_second_report_rejected(self):
        ledger = InMemoryLedger()
        ledger.register("game", 1, "a", "b", 10, 20)
        ledger.report(1, False)
        with pytest.raises(LedgerRejected):
            ledger.report(1, True)
        assert ledger.reports_for(1) == [False]

    def test_report_unknown_session(self):
        with pytest.raises(LedgerRejected):
            InMemoryLedger().report(5, True)


class TestStubVerifier:

    def test_accepts_regular_proof(self):
        verifier = StubVerifier()
        assert verifier.verify_proof(b"\x01\x02", b"\x00" * 32) is None
        assert verifier.calls == 1

    @pytest.mark.parametrize("proof", [b"", b"\xff", b"\xff\x01\x02"])
    def test_rejects(self, proof):
        with pytest.raises(ProofRejected):
            StubVerifier().verify_proof(proof, b"\x00" * 32)


FIRST_BYTE_CHECK = (
    "import sys; data = open(sys.argv[1], 'rb').read(); "
    "sys.exit(1 if not data or data[0] == 255 else 0)"
)


class TestCommandVerifier:

    def make(self):
        return CommandVerifier(command=[sys.executable, "-c", FIRST_BYTE_CHECK, "{proof}"])

    def test_zero_exit_accepts(self):
        assert self.make().verify_proof(b"\x01" * 8, b"\x00" * 32) is None

    def test_non_zero_exit_rejects(self):
        with pytest.raises(ProofRejected):
            self.make().verify_proof(b"\xff" * 8, b"\x00" * 32)

    def test_passes_public_inputs_file(self):
        script = (
            "import sys; sys.exit(0 if open(sys.argv[1], 'rb').read() == bytes(32) else 1)"
        )
        verifier = CommandVerifier(command=[sys.executable, "-c", script, "{public_inputs}"])
        verifier.verify_proof(b"\x01", bytes(32))
        with pytest.raises(ProofRejected):
            verifier.verify_proof(b"\x01", b"\x01" * 32)

    def test_missing_binary(self):
        verifier = CommandVerifier(command=["aethergrid-no-such-verifier", "{proof}"])
        with pytest.raises(ConfigurationError):
            verifier.verify_proof(b"\x01", b"\x00" * 32)

    def test_from_string(self):
        verifier = CommandVerifier.from_string("bb verify -k {vk} -p {proof}", vk_path="/tmp/vk")
        assert verifier.command == ["bb", "verify", "-k", "{vk}", "-p", "{proof}"]
        assert verifier.vk_path == "/tmp/vk"


class TestSignerAuthenticator:

    def test_only_signers_authorised(self):
        auth = SignerAuthenticator()
        with auth.signed_by("alice", "bob"):
            assert auth.is_authorized("alice")
            assert auth.is_authorized("bob", (1, 100))
            assert not auth.is_authorized("carol")

    def test_scope_resets(self):
        auth = SignerAuthenticator()
        with auth.signed_by("alice"):
            pass
        assert not auth.is_authorized("alice")
        assert auth.current_signers() == frozenset()

    def test_only_real_authenticators_exported(self):
        from .. import collaborators

        assert "SignerAuthenticator" in collaborators.__all__
        assert not hasattr(collaborators, "MockAllAuths")


class TestCollaboratorDirectory:

    def test_lookup(self):
        directory = CollaboratorDirectory()
        ledger, verifier = InMemoryLedger(), StubVerifier()
        directory.register("hub", ledger)
        directory.register("verifier", verifier)

        assert directory.ledger("hub") is ledger
        assert directory.verifier("verifier") is verifier
        assert directory.addresses() == ["hub", "verifier"]

    def test_unset_address(self):
        with pytest.raises(ConfigurationError):
            CollaboratorDirectory().ledger(None)

    def test_unknown_address(self):
        with pytest.raises(ConfigurationError):
            CollaboratorDirectory().verifier("missing")

    def test_wrong_kind(self):
        directory = CollaboratorDirectory()
        directory.register("hub", StubVerifier())
        with pytest.raises(ConfigurationError):
            directory.ledger("hub")
