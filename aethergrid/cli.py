"""
Aether Grid CLI - Command-line interface for the engine.

Usage:
    aethergrid serve                                  Run the REST API
    aethergrid commitment <session_id> <p1> <p2>      Print the derived commitment
    aethergrid nullifier <session_id> <p1> <p2>       Print the session nullifier
    aethergrid simulate --cost1 30 --cost2 80         Play a duel in memory
"""

import argparse
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Aether Grid - Zero-knowledge treasure duel engine",
        prog="aethergrid",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    # Commitment / nullifier commands
    for name, help_text in (
        ("commitment", "Print the derived commitment for a session"),
        ("nullifier", "Print the session-binding nullifier for off-path commitments"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("session_id", type=int)
        sub.add_argument("player1")
        sub.add_argument("player2")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a duel in memory")
    simulate_parser.add_argument("--cost1", type=int, help="Player 1 energy (omit: no submission)")
    simulate_parser.add_argument("--cost2", type=int, help="Player 2 energy (omit: no submission)")
    simulate_parser.add_argument("--policy", choices=["cost", "binary"], default="cost")
    simulate_parser.add_argument("--mode", choices=["supplied", "derived"], default="derived")

    args = parser.parse_args(argv)

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "commitment":
        cmd_commitment(args)
    elif args.command == "nullifier":
        cmd_nullifier(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn

    from .api.app import create_app
    from .config import Settings
    from .observability import configure_structlog

    settings = Settings.from_env()
    configure_structlog(environment=settings.environment)
    uvicorn.run(create_app(settings=settings), host=args.host, port=args.port)


def cmd_commitment(args):
    from .engine_core.commitment import commitment_to_hex, derive_commitment

    try:
        value = derive_commitment(args.session_id, args.player1, args.player2)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(commitment_to_hex(value))


def cmd_nullifier(args):
    from .engine_core.commitment import commitment_to_hex, session_nullifier

    try:
        value = session_nullifier(args.session_id, args.player1, args.player2)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(commitment_to_hex(value))


def cmd_simulate(args):
    """Play one duel against in-memory collaborators and print the outcome."""
    from .api.service import APIService
    from .config import Settings

    settings = Settings(commitment_mode=args.mode, outcome_policy=args.policy)
    service = APIService.from_settings(settings)
    player1, player2, session_id = "player1", "player2", 1

    supplied = None
    if args.mode == "supplied":
        # Stands in for Poseidon2(x, y, nullifier); the circuit is not run here.
        from .engine_core.commitment import commitment_to_hex, session_nullifier
        supplied = commitment_to_hex(session_nullifier(session_id, player1, player2))

    with service.signed_by([player1, player2]):
        result = service.start_session(session_id, player1, player2, 100, 100, supplied)
    if not result.success:
        print(f"Start failed: {result.error}")
        sys.exit(1)

    commitment = "0x" + service.get_commitment(session_id).value.hex()
    print(f"Session {session_id} commitment: {commitment}")

    for player, cost in ((player1, args.cost1), (player2, args.cost2)):
        if cost is None:
            continue
        with service.signed_by([player]):
            result = service.submit_proof(session_id, player, "01" * 64, commitment, cost)
        status = "accepted" if result.success else f"refused ({result.error})"
        print(f"{player} submitted cost {cost}: {status}")

    result = service.resolve(session_id)
    if not result.success:
        print(f"Resolve failed: {result.error}")
        sys.exit(1)

    outcome = result.value
    print(f"Outcome: {outcome.value} (reported player1_won={outcome.player1_won})")


if __name__ == "__main__":
    main()
