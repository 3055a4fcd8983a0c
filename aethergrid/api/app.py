"""
FastAPI Application - REST API for duel clients.

Endpoints:
    POST   /api/v1/sessions                    Start a duel
    GET    /api/v1/sessions/{id}               Get session record
    GET    /api/v1/sessions/{id}/commitment    Get the public input proofs must carry
    POST   /api/v1/sessions/{id}/proofs        Submit a proof
    POST   /api/v1/sessions/{id}/resolve       Resolve and report to the game hub
    GET    /api/v1/admin                       Get deployment config
    PUT    /api/v1/admin/{admin|hub|verifier}  Change an address (admin signature)
    POST   /api/v1/admin/upgrade               Record a new code hash (admin signature)
    GET    /health                             Health check

Signatures:
    The `X-Signers` header lists the identities that signed the request,
    comma separated. Starting a duel needs both players; submitting needs
    the submitter; admin changes need the current admin.

Threading:
    Endpoints that call the engine are plain `def`, so FastAPI runs them in
    its threadpool. A slow verifier blocks only its own request, and the
    engine lock serialises the handlers.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional

from .. import __version__
from ..engine_core.errors import AetherGridError
from ..engine_core.result import ActionResult, ErrorCode as ResultCode
from .schemas import (
    AddressUpdateRequest,
    CommitmentResponse,
    ConfigResponse,
    ErrorCode,
    ErrorResponse,
    HealthResponse,
    OutcomeResponse,
    SessionResponse,
    StartSessionRequest,
    SubmitProofRequest,
    UpgradeRequest,
)


RESULT_STATUS = {
    ResultCode.SESSION_NOT_FOUND: 404,
    ResultCode.UNAUTHORIZED: 403,
    ResultCode.NOT_PLAYER: 403,
    ResultCode.ALREADY_SUBMITTED: 409,
    ResultCode.ALREADY_RESOLVED: 409,
    ResultCode.COMMITMENT_MISMATCH: 422,
    ResultCode.NO_SUBMISSIONS: 409,
}

ABORT_STATUS = {
    "PROOF_REJECTED": 422,
    "LEDGER_REJECTED": 409,
    "SELF_PLAY": 400,
    "ADMIN_UNAUTHORIZED": 403,
    "CONFIGURATION_ERROR": 503,
}


def parse_signers(header: Optional[str]) -> list[str]:
    """Split the X-Signers header into identities."""
    if not header:
        return []
    return [part.strip() for part in header.split(",") if part.strip()]


def create_app(service=None, settings=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (built from settings if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Header, Request
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..config import Settings
    from .service import APIService

    settings = settings or Settings.from_env()
    api_service = service or APIService.from_settings(settings)

    app = FastAPI(
        title="Aether Grid Duel API",
        description="""
Two-player zero-knowledge treasure duel.

## Flow

1. `POST /sessions` with both players in `X-Signers` locks stakes at the game hub
2. Each player proves discovery with `POST /sessions/{id}/proofs`;
   `public_inputs` must equal `GET /sessions/{id}/commitment`
3. Anyone calls `POST /sessions/{id}/resolve`; lower energy wins, ties go to player1

## Security note

`cost` is supplied by the caller and is not constrained by the proof.
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def result_error(result: ActionResult) -> JSONResponse:
        return make_error_response(
            ErrorCode(result.error_code.value),
            result.error,
            status_code=RESULT_STATUS.get(result.error_code, 400),
        )

    @app.exception_handler(AetherGridError)
    async def handle_abort(request: Request, exc: AetherGridError):
        return make_error_response(
            ErrorCode(exc.error_code),
            str(exc),
            status_code=ABORT_STATUS.get(exc.error_code, 500),
        )

    @app.exception_handler(ValueError)
    async def handle_malformed(request: Request, exc: ValueError):
        return make_error_response(ErrorCode.VALIDATION_ERROR, str(exc))

    def session_response(session) -> SessionResponse:
        return SessionResponse(**session.to_dict())

    def config_response(config) -> ConfigResponse:
        return ConfigResponse(**config.to_dict())

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        status_code=201,
        responses={
            400: {"model": ErrorResponse, "description": "Self-play or malformed commitment"},
            403: {"model": ErrorResponse, "description": "Missing player signature"},
            409: {"model": ErrorResponse, "description": "Game hub refused the session"},
        },
        tags=["Sessions"],
        summary="Start a duel",
    )
    def start_session(
        request: StartSessionRequest,
        x_signers: Annotated[Optional[str], Header()] = None,
    ):
        with api_service.signed_by(parse_signers(x_signers)):
            result = api_service.start_session(
                request.session_id,
                request.player1,
                request.player2,
                request.player1_points,
                request.player2_points,
                request.commitment,
            )
        if not result.success:
            return result_error(result)
        return session_response(result.value)

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session record",
    )
    def get_session(session_id: int):
        result = api_service.get_session(session_id)
        if not result.success:
            return result_error(result)
        return session_response(result.value)

    @app.get(
        "/api/v1/sessions/{session_id}/commitment",
        response_model=CommitmentResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get the commitment proofs must reference",
    )
    def get_commitment(session_id: int):
        result = api_service.get_commitment(session_id)
        if not result.success:
            return result_error(result)
        return CommitmentResponse(session_id=session_id, commitment="0x" + result.value.hex())

    @app.post(
        "/api/v1/sessions/{session_id}/proofs",
        response_model=SessionResponse,
        responses={
            403: {"model": ErrorResponse, "description": "Missing signature or not a player"},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Already submitted or resolved"},
            422: {"model": ErrorResponse, "description": "Commitment mismatch or proof rejected"},
        },
        tags=["Duel"],
        summary="Submit a proof of discovery",
    )
    def submit_proof(
        session_id: int,
        request: SubmitProofRequest,
        x_signers: Annotated[Optional[str], Header()] = None,
    ):
        with api_service.signed_by(parse_signers(x_signers)):
            result = api_service.submit_proof(
                session_id,
                request.player,
                request.proof,
                request.public_inputs,
                request.cost,
            )
        if not result.success:
            return result_error(result)
        return session_response(result.value)

    @app.post(
        "/api/v1/sessions/{session_id}/resolve",
        response_model=OutcomeResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "No submissions yet"},
        },
        tags=["Duel"],
        summary="Resolve the duel",
    )
    def resolve(session_id: int):
        """Idempotent: repeated calls return the same outcome without reporting again."""
        result = api_service.resolve(session_id)
        if not result.success:
            return result_error(result)
        outcome = result.value
        return OutcomeResponse(
            session_id=session_id,
            outcome=outcome.value,
            player1_won=outcome.player1_won,
        )

    # =========================================================================
    # Admin Endpoints
    # =========================================================================

    @app.get("/api/v1/admin", response_model=ConfigResponse, tags=["Admin"])
    def get_config():
        return config_response(api_service.get_config())

    setters = {
        "admin": api_service.set_admin,
        "hub": api_service.set_hub,
        "verifier": api_service.set_verifier,
    }

    @app.put(
        "/api/v1/admin/{field}",
        response_model=ConfigResponse,
        responses={
            403: {"model": ErrorResponse, "description": "Admin signature missing"},
            404: {"model": ErrorResponse},
        },
        tags=["Admin"],
    )
    def update_address(
        field: str,
        request: AddressUpdateRequest,
        x_signers: Annotated[Optional[str], Header()] = None,
    ):
        setter = setters.get(field)
        if setter is None:
            return make_error_response(
                ErrorCode.VALIDATION_ERROR,
                f"Unknown admin field: {field}",
                status_code=404,
            )
        with api_service.signed_by(parse_signers(x_signers)):
            config = setter(request.address)
        return config_response(config)

    @app.post(
        "/api/v1/admin/upgrade",
        response_model=ConfigResponse,
        responses={403: {"model": ErrorResponse}},
        tags=["Admin"],
    )
    def upgrade(
        request: UpgradeRequest,
        x_signers: Annotated[Optional[str], Header()] = None,
    ):
        with api_service.signed_by(parse_signers(x_signers)):
            config = api_service.upgrade(request.code_hash)
        return config_response(config)

    # =========================================================================
    # System
    # =========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health():
        engine = api_service.engine
        return HealthResponse(
            version=__version__,
            commitment_mode=engine.commitment_scheme.name,
            outcome_policy=engine.outcome_policy.name,
        )

    return app


# For running directly: uvicorn aethergrid.api.app:app
# Built on first access; importing this module reads no settings.
_app = None


def __getattr__(name):
    global _app
    if name != "app":
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    if _app is None:
        _app = create_app()
    return _app
