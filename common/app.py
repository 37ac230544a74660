"""Core FastAPI application utilities."""

import typing

import fastapi
import fastapi.middleware.cors

import common.log

# ---------------------------------------------------------------------------
# Health router
# ---------------------------------------------------------------------------

_health_router = fastapi.APIRouter()


@_health_router.api_route('/health', methods=['GET', 'HEAD'])
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {'status': 'healthy'}


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(
    title: str,
    cors_origins: typing.Sequence[str] = ('*',),
    **kwargs: typing.Any,
) -> fastapi.FastAPI:
    """Create a FastAPI app with health endpoint, CORS and logging configured.

    Browser front ends served from another origin post captures directly to
    the API, so CORS is open to ``cors_origins``. Additional keyword
    arguments are forwarded to FastAPI.__init__ (e.g. lifespan).
    """
    app = fastapi.FastAPI(title=title, **kwargs)
    common.log.configure_logging()
    app.add_middleware(
        fastapi.middleware.cors.CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=['GET', 'POST', 'DELETE'],
        allow_headers=['*'],
    )
    app.include_router(_health_router)
    return app
