"""
Contact form router.

A single route that accepts every method and defers to the framework-neutral
handler in app.services.contact_handler, which owns method dispatch, CORS
headers and status codes. CORS headers are set on every response, including
preflights without an Origin header, so CORSMiddleware is not installed.

Routes:
  /              — contact endpoint
  /api/contact   — same endpoint at the serverless hosting path

Dependencies (override via app.dependency_overrides in tests):
  get_settings_loader   → callable returning ContactSettings
  get_gateway_factory   → callable building an EmailGateway from settings
"""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from app.config import load_settings
from app.services.contact_handler import (
    GatewayFactory,
    SettingsLoader,
    handle_contact_request,
)
from app.services.email_gateway import ResendGateway

router = APIRouter()

_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_settings_loader() -> SettingsLoader:
    return load_settings


def get_gateway_factory() -> GatewayFactory:
    return ResendGateway.from_settings


@router.api_route("/", methods=_METHODS)
@router.api_route("/api/contact", methods=_METHODS)
async def contact(
    request: Request,
    settings_loader: SettingsLoader = Depends(get_settings_loader),
    gateway_factory: GatewayFactory = Depends(get_gateway_factory),
):
    """
    Receive a contact-form submission and email it to the site owner.

    Body: ``{"name", "email", "subject", "message"}``, all non-empty strings.
    """
    body = await request.body() if request.method == "POST" else None

    result = await handle_contact_request(
        request.method,
        body,
        settings_loader=settings_loader,
        gateway_factory=gateway_factory,
    )

    if result.body is None:
        return Response(status_code=result.status_code, headers=result.headers)
    return JSONResponse(
        status_code=result.status_code,
        content=result.body,
        headers=result.headers,
    )
