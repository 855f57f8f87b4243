"""
Identity routes.
Login, registration, logout and unauthorized pages. Each route hands a
bound form to the identity gateway and renders the outcome.
"""
from typing import Any, Dict, Union
from fastapi import APIRouter, Depends, Form, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse, Response
from identity_web.core.dependencies import get_identity_gateway, get_security_context
from identity_web.core.security_context import CookieSecurityContext
from identity_web.models.dto.identity_dto import IdentityResponse, LoginRequest, RegistrationRequest
from identity_web.models.identity import Identity
from identity_web.models.outcome import RedirectOutcome, ViewOutcome
from identity_web.services.identity_gateway import IdentityGateway

router = APIRouter(prefix="/identity", tags=["Identity"])


def _render_model(model: Dict[str, Any]) -> Dict[str, Any]:
    rendered = {}
    for name, value in model.items():
        if isinstance(value, Identity):
            value = IdentityResponse.model_validate(value)
        rendered[name] = value
    return jsonable_encoder(rendered)


def render_outcome(
    outcome: Union[ViewOutcome, RedirectOutcome],
    security_context: CookieSecurityContext = None
) -> Response:
    """Turn a gateway outcome into an HTTP response, applying session cookie changes."""
    if isinstance(outcome, RedirectOutcome):
        response = RedirectResponse(url=outcome.redirect_target, status_code=status.HTTP_303_SEE_OTHER)
    else:
        response = JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"view": outcome.view_name, "model": _render_model(outcome.model)}
        )
    
    if security_context is not None:
        security_context.commit(response)
    return response


@router.get("/login")
async def login(gateway: IdentityGateway = Depends(get_identity_gateway)):
    """Show the login form."""
    return render_outcome(gateway.show_login())


@router.get("/logout")
async def logout(
    gateway: IdentityGateway = Depends(get_identity_gateway),
    security_context: CookieSecurityContext = Depends(get_security_context)
):
    """End the current session."""
    return render_outcome(gateway.logout(security_context), security_context)


@router.get("/registration")
async def registration(gateway: IdentityGateway = Depends(get_identity_gateway)):
    """Show the registration form."""
    return render_outcome(gateway.show_registration())


@router.post("/register")
def register(
    username: str = Form(default=""),
    email: str = Form(default=""),
    passphrase: str = Form(default=""),
    passphrase_confirmation: str = Form(default=""),
    gateway: IdentityGateway = Depends(get_identity_gateway)
):
    """
    Handle the registration form.
    
    - **username**, **email**, **passphrase**, **passphrase_confirmation**
    
    Invalid input re-renders the registration view with field errors.
    """
    registration_form = RegistrationRequest.model_construct(
        username=username,
        email=email,
        passphrase=passphrase,
        passphrase_confirmation=passphrase_confirmation
    )
    return render_outcome(gateway.register(registration_form))


@router.post("/authenticate")
def authenticate(
    username: str = Form(default=""),
    passphrase: str = Form(default=""),
    gateway: IdentityGateway = Depends(get_identity_gateway),
    security_context: CookieSecurityContext = Depends(get_security_context)
):
    """
    Handle the login form.
    
    Redirects to /index when the session ends up authenticated, otherwise
    shows the login form again.
    """
    login_form = LoginRequest.model_construct(username=username, passphrase=passphrase)
    return render_outcome(gateway.authenticate(login_form, security_context), security_context)


@router.get("/unauthorized")
async def unauthorized(
    gateway: IdentityGateway = Depends(get_identity_gateway),
    security_context: CookieSecurityContext = Depends(get_security_context)
):
    """Clear any session and show the unauthorized page."""
    return render_outcome(gateway.unauthorized(security_context), security_context)
