"""Users blueprint providing register, login, verification and profile endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from werkzeug.exceptions import BadRequest, Forbidden, Unauthorized

from models import db
from services.auth_service import AuthService, LoginStatus, VerificationStatus
from utils.request_validation import parse_json_request, string_field

auth_bp = Blueprint("auth", __name__)

VERIFY_EMAIL_MESSAGE = "An email has been sent to your email. Please verify email."
EMAIL_NOT_SENT_MESSAGE = (
    "Registration succeeded but the verification email could not be sent. "
    "Log in to receive a new verification email."
)
UNVERIFIED_LOGIN_MESSAGE = (
    "An email has been sent to your email. Please verify your email to login."
)


def _auth_service() -> AuthService:
    return AuthService(
        db.session,
        current_app.extensions["mailer"],
        verify_base_url=current_app.config["VERIFY_BASE_URL"],
    )


@auth_bp.route("", methods=["POST"])
def register() -> tuple:
    """Register a new user and send them a verification link."""
    payload = parse_json_request(request)

    result = _auth_service().register(
        string_field(payload, "name"),
        string_field(payload, "email"),
        string_field(payload, "password"),
    )

    body = {
        "token": result.access_token,
        **result.user.to_profile(),
        "verification_email_sent": result.verification_email_sent,
        "message": VERIFY_EMAIL_MESSAGE
        if result.verification_email_sent
        else EMAIL_NOT_SENT_MESSAGE,
    }
    return jsonify(body), HTTPStatus.CREATED


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a verified user and return a bearer token."""
    payload = parse_json_request(request, required_keys=("email", "password"))

    result = _auth_service().login(
        string_field(payload, "email"), string_field(payload, "password")
    )

    if result.status is LoginStatus.UNVERIFIED:
        raise Forbidden(UNVERIFIED_LOGIN_MESSAGE)
    if result.status is LoginStatus.INVALID:
        raise Unauthorized("Invalid credentials.")

    user = result.user
    return (
        jsonify(
            {
                "token": result.access_token,
                **user.to_profile(),
                "verified": user.is_verified,
            }
        ),
        HTTPStatus.OK,
    )


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me() -> tuple:
    """Return the profile of the authenticated user."""
    user = _auth_service().get_profile(get_jwt_identity())
    return jsonify(user.to_profile()), HTTPStatus.OK


@auth_bp.route("/<user_id>/verify/<token>", methods=["GET"])
def verify_email(user_id: str, token: str) -> tuple:
    """Redeem an email verification link."""
    status = _auth_service().verify_email(user_id, token)

    if status is VerificationStatus.ALREADY_VERIFIED:
        raise BadRequest("Email verified already.")
    if status is VerificationStatus.INVALID_LINK:
        raise BadRequest("Invalid link.")

    return jsonify({"message": "Email verified successfully."}), HTTPStatus.OK
