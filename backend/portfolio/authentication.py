"""
JWT authentication for the admin area.

The admin dashboard lives in the browser, so the access token is carried in
an http-only cookie; API clients can still send `Authorization: Bearer`.
"""
from django.conf import settings

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken


def admin_token_cookie():
    return settings.PORTFOLIO_ADMIN['TOKEN_COOKIE']


def raw_token_from_request(request):
    """Token from the Authorization header, falling back to the admin cookie."""
    header = request.META.get('HTTP_AUTHORIZATION', '')
    parts = header.split()
    if len(parts) == 2 and parts[0] in settings.SIMPLE_JWT.get('AUTH_HEADER_TYPES', ('Bearer',)):
        return parts[1]
    return request.COOKIES.get(admin_token_cookie())


def validate_admin_token(raw_token):
    """
    Return the decoded AccessToken, or None if it is missing or invalid.

    Expired, malformed and badly signed tokens are all treated as absent.
    """
    if not raw_token:
        return None
    try:
        return AccessToken(raw_token)
    except TokenError:
        return None


class CookieJWTAuthentication(JWTAuthentication):
    """
    simplejwt authentication that also accepts the `admin_token` cookie.

    A bad header token is an error (401), as in JWTAuthentication. A bad
    cookie is ignored so that a stale cookie never breaks public endpoints.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            return super().authenticate(request)

        raw_token = request.COOKIES.get(admin_token_cookie())
        if not raw_token:
            return None
        try:
            validated_token = self.get_validated_token(raw_token)
            return self.get_user(validated_token), validated_token
        except (AuthenticationFailed, TokenError):
            return None
