"""
Admin access gate.

Every request under the admin prefix must carry a valid admin token
(cookie or bearer header). Anything else passes straight through without
looking at tokens at all.

Decision table for admin paths:
- login page, authenticated      -> redirect to the admin root
- login page, anonymous          -> allow (show the form)
- other admin path, authenticated -> allow
- other admin path, anonymous    -> redirect to login, ?callbackUrl=<path>
"""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from django.conf import settings
from django.http import HttpResponseRedirect

from .authentication import raw_token_from_request, validate_admin_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateDecision:
    redirect_to: Optional[str] = None

    @property
    def allowed(self):
        return self.redirect_to is None


ALLOW = GateDecision()


def is_admin_path(path, prefix):
    return path == prefix or path.startswith(prefix.rstrip('/') + '/')


def _same_page(path, target):
    return path.rstrip('/') == target.rstrip('/')


def decide(path, is_authenticated, config=None):
    """
    Decide what to do with a request for `path`.

    `is_authenticated` is a zero-argument callable so that public paths
    never pay for token validation.
    """
    config = config or settings.PORTFOLIO_ADMIN
    if not is_admin_path(path, config['PREFIX']):
        return ALLOW

    authenticated = is_authenticated()

    if _same_page(path, config['LOGIN_PATH']):
        if authenticated:
            return GateDecision(redirect_to=config['ROOT_PATH'])
        return ALLOW

    if authenticated:
        return ALLOW

    query = urlencode({config['CALLBACK_PARAM']: path}, safe='/')
    return GateDecision(redirect_to=f"{config['LOGIN_PATH']}?{query}")


class AdminAccessGateMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        decision = decide(
            request.path,
            lambda: validate_admin_token(raw_token_from_request(request)) is not None,
        )
        if not decision.allowed:
            logger.debug("Admin gate redirecting %s to %s", request.path, decision.redirect_to)
            return HttpResponseRedirect(decision.redirect_to)
        return self.get_response(request)
