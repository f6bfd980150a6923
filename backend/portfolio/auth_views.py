"""
Authentication views for the admin area.

Login issues a simplejwt token pair and stores the access token in the
http-only `admin_token` cookie the admin gate reads.
"""
import logging

from django.conf import settings
from django.contrib.auth.models import User
from django.shortcuts import render
from django.utils.http import url_has_allowed_host_and_scheme

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from .authentication import admin_token_cookie
from .serializers import AdminLoginSerializer

logger = logging.getLogger(__name__)


def safe_callback(request, target):
    """Only same-host relative paths are followed after login."""
    root = settings.PORTFOLIO_ADMIN['ROOT_PATH']
    if not isinstance(target, str) or not target.startswith('/'):
        return root
    if not url_has_allowed_host_and_scheme(target, allowed_hosts={request.get_host()}):
        return root
    return target


class AdminLoginView(APIView):
    """
    Admin login endpoint.

    GET renders the login form; POST authenticates a staff user and returns
    JWT tokens (also set as a cookie).
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        param = settings.PORTFOLIO_ADMIN['CALLBACK_PARAM']
        return render(request._request, 'portfolio/login.html', {
            'callback_url': safe_callback(request, request.query_params.get(param)),
            'callback_param': param,
        })

    def post(self, request):
        serializer = AdminLoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Username and password are required'},
                status=status.HTTP_400_BAD_REQUEST
            )
        username = serializer.validated_data['username']
        password = serializer.validated_data['password']

        # Try to find user by username or email
        try:
            if '@' in username:
                user = User.objects.get(email__iexact=username)
            else:
                user = User.objects.get(username__iexact=username)
        except (User.DoesNotExist, User.MultipleObjectsReturned):
            user = None

        if user is None or not user.check_password(password) or not user.is_active or not user.is_staff:
            logger.warning("Failed admin login for %r", username)
            return Response(
                {'error': 'Invalid credentials'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        refresh = RefreshToken.for_user(user)
        access = refresh.access_token
        callback = request.data.get(settings.PORTFOLIO_ADMIN['CALLBACK_PARAM'])

        response = Response({
            'message': 'Login successful',
            'user': {
                'id': user.id,
                'username': user.username,
                'email': user.email,
            },
            'tokens': {
                'access': str(access),
                'refresh': str(refresh),
            },
            'redirect': safe_callback(request, callback),
        })
        response.set_cookie(
            admin_token_cookie(),
            str(access),
            max_age=int(settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME'].total_seconds()),
            httponly=True,
            secure=not settings.DEBUG,
            samesite='Lax',
        )
        logger.info("Admin %s logged in", user.username)
        return response


class AdminLogoutView(APIView):
    """
    Logout endpoint - blacklists the refresh token and clears the cookie.
    """
    permission_classes = [IsAdminUser]

    def post(self, request):
        refresh_token = request.data.get('refresh')
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as exc:
                logger.debug("Refresh token not blacklisted: %s", exc)

        response = Response({'message': 'Logged out successfully'})
        response.delete_cookie(admin_token_cookie(), samesite='Lax')
        return response
