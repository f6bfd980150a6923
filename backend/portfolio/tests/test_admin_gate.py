"""
Tests for the admin access gate.

The gate is a pure function of (path, authenticated?) plus middleware that
resolves the token lazily. Both layers are covered here.
"""
from datetime import timedelta
from unittest import mock

from django.contrib.auth.models import User
from django.test import SimpleTestCase
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from portfolio.middleware import decide, is_admin_path

CONFIG = {
    'PREFIX': '/admin',
    'LOGIN_PATH': '/admin/login',
    'ROOT_PATH': '/admin',
    'TOKEN_COOKIE': 'admin_token',
    'CALLBACK_PARAM': 'callbackUrl',
}


class GateDecisionTest(SimpleTestCase):
    """decide() without HTTP or tokens."""

    def test_public_path_never_resolves_token(self):
        resolver = mock.Mock(return_value=False)

        decision = decide('/public/page', resolver, CONFIG)

        self.assertTrue(decision.allowed)
        resolver.assert_not_called()

    def test_prefix_lookalike_is_public(self):
        self.assertFalse(is_admin_path('/administrator', '/admin'))
        self.assertTrue(is_admin_path('/admin', '/admin'))
        self.assertTrue(is_admin_path('/admin/blog/1', '/admin'))

    def test_anonymous_admin_path_redirects_to_login_with_callback(self):
        decision = decide('/admin/settings', lambda: False, CONFIG)
        self.assertEqual(decision.redirect_to, '/admin/login?callbackUrl=/admin/settings')

    def test_authenticated_admin_path_allowed(self):
        self.assertTrue(decide('/admin/settings', lambda: True, CONFIG).allowed)

    def test_anonymous_login_page_allowed(self):
        self.assertTrue(decide('/admin/login', lambda: False, CONFIG).allowed)
        self.assertTrue(decide('/admin/login/', lambda: False, CONFIG).allowed)

    def test_authenticated_login_page_redirects_to_root(self):
        decision = decide('/admin/login', lambda: True, CONFIG)
        self.assertEqual(decision.redirect_to, '/admin')

    def test_anonymous_admin_root_redirects(self):
        decision = decide('/admin', lambda: False, CONFIG)
        self.assertEqual(decision.redirect_to, '/admin/login?callbackUrl=/admin')


class AdminGateMiddlewareTest(APITestCase):
    """
    End-to-end behaviour with real simplejwt tokens.
    """

    def setUp(self):
        self.admin = User.objects.create_user(
            username='admin', password='testpass123', is_staff=True
        )

    def set_token(self, token):
        self.client.cookies['admin_token'] = str(token)

    def test_settings_without_token_redirects_to_login(self):
        response = self.client.get('/admin/settings')

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/admin/login?callbackUrl=/admin/settings')

    def test_settings_with_valid_token_allowed(self):
        self.set_token(AccessToken.for_user(self.admin))

        response = self.client.get('/admin/settings')

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_bearer_header_is_accepted(self):
        token = AccessToken.for_user(self.admin)
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

        response = self.client.get('/admin/settings')

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_login_with_valid_token_redirects_to_admin_root(self):
        self.set_token(AccessToken.for_user(self.admin))

        response = self.client.get('/admin/login')

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/admin')

    def test_login_without_token_renders_form(self):
        response = self.client.get('/admin/login', {'callbackUrl': '/admin/blog'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertContains(response, 'Admin login')
        self.assertContains(response, 'value="/admin/blog"')

    def test_garbage_token_fails_closed(self):
        self.set_token('not-a-jwt')

        response = self.client.get('/admin/settings')

        self.assertEqual(response['Location'], '/admin/login?callbackUrl=/admin/settings')

    def test_expired_token_fails_closed(self):
        token = AccessToken.for_user(self.admin)
        token.set_exp(lifetime=-timedelta(minutes=1))
        self.set_token(token)

        response = self.client.get('/admin/settings')

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)

    def test_tampered_token_fails_closed(self):
        token = str(AccessToken.for_user(self.admin))
        header, payload, signature = token.split('.')
        self.set_token('.'.join([header, payload, signature[::-1]]))

        response = self.client.get('/admin/settings')

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)

    def test_public_path_skips_token_lookup(self):
        with mock.patch('portfolio.middleware.validate_admin_token') as validate:
            response = self.client.get('/api/projects/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        validate.assert_not_called()

    def test_valid_token_for_non_staff_passes_gate_but_not_permissions(self):
        """The gate only checks the token; DRF still requires is_staff."""
        visitor = User.objects.create_user(username='visitor', password='testpass123')
        self.set_token(AccessToken.for_user(visitor))

        response = self.client.get('/admin/settings')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_stale_cookie_does_not_break_public_api(self):
        self.set_token('not-a-jwt')

        response = self.client.get('/api/blog/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
