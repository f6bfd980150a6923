"""
URL configuration for the admin area (mounted at /admin/, no trailing slashes).

The dashboard itself (/admin) is routed in config.urls.
"""
from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .admin_views import (
    BlogPostAdminViewSet, MediaAdminViewSet, MessageAdminViewSet,
    ProfileAdminView, ProjectAdminViewSet, SiteSettingsAdminView,
    SkillAdminViewSet, SkillCategoryAdminViewSet,
)
from .auth_views import AdminLoginView, AdminLogoutView

router = SimpleRouter(trailing_slash=False)
router.register(r'projects', ProjectAdminViewSet, basename='admin-project')
router.register(r'blog', BlogPostAdminViewSet, basename='admin-blog')
router.register(r'skill-categories', SkillCategoryAdminViewSet, basename='admin-skill-category')
router.register(r'skills', SkillAdminViewSet, basename='admin-skill')
router.register(r'messages', MessageAdminViewSet, basename='admin-message')
router.register(r'media', MediaAdminViewSet, basename='admin-media')

urlpatterns = [
    path('login', AdminLoginView.as_view(), name='admin-login'),
    path('logout', AdminLogoutView.as_view(), name='admin-logout'),
    path('profile', ProfileAdminView.as_view(), name='admin-profile'),
    path('settings', SiteSettingsAdminView.as_view(), name='admin-settings'),
    path('', include(router.urls)),
]
