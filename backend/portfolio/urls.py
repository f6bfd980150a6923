"""
URL configuration for the public Portfolio API.
"""
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import (
    BlogPostDetailView, BlogPostListView, BlogReactionsView, BlogViewsView,
    ContactView, ProfileView, ProjectListView, SkillListView,
)

urlpatterns = [
    path('projects/', ProjectListView.as_view(), name='project-list'),
    path('skills/', SkillListView.as_view(), name='skill-list'),
    path('profile/', ProfileView.as_view(), name='profile'),
    path('blog/', BlogPostListView.as_view(), name='blog-list'),
    path('blog/<slug:slug>/', BlogPostDetailView.as_view(), name='blog-detail'),
    path('blog/<slug:slug>/views/', BlogViewsView.as_view(), name='blog-views'),
    path('blog/<slug:slug>/reactions/', BlogReactionsView.as_view(), name='blog-reactions'),
    path('contact/', ContactView.as_view(), name='contact'),

    # Admin token refresh (outside the gated prefix so expired sessions can renew)
    path('auth/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
