"""
URL configuration for the Portfolio backend.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.urls import include, path, re_path

from portfolio.admin_views import DashboardView

urlpatterns = [
    re_path(r'^admin/?$', DashboardView.as_view(), name='admin-dashboard'),
    path('admin/', include('portfolio.admin_urls')),
    path('api/', include('portfolio.urls')),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
