"""
Admin area API.

Everything here sits behind AdminAccessGateMiddleware (redirects for
anonymous browsers) and additionally requires a staff user through DRF
permissions, so bearer-token clients get proper 401/403 answers.
"""
import logging

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone
from rest_framework import mixins, views, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from .models import (
    AuthorProfile, BlogPost, ContactSubmission, MediaAsset, Project,
    SiteSettings, Skill, SkillCategory,
)
from .serializers import (
    AuthorProfileSerializer, BlogPostAdminSerializer, BulkIdsSerializer,
    BulkMessageStatusSerializer, ContactMessageAdminSerializer,
    MediaAssetSerializer, PostStatusSerializer, ProjectAdminSerializer,
    SiteSettingsSerializer, SkillAdminSerializer, SkillCategoryAdminSerializer,
    apply_post_status,
)

logger = logging.getLogger(__name__)


class AdminPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class AdminViewMixin:
    permission_classes = [IsAdminUser]


def reorder(queryset, ids):
    """Set `order` to each id's position in `ids`; unknown ids are ignored."""
    positions = {pk: index for index, pk in enumerate(ids)}
    items = list(queryset.filter(pk__in=ids))
    for item in items:
        item.order = positions[item.pk]
    with transaction.atomic():
        queryset.model.objects.bulk_update(items, ['order'])
    return len(items)


class ReorderMixin:
    @action(detail=False, methods=['post'])
    def reorder(self, request):
        serializer = BulkIdsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        updated = reorder(self.get_queryset(), serializer.validated_data['ids'])
        return Response({'updated': updated})


class DashboardView(AdminViewMixin, views.APIView):
    """Counts shown on the admin landing page."""

    def get(self, request):
        totals = BlogPost.objects.aggregate(total_views=Sum('views'), total_likes=Sum('likes'))
        recent = ContactSubmission.objects.order_by('-created_at')[:5]
        return Response({
            'projects': Project.objects.count(),
            'published_projects': Project.objects.filter(status=Project.Status.PUBLISHED).count(),
            'posts': BlogPost.objects.count(),
            'published_posts': BlogPost.objects.filter(published=True).count(),
            'total_views': totals['total_views'] or 0,
            'total_likes': totals['total_likes'] or 0,
            'unread_messages': ContactSubmission.objects.filter(
                status=ContactSubmission.Status.UNREAD
            ).count(),
            'recent_messages': ContactMessageAdminSerializer(recent, many=True).data,
        })


class ProjectAdminViewSet(AdminViewMixin, ReorderMixin, viewsets.ModelViewSet):
    serializer_class = ProjectAdminSerializer
    queryset = Project.objects.all().order_by('order', '-created_at')

    def perform_destroy(self, instance):
        logger.info("Deleting project %s", instance.slug)
        instance.delete()


class BlogPostAdminViewSet(AdminViewMixin, viewsets.ModelViewSet):
    serializer_class = BlogPostAdminSerializer
    queryset = BlogPost.objects.all().order_by('-created_at')

    @action(detail=True, methods=['post'], url_path='status')
    def set_status(self, request, pk=None):
        post = self.get_object()
        serializer = PostStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        changes = apply_post_status({}, post, serializer.validated_data['status'])
        for field, value in changes.items():
            setattr(post, field, value)
        post.save(update_fields=[*changes, 'updated_at'])
        return Response(BlogPostAdminSerializer(post).data)

    @action(detail=False, methods=['get'])
    def tags(self, request):
        tags = set()
        for post_tags in BlogPost.objects.values_list('tags', flat=True):
            tags.update(post_tags or [])
        return Response(sorted(tags))


class SkillCategoryAdminViewSet(AdminViewMixin, ReorderMixin, viewsets.ModelViewSet):
    serializer_class = SkillCategoryAdminSerializer
    queryset = SkillCategory.objects.all()


class SkillAdminViewSet(AdminViewMixin, ReorderMixin, viewsets.ModelViewSet):
    serializer_class = SkillAdminSerializer

    def get_queryset(self):
        queryset = Skill.objects.select_related('category')
        category = self.request.query_params.get('category')
        if category:
            queryset = queryset.filter(category_id=category)
        return queryset


class MessageAdminViewSet(
    AdminViewMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Contact inbox.

    Query params: status=<UNREAD|READ|REPLIED|ARCHIVED|SPAM>
    """
    serializer_class = ContactMessageAdminSerializer
    pagination_class = AdminPagination

    def get_queryset(self):
        queryset = ContactSubmission.objects.order_by('-created_at')
        message_status = self.request.query_params.get('status')
        if message_status:
            queryset = queryset.filter(status=message_status)
        return queryset

    @action(detail=False, methods=['post'], url_path='bulk-status')
    def bulk_status(self, request):
        serializer = BulkMessageStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        changes = {'status': data['status']}
        if data['status'] == ContactSubmission.Status.REPLIED:
            changes['replied_at'] = timezone.now()
        updated = ContactSubmission.objects.filter(pk__in=data['ids']).update(**changes)
        return Response({'updated': updated})

    @action(detail=False, methods=['post'], url_path='bulk-delete')
    def bulk_delete(self, request):
        serializer = BulkIdsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        deleted, _ = ContactSubmission.objects.filter(pk__in=serializer.validated_data['ids']).delete()
        return Response({'deleted': deleted})


class SingletonAdminView(AdminViewMixin, views.APIView):
    """GET / PUT / PATCH on a one-row table."""
    model = None
    serializer_class = None

    def get(self, request):
        return Response(self.serializer_class(self.model.load()).data)

    def put(self, request):
        return self._update(request, partial=False)

    def patch(self, request):
        return self._update(request, partial=True)

    def _update(self, request, partial):
        serializer = self.serializer_class(self.model.load(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


class ProfileAdminView(SingletonAdminView):
    model = AuthorProfile
    serializer_class = AuthorProfileSerializer


class SiteSettingsAdminView(SingletonAdminView):
    model = SiteSettings
    serializer_class = SiteSettingsSerializer


class MediaAdminViewSet(
    AdminViewMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = MediaAssetSerializer
    queryset = MediaAsset.objects.all()
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    pagination_class = AdminPagination

    def perform_destroy(self, instance):
        # Remove the stored file along with the row
        instance.file.delete(save=False)
        instance.delete()

    def perform_create(self, serializer):
        asset = serializer.save()
        logger.info("Uploaded media %s (%s bytes)", asset.filename, asset.size)
