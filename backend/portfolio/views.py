"""
Public views for the Portfolio API.

Engagement endpoints:
1. Views: POST counts once per browser, remembered in the viewed_items cookie
2. Reactions: POST toggles; the first reaction mints the engagement_session cookie

Error handling:
- Unknown slug -> 404, bad reaction type -> 400
- Database failures -> logged with slug/session and answered with 500,
  never retried (counting is best-effort)
"""
import logging
import math

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address
from django.db import DatabaseError
from django.db.models import Prefetch
from django.utils.cache import patch_cache_control
from rest_framework import generics, status, views
from rest_framework.exceptions import Throttled
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from . import engagement
from .models import AuthorProfile, BlogPost, Project, Skill, SkillCategory
from .notifications import notify_new_contact_submission
from .serializers import (
    AuthorProfileSerializer, BlogPostDetailSerializer, BlogPostSerializer,
    ContactSubmissionSerializer, ProjectSerializer, ReactionSerializer,
    SkillCategorySerializer,
)

logger = logging.getLogger(__name__)

POST_NOT_FOUND = {'error': 'Post not found'}


def _public_cache(response):
    patch_cache_control(response, public=True, s_maxage=3600, stale_while_revalidate=86400)
    return response


def _positive_int(value):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _set_engagement_cookie(response, key, value, max_age):
    response.set_cookie(
        key,
        value,
        max_age=max_age,
        httponly=True,
        secure=settings.ENGAGEMENT_COOKIE_SECURE,
        samesite='Lax',
    )


class ProjectListView(generics.ListAPIView):
    """
    Published projects in display order.

    Query params: featured=true, limit=<n>
    """
    serializer_class = ProjectSerializer
    authentication_classes = []
    permission_classes = []

    def get_queryset(self):
        queryset = Project.objects.filter(status=Project.Status.PUBLISHED).order_by('order', '-created_at')
        if self.request.query_params.get('featured') == 'true':
            queryset = queryset.filter(featured=True)
        limit = _positive_int(self.request.query_params.get('limit'))
        if limit:
            queryset = queryset[:limit]
        return queryset

    def list(self, request, *args, **kwargs):
        return _public_cache(super().list(request, *args, **kwargs))


class BlogPostListView(generics.ListAPIView):
    """
    Published posts, newest first.

    Query params: tag=<tag> (case-insensitive), limit=<n>
    """
    serializer_class = BlogPostSerializer
    authentication_classes = []
    permission_classes = []

    def list(self, request, *args, **kwargs):
        posts = list(BlogPost.objects.filter(published=True).order_by('-published_at', '-created_at'))

        # Tags are a JSON list; filtering in Python keeps this portable across
        # SQLite and PostgreSQL.
        tag = request.query_params.get('tag')
        if tag:
            wanted = tag.lower()
            posts = [post for post in posts if wanted in (t.lower() for t in post.tags)]

        limit = _positive_int(request.query_params.get('limit'))
        if limit:
            posts = posts[:limit]

        serializer = self.get_serializer(posts, many=True)
        return _public_cache(Response(serializer.data))


class BlogPostDetailView(generics.RetrieveAPIView):
    serializer_class = BlogPostDetailSerializer
    authentication_classes = []
    permission_classes = []
    lookup_field = 'slug'

    def get_queryset(self):
        return BlogPost.objects.filter(published=True)


class SkillListView(views.APIView):
    """Visible skill categories with their visible skills, in one extra query."""
    authentication_classes = []
    permission_classes = []

    def get(self, request):
        categories = SkillCategory.objects.filter(visible=True).prefetch_related(
            Prefetch(
                'skills',
                queryset=Skill.objects.filter(visible=True).order_by('order', 'id'),
                to_attr='visible_skills',
            )
        )
        serializer = SkillCategorySerializer(categories, many=True)
        return _public_cache(Response(serializer.data))


class ProfileView(views.APIView):
    authentication_classes = []
    permission_classes = []

    def get(self, request):
        return Response(AuthorProfileSerializer(AuthorProfile.load()).data)


class BlogViewsView(views.APIView):
    """
    GET:  {views}
    POST: {views, alreadyViewed}; counts at most once per viewed_items cookie
    """
    authentication_classes = []
    permission_classes = []

    def get(self, request, slug):
        try:
            views_count = engagement.get_views(slug)
        except BlogPost.DoesNotExist:
            return Response(POST_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except DatabaseError:
            logger.exception("Error fetching views for %s", slug)
            return Response({'error': 'Failed to fetch views'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({'views': views_count})

    def post(self, request, slug):
        viewed = engagement.parse_viewed_items(request.COOKIES.get(engagement.VIEWED_COOKIE))
        try:
            result = engagement.record_view(slug, viewed)
        except BlogPost.DoesNotExist:
            return Response(POST_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except DatabaseError:
            logger.exception("Error incrementing views for %s", slug)
            return Response({'error': 'Failed to increment views'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        response = Response({'views': result.views, 'alreadyViewed': result.already_viewed})
        if result.viewed_items is not None:
            _set_engagement_cookie(
                response,
                engagement.VIEWED_COOKIE,
                engagement.serialize_viewed_items(result.viewed_items),
                engagement.VIEWED_COOKIE_MAX_AGE,
            )
        return response


class BlogReactionsView(views.APIView):
    """
    GET:  {totalLikes, reactions, userReactions}
    POST: {type} -> {action, totalLikes, reactions}
    """
    authentication_classes = []
    permission_classes = []

    def get(self, request, slug):
        session_id = engagement.clean_session_id(request.COOKIES.get(engagement.SESSION_COOKIE))
        try:
            summary = engagement.get_reactions(slug, session_id)
        except BlogPost.DoesNotExist:
            return Response(POST_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except DatabaseError:
            logger.exception("Error fetching reactions for %s (session %s)", slug, session_id)
            return Response({'error': 'Failed to fetch reactions'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({
            'totalLikes': summary.total_likes,
            'reactions': summary.counts,
            'userReactions': summary.user_reactions,
        })

    def post(self, request, slug):
        serializer = ReactionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Invalid reaction type', 'details': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        reaction_type = serializer.validated_data['type']

        session_id = engagement.clean_session_id(request.COOKIES.get(engagement.SESSION_COOKIE))
        is_new_session = session_id is None
        if is_new_session:
            session_id = engagement.new_session_id()

        try:
            result = engagement.toggle_reaction(slug, session_id, reaction_type)
        except BlogPost.DoesNotExist:
            return Response(POST_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except DatabaseError:
            logger.exception("Error handling %s reaction for %s (session %s)", reaction_type, slug, session_id)
            return Response({'error': 'Failed to handle reaction'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        response = Response({
            'action': result.action,
            'totalLikes': result.total_likes,
            'reactions': result.counts,
        })
        if is_new_session:
            _set_engagement_cookie(
                response, engagement.SESSION_COOKIE, session_id, engagement.SESSION_COOKIE_MAX_AGE
            )
        return response


class ContactView(views.APIView):
    """
    Contact form submission.

    Throttled per client IP by the `contact` scope (3/hour by default).
    """
    authentication_classes = []
    permission_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = 'contact'

    def post(self, request):
        serializer = ContactSubmissionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Validation failed', 'details': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        submission = serializer.save(ip_address=self.get_client_ip(request))
        notify_new_contact_submission(submission)

        return Response(
            {
                'success': True,
                'message': "Thank you for your message! I'll get back to you soon.",
            },
            status=status.HTTP_201_CREATED
        )

    def throttled(self, request, wait):
        logger.warning("Contact form throttled for %s", self.get_client_ip(request))
        super().throttled(request, wait)

    def handle_exception(self, exc):
        # Same {"error": ...} shape as the rest of the public API
        if isinstance(exc, Throttled):
            headers = {"Retry-After": str(math.ceil(exc.wait))} if exc.wait else None
            return Response(
                {"error": "Too many submissions. Please try again later."},
                status=status.HTTP_429_TOO_MANY_REQUESTS,
                headers=headers,
            )
        return super().handle_exception(exc)

    @staticmethod
    def get_client_ip(request):
        """First X-Forwarded-For hop, else REMOTE_ADDR; None if not an IP."""
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
        ip = forwarded.split(",")[0].strip() if forwarded else request.META.get("REMOTE_ADDR")
        try:
            validate_ipv46_address(ip)
        except ValidationError:
            return None
        return ip

