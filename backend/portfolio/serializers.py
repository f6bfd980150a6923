"""
Serializers for the Portfolio API.

Design decisions:
1. Public serializers are read-only and expose only published content
2. Admin serializers derive slug, reading time and publication fields;
   clients never write them directly
3. Engagement payloads (views/reactions) are plain dicts built in the views
"""
from django.db.models import Max
from django.utils import timezone
from rest_framework import serializers

from .models import (
    AuthorProfile, BlogPost, BlogReaction, ContactSubmission, MediaAsset,
    Project, SiteSettings, Skill, SkillCategory, reading_time_for,
    unique_slug_taken,
)


def _apply_title_slug(model, attrs, instance, label):
    """Derive the slug from a new or changed title and reject duplicates."""
    title = attrs.get('title')
    if title is None or (instance is not None and title == instance.title):
        return
    slug, taken = unique_slug_taken(model, title, exclude_pk=getattr(instance, 'pk', None))
    if not slug:
        raise serializers.ValidationError({'title': 'Title must contain letters or digits.'})
    if taken:
        raise serializers.ValidationError({'title': f'A {label} with this title already exists'})
    attrs['slug'] = slug


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

class ProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = [
            'id', 'title', 'slug', 'description', 'long_description',
            'image_url', 'technologies', 'github_url', 'live_url',
            'featured', 'order', 'published_at', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class BlogPostSerializer(serializers.ModelSerializer):
    """Listing representation: no body."""

    class Meta:
        model = BlogPost
        fields = [
            'id', 'title', 'slug', 'excerpt', 'cover_image', 'tags',
            'published_at', 'reading_time', 'views', 'likes',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class BlogPostDetailSerializer(BlogPostSerializer):
    class Meta(BlogPostSerializer.Meta):
        fields = BlogPostSerializer.Meta.fields + ['content', 'seo_title', 'seo_description']
        read_only_fields = fields


class SkillSerializer(serializers.ModelSerializer):
    class Meta:
        model = Skill
        fields = ['id', 'name', 'proficiency', 'icon', 'order']
        read_only_fields = fields


class SkillCategorySerializer(serializers.ModelSerializer):
    """
    Category with its visible skills.

    Expects `visible_skills` to be prefetched by the view.
    """
    skills = serializers.SerializerMethodField()

    class Meta:
        model = SkillCategory
        fields = ['id', 'name', 'icon', 'order', 'skills']
        read_only_fields = fields

    def get_skills(self, obj):
        skills = getattr(obj, 'visible_skills', None)
        if skills is None:
            skills = obj.skills.filter(visible=True)
        return SkillSerializer(skills, many=True).data


class AuthorProfileSerializer(serializers.ModelSerializer):
    hero_roles = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = AuthorProfile
        fields = [
            'name', 'role', 'bio', 'short_bio', 'location', 'email',
            'availability', 'hero_roles', 'avatar_url', 'resume_url', 'updated_at',
        ]
        read_only_fields = ['updated_at']


class SiteSettingsSerializer(serializers.ModelSerializer):
    keywords = serializers.ListField(child=serializers.CharField(max_length=50), required=False)

    class Meta:
        model = SiteSettings
        fields = [
            'site_name', 'site_title', 'site_description', 'site_url',
            'keywords', 'maintenance_mode', 'updated_at',
        ]
        read_only_fields = ['updated_at']


class ReactionSerializer(serializers.Serializer):
    type = serializers.ChoiceField(
        choices=BlogReaction.Type.choices,
        error_messages={'invalid_choice': 'Invalid reaction type'},
    )


class AdminLoginSerializer(serializers.Serializer):
    """Login form body; `username` may also be an email address."""
    username = serializers.CharField(max_length=254)
    password = serializers.CharField(max_length=128, trim_whitespace=False)


class ContactSubmissionSerializer(serializers.ModelSerializer):
    """Contact form input. Status, notes and IP are set server-side."""
    name = serializers.CharField(min_length=2, max_length=100)
    subject = serializers.CharField(max_length=200, required=False, allow_blank=True)
    message = serializers.CharField(min_length=10, max_length=5000)

    class Meta:
        model = ContactSubmission
        fields = ['name', 'email', 'subject', 'message']


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

class ProjectAdminSerializer(serializers.ModelSerializer):
    technologies = serializers.ListField(child=serializers.CharField(max_length=50), required=False)

    class Meta:
        model = Project
        fields = [
            'id', 'title', 'slug', 'description', 'long_description',
            'image_url', 'technologies', 'github_url', 'live_url', 'featured',
            'status', 'order', 'seo_title', 'seo_description',
            'published_at', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'slug', 'order', 'published_at', 'created_at', 'updated_at']

    def validate(self, attrs):
        _apply_title_slug(Project, attrs, self.instance, 'project')
        status = attrs.get('status')
        previous = self.instance.status if self.instance else None
        if status == Project.Status.PUBLISHED and previous != Project.Status.PUBLISHED:
            attrs['published_at'] = timezone.now()
        return attrs

    def create(self, validated_data):
        # New projects go to the end of the list
        max_order = Project.objects.aggregate(max_order=Max('order'))['max_order']
        validated_data['order'] = 0 if max_order is None else max_order + 1
        return super().create(validated_data)


class BlogPostAdminSerializer(serializers.ModelSerializer):
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)

    class Meta:
        model = BlogPost
        fields = [
            'id', 'title', 'slug', 'excerpt', 'content', 'cover_image', 'tags',
            'status', 'published', 'published_at', 'reading_time', 'views',
            'likes', 'seo_title', 'seo_description', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'slug', 'published', 'published_at', 'reading_time',
            'views', 'likes', 'created_at', 'updated_at',
        ]

    def validate(self, attrs):
        _apply_title_slug(BlogPost, attrs, self.instance, 'post')
        if 'content' in attrs:
            attrs['reading_time'] = reading_time_for(attrs['content'])
        if 'status' in attrs:
            apply_post_status(attrs, self.instance, attrs['status'])
        return attrs


def apply_post_status(attrs, instance, status):
    """`published` follows the status; the first publish stamps published_at."""
    attrs['status'] = status
    attrs['published'] = status == BlogPost.Status.PUBLISHED
    if attrs['published'] and not (instance and instance.published_at):
        attrs['published_at'] = timezone.now()
    return attrs


class PostStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BlogPost.Status.choices)


class SkillCategoryAdminSerializer(serializers.ModelSerializer):
    order = serializers.IntegerField(required=False)

    class Meta:
        model = SkillCategory
        fields = ['id', 'name', 'icon', 'order', 'visible']
        read_only_fields = ['id']

    def create(self, validated_data):
        if 'order' not in validated_data:
            max_order = SkillCategory.objects.aggregate(max_order=Max('order'))['max_order']
            validated_data['order'] = 0 if max_order is None else max_order + 1
        return super().create(validated_data)


class SkillAdminSerializer(serializers.ModelSerializer):
    order = serializers.IntegerField(required=False)

    class Meta:
        model = Skill
        fields = ['id', 'category', 'name', 'proficiency', 'icon', 'order', 'visible']
        read_only_fields = ['id']

    def create(self, validated_data):
        if 'order' not in validated_data:
            max_order = Skill.objects.filter(
                category=validated_data['category']
            ).aggregate(max_order=Max('order'))['max_order']
            validated_data['order'] = 0 if max_order is None else max_order + 1
        return super().create(validated_data)


class ContactMessageAdminSerializer(serializers.ModelSerializer):
    """Inbox view of a submission; only status and notes are editable."""

    class Meta:
        model = ContactSubmission
        fields = [
            'id', 'name', 'email', 'subject', 'message', 'status', 'notes',
            'ip_address', 'replied_at', 'created_at',
        ]
        read_only_fields = [
            'id', 'name', 'email', 'subject', 'message', 'ip_address',
            'replied_at', 'created_at',
        ]

    def validate(self, attrs):
        if attrs.get('status') == ContactSubmission.Status.REPLIED:
            attrs['replied_at'] = timezone.now()
        return attrs


class BulkIdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)


class BulkMessageStatusSerializer(BulkIdsSerializer):
    status = serializers.ChoiceField(choices=ContactSubmission.Status.choices)


class MediaAssetSerializer(serializers.ModelSerializer):
    url = serializers.SerializerMethodField()

    class Meta:
        model = MediaAsset
        fields = ['id', 'file', 'url', 'filename', 'mime_type', 'size', 'alt_text', 'created_at']
        read_only_fields = ['id', 'url', 'filename', 'mime_type', 'size', 'created_at']
        extra_kwargs = {'file': {'write_only': True}}

    def get_url(self, obj):
        return obj.file.url if obj.file else None

    def validate(self, attrs):
        upload = attrs.get('file')
        if upload is not None:
            attrs['filename'] = upload.name
            attrs['size'] = upload.size
            attrs['mime_type'] = getattr(upload, 'content_type', '') or ''
        elif self.instance is None:
            raise serializers.ValidationError({'file': 'No file was submitted.'})
        return attrs
