"""
Models for the Portfolio application.

Design decisions:
1. Slugs are stored separately from primary keys and never reused as FKs
2. Reactions use a DB-level UniqueConstraint on (post, session_id, type)
3. BlogPost.views / BlogPost.likes are denormalized counters, only ever
   changed through F() expressions (see portfolio.engagement)
4. Profile and site settings are singletons addressed through load()

Performance considerations:
- Public listings filter on status/published, which are indexed
- Reaction aggregation groups by (post, type) and uses the composite index
"""
import math

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.text import slugify

WORDS_PER_MINUTE = 200


def reading_time_for(content):
    """Minutes needed to read `content` at 200 words per minute (at least 1)."""
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def unique_slug_taken(model, title, exclude_pk=None):
    """
    Return (slug, taken) for a title.

    Slug collisions are reported instead of suffixed: two items with the
    same title are treated as a mistake by the admin.
    """
    slug = slugify(title)
    queryset = model.objects.filter(slug=slug)
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)
    return slug, queryset.exists()


class Project(models.Model):
    """
    A portfolio project.

    Indexes:
    - (status, order): public listing of published projects
    """

    class Status(models.TextChoices):
        DRAFT = 'DRAFT', 'Draft'
        PUBLISHED = 'PUBLISHED', 'Published'
        ARCHIVED = 'ARCHIVED', 'Archived'

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField()
    long_description = models.TextField(blank=True, default='')
    image_url = models.CharField(max_length=500)
    technologies = models.JSONField(default=list, blank=True)
    github_url = models.URLField(blank=True, null=True)
    live_url = models.URLField(blank=True, null=True)
    featured = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    order = models.IntegerField(default=0)
    seo_title = models.CharField(max_length=200, blank=True, null=True)
    seo_description = models.CharField(max_length=300, blank=True, null=True)
    published_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['order', '-created_at']
        indexes = [
            models.Index(fields=['status', 'order'], name='project_status_order_idx'),
        ]

    def __str__(self):
        return self.title


class BlogPost(models.Model):
    """
    A blog post (the content item for views and reactions).

    `views` only grows. `likes` mirrors the number of BlogReaction rows with
    type=like and is moved in the same transaction that creates or deletes
    such a row.
    """

    class Status(models.TextChoices):
        DRAFT = 'DRAFT', 'Draft'
        PUBLISHED = 'PUBLISHED', 'Published'
        SCHEDULED = 'SCHEDULED', 'Scheduled'
        ARCHIVED = 'ARCHIVED', 'Archived'

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    excerpt = models.TextField()
    content = models.TextField()
    cover_image = models.CharField(max_length=500, blank=True, null=True)
    tags = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    published = models.BooleanField(default=False)
    published_at = models.DateTimeField(blank=True, null=True)
    reading_time = models.PositiveIntegerField(default=1)
    views = models.PositiveIntegerField(default=0)
    likes = models.PositiveIntegerField(default=0)
    seo_title = models.CharField(max_length=200, blank=True, null=True)
    seo_description = models.CharField(max_length=300, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-published_at', '-created_at']
        indexes = [
            models.Index(fields=['published', '-published_at'], name='blogpost_published_idx'),
        ]

    def __str__(self):
        return self.title


class BlogReaction(models.Model):
    """
    One reaction of one anonymous session to one post.

    CRITICAL: the unique constraint on (post, session_id, type) is what
    guarantees at most one reaction of each kind per session. The toggle
    logic checks for an existing row first, but two concurrent inserts are
    only stopped by the database.
    """

    class Type(models.TextChoices):
        LIKE = 'like', 'Like'
        LOVE = 'love', 'Love'
        FIRE = 'fire', 'Fire'
        CLAP = 'clap', 'Clap'

    post = models.ForeignKey(
        BlogPost,
        on_delete=models.CASCADE,
        related_name='reactions'
    )
    session_id = models.CharField(max_length=64)
    type = models.CharField(max_length=10, choices=Type.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['post', 'session_id', 'type'],
                name='unique_post_session_reaction'
            ),
        ]
        indexes = [
            models.Index(fields=['post', 'type'], name='reaction_post_type_idx'),
        ]

    def __str__(self):
        return f"{self.type} on {self.post_id} by {self.session_id[:8]}"


class SkillCategory(models.Model):
    name = models.CharField(max_length=100)
    icon = models.CharField(max_length=50, blank=True, null=True)
    order = models.IntegerField(default=0)
    visible = models.BooleanField(default=True)

    class Meta:
        ordering = ['order', 'id']
        verbose_name_plural = 'skill categories'

    def __str__(self):
        return self.name


class Skill(models.Model):
    category = models.ForeignKey(
        SkillCategory,
        on_delete=models.CASCADE,
        related_name='skills'
    )
    name = models.CharField(max_length=100)
    proficiency = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    icon = models.CharField(max_length=50, blank=True, null=True)
    order = models.IntegerField(default=0)
    visible = models.BooleanField(default=True)

    class Meta:
        ordering = ['order', 'id']

    def __str__(self):
        return f"{self.name} ({self.proficiency}%)"


class SingletonModel(models.Model):
    """Abstract base for tables that hold exactly one row (pk=1)."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        obj, _ = cls.objects.get_or_create(pk=1)
        return obj


class AuthorProfile(SingletonModel):
    name = models.CharField(max_length=100, default='')
    role = models.CharField(max_length=100, default='')
    bio = models.TextField(blank=True, default='')
    short_bio = models.CharField(max_length=300, blank=True, default='')
    location = models.CharField(max_length=100, blank=True, default='')
    email = models.EmailField(blank=True, default='')
    availability = models.CharField(max_length=100, blank=True, default='')
    hero_roles = models.JSONField(default=list, blank=True)
    avatar_url = models.CharField(max_length=500, blank=True, null=True)
    resume_url = models.CharField(max_length=500, blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name or 'Author profile'


class SiteSettings(SingletonModel):
    site_name = models.CharField(max_length=100, default='Portfolio')
    site_title = models.CharField(max_length=200, blank=True, default='')
    site_description = models.TextField(blank=True, default='')
    site_url = models.URLField(blank=True, default='')
    keywords = models.JSONField(default=list, blank=True)
    maintenance_mode = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = 'site settings'

    def __str__(self):
        return self.site_name


class ContactSubmission(models.Model):
    """
    A message sent through the public contact form.

    Indexes:
    - (status, -created_at): admin inbox filtered by status
    """

    class Status(models.TextChoices):
        UNREAD = 'UNREAD', 'Unread'
        READ = 'READ', 'Read'
        REPLIED = 'REPLIED', 'Replied'
        ARCHIVED = 'ARCHIVED', 'Archived'
        SPAM = 'SPAM', 'Spam'

    name = models.CharField(max_length=100)
    email = models.EmailField()
    subject = models.CharField(max_length=200, blank=True, default='')
    message = models.TextField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.UNREAD)
    notes = models.TextField(blank=True, default='')
    ip_address = models.GenericIPAddressField(blank=True, null=True)
    replied_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', '-created_at'], name='contact_status_created_idx'),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}>: {self.subject or '(no subject)'}"


class MediaAsset(models.Model):
    file = models.FileField(upload_to='uploads/%Y/%m/')
    filename = models.CharField(max_length=255)
    mime_type = models.CharField(max_length=100, blank=True, default='')
    size = models.PositiveBigIntegerField(default=0)
    alt_text = models.CharField(max_length=300, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.filename
