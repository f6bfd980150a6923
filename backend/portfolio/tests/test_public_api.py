"""
Tests for the public listing endpoints and the contact form.
"""
from datetime import timedelta

from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from portfolio.models import (
    AuthorProfile, BlogPost, ContactSubmission, Project, Skill, SkillCategory,
)


class ProjectListTest(APITestCase):
    def setUp(self):
        for order, (title, featured, project_status) in enumerate([
            ('Alpha', True, Project.Status.PUBLISHED),
            ('Beta', False, Project.Status.PUBLISHED),
            ('Gamma', True, Project.Status.DRAFT),
            ('Delta', True, Project.Status.PUBLISHED),
        ]):
            Project.objects.create(
                title=title, slug=title.lower(), description='d', image_url='/i.png',
                featured=featured, status=project_status, order=order,
            )

    def test_only_published_in_order(self):
        response = self.client.get('/api/projects/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['slug'] for p in response.json()], ['alpha', 'beta', 'delta'])
        self.assertIn('s-maxage=3600', response['Cache-Control'])
        self.assertIn('public', response['Cache-Control'])

    def test_featured_and_limit(self):
        response = self.client.get('/api/projects/', {'featured': 'true', 'limit': '1'})
        self.assertEqual([p['slug'] for p in response.json()], ['alpha'])

    def test_bad_limit_is_ignored(self):
        response = self.client.get('/api/projects/', {'limit': 'lots'})
        self.assertEqual(len(response.json()), 3)


class BlogListTest(APITestCase):
    def setUp(self):
        now = timezone.now()
        BlogPost.objects.create(
            title='Old', slug='old', excerpt='e', content='c', tags=['Django'],
            status=BlogPost.Status.PUBLISHED, published=True, published_at=now - timedelta(days=2),
        )
        BlogPost.objects.create(
            title='New', slug='new', excerpt='e', content='c', tags=['CSS', 'Frontend'],
            status=BlogPost.Status.PUBLISHED, published=True, published_at=now,
        )
        BlogPost.objects.create(title='Draft', slug='draft', excerpt='e', content='c', tags=['Django'])

    def test_published_newest_first(self):
        response = self.client.get('/api/blog/')

        self.assertEqual([p['slug'] for p in response.json()], ['new', 'old'])
        self.assertNotIn('content', response.json()[0])

    def test_tag_filter_is_case_insensitive(self):
        response = self.client.get('/api/blog/', {'tag': 'django'})
        self.assertEqual([p['slug'] for p in response.json()], ['old'])

    def test_limit(self):
        response = self.client.get('/api/blog/', {'limit': 1})
        self.assertEqual([p['slug'] for p in response.json()], ['new'])

    def test_detail_includes_content(self):
        response = self.client.get('/api/blog/new/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['content'], 'c')

    def test_draft_detail_is_404(self):
        response = self.client.get('/api/blog/draft/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class SkillsAndProfileTest(APITestCase):
    def test_hidden_skills_and_categories_are_excluded(self):
        frontend = SkillCategory.objects.create(name='Frontend', order=0)
        SkillCategory.objects.create(name='Secret', order=1, visible=False)
        Skill.objects.create(category=frontend, name='React', proficiency=90, order=1)
        Skill.objects.create(category=frontend, name='HTML', proficiency=99, order=0)
        Skill.objects.create(category=frontend, name='Flash', proficiency=10, visible=False)

        response = self.client.get('/api/skills/')

        data = response.json()
        self.assertEqual([c['name'] for c in data], ['Frontend'])
        self.assertEqual([s['name'] for s in data[0]['skills']], ['HTML', 'React'])

    def test_profile_is_a_singleton(self):
        profile = AuthorProfile.load()
        profile.name = 'Jane Doe'
        profile.hero_roles = ['Engineer']
        profile.save()

        response = self.client.get('/api/profile/')

        self.assertEqual(response.json()['name'], 'Jane Doe')
        self.assertEqual(AuthorProfile.objects.count(), 1)


class ContactFormTest(APITestCase):
    """
    Contact form validation, storage and per-IP throttling.
    """

    def setUp(self):
        # Throttle history lives in the cache
        cache.clear()
        self.payload = {
            'name': 'Ada',
            'email': 'ada@example.com',
            'subject': 'Hello',
            'message': 'I would like to work with you.',
        }

    def test_valid_submission_is_stored(self):
        with self.assertLogs('portfolio.notifications', level='INFO'):
            response = self.client.post('/api/contact/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.json()['success'])

        submission = ContactSubmission.objects.get()
        self.assertEqual(submission.status, ContactSubmission.Status.UNREAD)
        self.assertEqual(submission.ip_address, '127.0.0.1')

    def test_forwarded_ip_is_recorded(self):
        self.client.post(
            '/api/contact/', self.payload, format='json',
            HTTP_X_FORWARDED_FOR='203.0.113.9, 10.0.0.1',
        )
        self.assertEqual(ContactSubmission.objects.get().ip_address, '203.0.113.9')

    def test_validation_errors(self):
        payload = dict(self.payload, name='A', email='nope', message='short')

        response = self.client.post('/api/contact/', payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        details = response.json()['details']
        self.assertIn('name', details)
        self.assertIn('email', details)
        self.assertIn('message', details)
        self.assertFalse(ContactSubmission.objects.exists())

    def test_fourth_submission_within_the_hour_is_throttled(self):
        for _ in range(3):
            response = self.client.post('/api/contact/', self.payload, format='json')
            self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.post('/api/contact/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_429_TOO_MANY_REQUESTS)
        self.assertEqual(response.json(), {'error': 'Too many submissions. Please try again later.'})
        self.assertGreater(int(response['Retry-After']), 0)
        self.assertEqual(ContactSubmission.objects.count(), 3)
