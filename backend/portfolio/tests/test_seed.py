from io import StringIO

from django.contrib.auth.models import User
from django.core.management import call_command
from django.test import TestCase

from portfolio.models import AuthorProfile, SiteSettings, Skill, SkillCategory


class SeedPortfolioTest(TestCase):
    def seed(self, **options):
        out = StringIO()
        call_command('seed_portfolio', stdout=out, **options)
        return out.getvalue()

    def test_seed_is_idempotent(self):
        self.seed(admin_password='s3cret-pass')
        output = self.seed(admin_password='ignored-the-second-time')

        self.assertIn('Seed complete', output)
        self.assertEqual(User.objects.count(), 1)
        self.assertEqual(SkillCategory.objects.count(), 3)
        self.assertEqual(Skill.objects.count(), 12)
        self.assertEqual(AuthorProfile.objects.count(), 1)
        self.assertEqual(SiteSettings.objects.count(), 1)

        admin = User.objects.get()
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.check_password('s3cret-pass'))

    def test_existing_profile_is_not_overwritten(self):
        profile = AuthorProfile.load()
        profile.name = 'Jane Doe'
        profile.save()

        self.seed(admin_password='s3cret-pass')

        self.assertEqual(AuthorProfile.load().name, 'Jane Doe')

    def test_missing_password_leaves_account_unusable(self):
        output = self.seed(admin_password=None)

        self.assertIn('No --admin-password given', output)
        self.assertFalse(User.objects.get().has_usable_password())
