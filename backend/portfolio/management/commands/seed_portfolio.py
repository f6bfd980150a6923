"""
Seed the database with an admin account and default portfolio content.

Safe to run repeatedly: existing rows are updated, not duplicated.
"""
import os

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand
from django.db import transaction

from portfolio.models import AuthorProfile, SiteSettings, Skill, SkillCategory

SKILL_CATEGORIES = [
    {
        'name': 'Frontend',
        'icon': 'Monitor',
        'skills': [
            ('React', 95, 'react'),
            ('Next.js', 90, 'nextjs'),
            ('TypeScript', 90, 'typescript'),
            ('Tailwind CSS', 95, 'tailwind'),
        ],
    },
    {
        'name': 'Backend',
        'icon': 'Server',
        'skills': [
            ('Python', 90, 'python'),
            ('Django', 85, 'django'),
            ('PostgreSQL', 80, 'postgresql'),
            ('REST APIs', 90, 'api'),
        ],
    },
    {
        'name': 'Tools & DevOps',
        'icon': 'Wrench',
        'skills': [
            ('Git', 90, 'git'),
            ('Docker', 75, 'docker'),
            ('AWS', 70, 'aws'),
            ('Testing', 80, 'test'),
        ],
    },
]


class Command(BaseCommand):
    help = 'Create the admin user, site settings, author profile and skills'

    def add_arguments(self, parser):
        parser.add_argument('--admin-username', default='admin')
        parser.add_argument('--admin-email', default=os.environ.get('ADMIN_EMAIL', 'admin@portfolio.com'))
        parser.add_argument('--admin-password', default=os.environ.get('ADMIN_PASSWORD'))

    @transaction.atomic
    def handle(self, *args, **options):
        self._seed_admin(options)
        self._seed_site()
        self._seed_skills()
        self.stdout.write(self.style.SUCCESS('Seed complete'))

    def _seed_admin(self, options):
        admin, created = User.objects.get_or_create(
            username=options['admin_username'],
            defaults={'email': options['admin_email'], 'is_staff': True, 'is_superuser': True},
        )
        if created:
            password = options['admin_password']
            if password:
                admin.set_password(password)
            else:
                admin.set_unusable_password()
                self.stdout.write(self.style.WARNING(
                    'No --admin-password given; set one with `manage.py changepassword`'
                ))
            admin.save()
        self.stdout.write(f"Admin user: {admin.username} ({'created' if created else 'exists'})")

    def _seed_site(self):
        site = SiteSettings.load()
        if not site.site_title:
            site.site_title = 'Full-Stack Developer'
            site.site_description = 'A modern portfolio showcasing my work and skills'
            site.site_url = os.environ.get('SITE_URL', 'http://localhost:3000')
            site.keywords = ['developer', 'portfolio', 'full-stack']
            site.save()

        profile = AuthorProfile.load()
        if not profile.name:
            profile.name = 'John Doe'
            profile.role = 'Full-Stack Developer'
            profile.short_bio = 'Building the web, one component at a time.'
            profile.availability = 'Open for opportunities'
            profile.hero_roles = ['Full-Stack Developer', 'Problem Solver']
            profile.save()
        self.stdout.write('Site settings and author profile ready')

    def _seed_skills(self):
        for category_order, data in enumerate(SKILL_CATEGORIES):
            category, _ = SkillCategory.objects.update_or_create(
                name=data['name'],
                defaults={'icon': data['icon'], 'order': category_order},
            )
            for skill_order, (name, proficiency, icon) in enumerate(data['skills']):
                Skill.objects.update_or_create(
                    category=category,
                    name=name,
                    defaults={'proficiency': proficiency, 'icon': icon, 'order': skill_order},
                )
        self.stdout.write(f'{len(SKILL_CATEGORIES)} skill categories ready')
