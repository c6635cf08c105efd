"""
Seed the marketplace with its standard categories and, optionally, demo accounts.

Safe to run repeatedly: existing rows are left alone.

Usage:
    python manage.py seed_marketplace
    python manage.py seed_marketplace --demo
    python manage.py seed_marketplace --demo --password secret123
"""

from django.core.management.base import BaseCommand
from django.db import transaction

DEFAULT_CATEGORIES = [
    ('Plumbing', 'Water pipes, drainage, and fixtures'),
    ('Electrical', 'Wiring, installations, and repairs'),
    ('Carpentry', 'Wood work, furniture, and repairs'),
    ('Painting', 'Interior and exterior painting'),
    ('Cleaning', 'House and office cleaning services'),
    ('Gardening', 'Garden maintenance and landscaping'),
    ('Construction', 'Building and renovation work'),
]

DEMO_CLIENTS = [
    ('client@example.com', '+919876543210', 'Test Client', 'Test Company'),
    ('john@company.com', '+919876543211', 'John Doe', 'Tech Solutions'),
]

# phone, name, categories, hourly rate, city, approval status
DEMO_LABOUR = [
    ('+919876543220', 'Ravi Kumar', ['Plumbing', 'Electrical'], 150, 'Hubli', 'approved'),
    ('+919876543221', 'Suresh Patel', ['Carpentry'], 200, 'Dharwad', 'approved'),
    ('+919876543222', 'Amit Singh', ['Painting', 'Cleaning'], 120, 'Hubli', 'pending'),
    ('+919876543223', 'Prakash Joshi', ['Gardening', 'Construction'], 180, 'Dharwad', 'approved'),
]


class Command(BaseCommand):
    help = 'Create the default categories and optional demo users'

    def add_arguments(self, parser):
        parser.add_argument(
            '--demo',
            action='store_true',
            help='Also create an admin, two clients and four labour profiles'
        )
        parser.add_argument(
            '--password',
            type=str,
            default='labourhub123',
            help='Password for the demo accounts'
        )

    @transaction.atomic
    def handle(self, *args, **options):
        from catalog.models import Category

        self.stdout.write(self.style.MIGRATE_HEADING('Seeding LabourHub'))

        categories = {}
        for name, description in DEFAULT_CATEGORIES:
            category = Category.objects.filter(name__iexact=name).first()
            if category is None:
                category = Category.objects.create(name=name, description=description)
                self.stdout.write(f'  + category {name}')
            categories[name] = category

        if options['demo']:
            self._seed_demo(categories, options['password'])

        self.stdout.write(self.style.SUCCESS('Done.'))

    def _seed_demo(self, categories, password):
        from accounts.models import User
        from profiles.models import Client, Labour

        if not User.objects.filter(email='admin@labourhub.local').exists():
            User.objects.create_superuser(email='admin@labourhub.local', password=password)
            self.stdout.write('  + admin admin@labourhub.local')

        for email, phone, name, company in DEMO_CLIENTS:
            if User.objects.filter(email=email).exists():
                continue
            user = User.objects.create_user(
                email=email, phone=phone, password=password,
                role=User.Role.CLIENT, is_verified=True,
            )
            Client.objects.create(user=user, name=name, company=company)
            self.stdout.write(f'  + client {email}')

        for phone, name, category_names, rate, city, approval in DEMO_LABOUR:
            if User.objects.filter(phone=phone).exists():
                continue
            user = User.objects.create_user(
                phone=phone, password=password,
                role=User.Role.LABOUR, is_verified=True,
            )
            labour = Labour.objects.create(
                user=user, name=name, hourly_rate=rate, city=city, approval_status=approval,
            )
            labour.categories.set(categories[c] for c in category_names)
            self.stdout.write(f'  + labour {name} ({city}, {approval})')
