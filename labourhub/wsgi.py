"""
WSGI config for the LabourHub project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'labourhub.settings')

application = get_wsgi_application()
